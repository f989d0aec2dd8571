# stackr/ui/theme.py
from stackr.qt import QtGui, QtWidgets

HANDLE_COLOR = QtGui.QColor("#f59e0b")


class Theme:
    bg          = QtGui.QColor("#1f2124")
    panel       = QtGui.QColor("#26292e")
    panel_alt   = QtGui.QColor("#2c3036")
    stroke      = QtGui.QColor("#3a3f46")
    text        = QtGui.QColor("#d6d7d9")
    text_dim    = QtGui.QColor("#aab0b7")
    accent      = QtGui.QColor("#3fb6ff")
    accent_dim  = QtGui.QColor("#2a90cc")
    success     = QtGui.QColor("#4caf50")
    icon_idle   = QtGui.QColor("#bfc5cc")
    danger      = QtGui.QColor("#e57373")

    canvas_bg   = QtGui.QColor("#f5f5f5")
    grid_line   = QtGui.QColor(0, 0, 0, 20)
    layer_edge  = QtGui.QColor("#d4d4d8")
    video_top   = QtGui.QColor("#8b5cf6")
    video_bottom = QtGui.QColor("#6d28d9")
    selection   = HANDLE_COLOR


def qcolor_hex(c: QtGui.QColor) -> str:
    return c.name(QtGui.QColor.HexRgb)


def apply_fusion_theme(app: QtWidgets.QApplication) -> None:
    app.setStyle("Fusion")
    pal = QtGui.QPalette()
    pal.setColor(QtGui.QPalette.Window, Theme.bg)
    pal.setColor(QtGui.QPalette.Base, Theme.panel)
    pal.setColor(QtGui.QPalette.AlternateBase, Theme.panel_alt)
    pal.setColor(QtGui.QPalette.Text, Theme.text)
    pal.setColor(QtGui.QPalette.WindowText, Theme.text)
    pal.setColor(QtGui.QPalette.ButtonText, Theme.text)
    pal.setColor(QtGui.QPalette.Button, Theme.panel)
    pal.setColor(QtGui.QPalette.ToolTipBase, Theme.panel)
    pal.setColor(QtGui.QPalette.ToolTipText, Theme.text)
    pal.setColor(QtGui.QPalette.Highlight, Theme.accent)
    pal.setColor(QtGui.QPalette.HighlightedText, QtGui.QColor("#0c0d0e"))
    app.setPalette(pal)
