# stackr/ui/canvas_view.py
from __future__ import annotations
from typing import Dict, Optional, Tuple

from stackr.qt import QtCore, QtGui, QtWidgets
from stackr.core.document import ComposerState
from stackr.core.geometry import bounding_box, handle_rects
from stackr.core.layers import TEXT_PADDING, TEXT_PLACEHOLDER, TextLayer, VideoLayer
from stackr.core.logging import get_logger
from stackr.ui.theme import Theme
from stackr.ui.controller import ComposerController

_CURSORS: Dict[str, QtCore.Qt.CursorShape] = {
    "nwse-resize": QtCore.Qt.SizeFDiagCursor,
    "nesw-resize": QtCore.Qt.SizeBDiagCursor,
    "ns-resize": QtCore.Qt.SizeVerCursor,
    "ew-resize": QtCore.Qt.SizeHorCursor,
    "move": QtCore.Qt.SizeAllCursor,
}


def layer_font(family: str, size_px: float, bold: bool, italic: bool) -> QtGui.QFont:
    f = QtGui.QFont(family)
    f.setPixelSize(max(1, int(round(size_px))))
    f.setBold(bold)
    f.setItalic(italic)
    return f


def qt_text_width(text: str, font_size: float, font_family: str, bold: bool, italic: bool) -> float:
    """TextMeasurer backed by the platform's font metrics."""
    fm = QtGui.QFontMetricsF(layer_font(font_family, font_size, bold, italic))
    return fm.horizontalAdvance(text)


class CanvasView(QtWidgets.QWidget):
    """
    Paints the layout and turns mouse events into canvas-space pointer events.
    The logical canvas is letterboxed into the widget; all coordinates passed
    to the controller are logical canvas pixels.
    """
    def __init__(self, controller: ComposerController, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._log = get_logger(__name__)
        self.controller = controller
        self.controller.measurer = qt_text_width
        self._template: Optional[QtGui.QImage] = None
        self.setMinimumSize(240, 320)
        self.setMouseTracking(True)
        self.setAutoFillBackground(False)
        controller.stateChanged.connect(self._on_state)

    # Template image is owned by the view; the core only knows its path and size
    def set_template_image(self, image: Optional[QtGui.QImage]) -> None:
        self._template = image
        self.update()

    @QtCore.Slot(object)
    def _on_state(self, _state: ComposerState) -> None:
        self.update()

    # ──────────────────────────────────────────────────────────────────────────
    # Coordinate mapping
    # ──────────────────────────────────────────────────────────────────────────
    def _canvas_rect(self) -> Tuple[QtCore.QRectF, float]:
        canvas = self.controller.state.canvas
        scale = min(self.width() / canvas.width, self.height() / canvas.height)
        w, h = canvas.width * scale, canvas.height * scale
        x = (self.width() - w) / 2
        y = (self.height() - h) / 2
        return QtCore.QRectF(x, y, w, h), scale

    def _to_canvas(self, pos: QtCore.QPointF) -> Tuple[float, float]:
        rect, scale = self._canvas_rect()
        if scale <= 0:
            return 0.0, 0.0
        return (pos.x() - rect.x()) / scale, (pos.y() - rect.y()) / scale

    # ──────────────────────────────────────────────────────────────────────────
    # Mouse
    # ──────────────────────────────────────────────────────────────────────────
    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if e.button() != QtCore.Qt.LeftButton:
            super().mousePressEvent(e)
            return
        x, y = self._to_canvas(e.position())
        self.controller.pointer_down(x, y)
        self._update_cursor(x, y)
        e.accept()

    def mouseMoveEvent(self, e: QtGui.QMouseEvent) -> None:
        x, y = self._to_canvas(e.position())
        self.controller.pointer_move(x, y)
        self._update_cursor(x, y)
        e.accept()

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        self.controller.pointer_up()
        e.accept()

    def leaveEvent(self, e: QtCore.QEvent) -> None:
        self.controller.pointer_leave()
        self.unsetCursor()
        super().leaveEvent(e)

    def _update_cursor(self, x: float, y: float) -> None:
        hint = self.controller.cursor_hint(x, y)
        self.setCursor(_CURSORS.get(hint, QtCore.Qt.ArrowCursor))

    # ──────────────────────────────────────────────────────────────────────────
    # Painting
    # ──────────────────────────────────────────────────────────────────────────
    def paintEvent(self, ev: QtGui.QPaintEvent) -> None:
        state = self.controller.state
        p = QtGui.QPainter(self)
        p.setRenderHint(QtGui.QPainter.Antialiasing, True)
        p.fillRect(self.rect(), Theme.bg)

        rect, scale = self._canvas_rect()
        p.translate(rect.x(), rect.y())
        p.scale(scale, scale)
        cw, ch = state.canvas.width, state.canvas.height
        p.fillRect(QtCore.QRectF(0, 0, cw, ch), Theme.canvas_bg)
        p.setClipRect(QtCore.QRectF(0, 0, cw, ch))

        if state.show_grid:
            self._paint_grid(p, state)

        for layer in sorted(state.layers, key=lambda l: l.z_index):
            if not layer.visible:
                continue
            selected = layer.id == state.selected_id
            if isinstance(layer, VideoLayer):
                self._paint_video(p, layer, selected)
            elif isinstance(layer, TextLayer):
                self._paint_text(p, layer, selected)

        if self._template is not None and state.template_present:
            p.setOpacity(state.template_opacity)
            p.drawImage(QtCore.QRectF(0, 0, cw, ch), self._template)
            p.setOpacity(1.0)
        p.end()

    def _paint_grid(self, p: QtGui.QPainter, state: ComposerState) -> None:
        step = float(state.grid_size)
        p.setPen(QtGui.QPen(Theme.grid_line, 0))
        x = 0.0
        while x <= state.canvas.width:
            p.drawLine(QtCore.QPointF(x, 0), QtCore.QPointF(x, state.canvas.height))
            x += step
        y = 0.0
        while y <= state.canvas.height:
            p.drawLine(QtCore.QPointF(0, y), QtCore.QPointF(state.canvas.width, y))
            y += step

    def _paint_video(self, p: QtGui.QPainter, layer: VideoLayer, selected: bool) -> None:
        r = QtCore.QRectF(layer.x, layer.y, layer.width, layer.height)
        grad = QtGui.QLinearGradient(r.topLeft(), r.bottomLeft())
        grad.setColorAt(0.0, Theme.video_top)
        grad.setColorAt(1.0, Theme.video_bottom)
        p.fillRect(r, grad)

        if selected:
            p.setPen(QtGui.QPen(Theme.selection, 3))
            p.drawRect(r)
            p.setPen(QtCore.Qt.NoPen)
            for _h, hr in handle_rects(layer):
                p.fillRect(QtCore.QRectF(hr.x, hr.y, hr.width, hr.height), Theme.selection)
        else:
            p.setPen(QtGui.QPen(Theme.layer_edge, 1))
            p.drawRect(r)

        p.setPen(QtGui.QColor("#ffffff"))
        f = p.font()
        f.setPixelSize(14)
        f.setBold(True)
        p.setFont(f)
        name_r = r.adjusted(0, 0, 0, -24)
        p.drawText(name_r, QtCore.Qt.AlignCenter, layer.name)
        f.setPixelSize(12)
        f.setBold(False)
        p.setFont(f)
        label = f"{round(layer.width)}×{round(layer.height)}"
        if layer.aspect_locked:
            label += "  (locked)"
        p.drawText(r.adjusted(0, 16, 0, 0), QtCore.Qt.AlignCenter, label)

    def _paint_text(self, p: QtGui.QPainter, layer: TextLayer, selected: bool) -> None:
        box = bounding_box(layer, self.controller.measurer)
        font = layer_font(layer.font_family, layer.font_size, layer.bold, layer.italic)
        p.setFont(font)
        p.setPen(QtGui.QColor(layer.color))
        baseline = layer.y + (box.height - layer.font_size) / 2 + QtGui.QFontMetricsF(font).ascent()
        p.drawText(QtCore.QPointF(layer.x + TEXT_PADDING / 2, baseline), layer.text or TEXT_PLACEHOLDER)

        r = QtCore.QRectF(box.x, box.y, box.width, box.height)
        pen = QtGui.QPen(Theme.selection if selected else Theme.layer_edge, 2 if selected else 1)
        pen.setStyle(QtCore.Qt.DashLine)
        p.setPen(pen)
        p.setBrush(QtCore.Qt.NoBrush)
        p.drawRect(r)
