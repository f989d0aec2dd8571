# stackr/ui/command_panel.py
from __future__ import annotations

import qtawesome as qta

from stackr.qt import QtCore, QtGui, QtWidgets
from stackr.core.logging import get_logger
from stackr.ui.controller import ComposerController
from stackr.ui.theme import Theme


class CommandPanel(QtWidgets.QWidget):
    """Generate / copy / download for the compiled ffmpeg command."""
    downloadRequested = QtCore.Signal()

    def __init__(self, controller: ComposerController, parent=None):
        super().__init__(parent)
        self._log = get_logger(__name__)
        self.controller = controller
        col = Theme.icon_idle.name()

        self.generate_btn = QtWidgets.QPushButton(qta.icon("fa5s.play", color=col), "Generate")
        self.copy_btn = QtWidgets.QPushButton(qta.icon("fa5s.copy", color=col), "Copy")
        self.download_btn = QtWidgets.QPushButton(qta.icon("fa5s.download", color=col), "Download")
        self.copy_btn.setEnabled(False)
        self.download_btn.setEnabled(False)

        self.view = QtWidgets.QPlainTextEdit()
        self.view.setReadOnly(True)
        self.view.setPlaceholderText("Press Generate to build the ffmpeg command")
        mono = QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.FixedFont)
        self.view.setFont(mono)

        row = QtWidgets.QHBoxLayout()
        row.addWidget(self.generate_btn)
        row.addStretch(1)
        row.addWidget(self.copy_btn)
        row.addWidget(self.download_btn)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.addLayout(row)
        layout.addWidget(self.view, 1)

        self.generate_btn.clicked.connect(controller.generate)
        self.copy_btn.clicked.connect(self._copy)
        self.download_btn.clicked.connect(self.downloadRequested)
        controller.commandChanged.connect(self._on_command)
        controller.copiedChanged.connect(self._on_copied)

    @QtCore.Slot(str)
    def _on_command(self, text: str) -> None:
        self.view.setPlainText(text)
        has = bool(text)
        self.copy_btn.setEnabled(has)
        self.download_btn.setEnabled(has)

    def _copy(self) -> None:
        cb = QtGui.QGuiApplication.clipboard()
        if cb is None:
            self._log.warning("No clipboard available")
            return
        cb.setText(self.controller.command)
        self.controller.mark_copied()

    @QtCore.Slot(bool)
    def _on_copied(self, copied: bool) -> None:
        col = Theme.success.name() if copied else Theme.icon_idle.name()
        self.copy_btn.setIcon(qta.icon("fa5s.check" if copied else "fa5s.copy", color=col))
        self.copy_btn.setText("Copied" if copied else "Copy")
