# stackr/ui/controller.py
from __future__ import annotations
from typing import Any, Callable, Optional

from stackr.qt import QtCore
from stackr.core.logging import get_logger
from stackr.core import document as doc
from stackr.core import interaction
from stackr.core.document import ComposerState
from stackr.core.export import CopyAcknowledgement, DownloadPayload, download_payload
from stackr.core.ffmpeg_command import compile_command
from stackr.core.layers import TextMeasurer, estimate_text_width


class ComposerController(QtCore.QObject):
    """
    Owns the current ComposerState. Every user action runs a reducer and
    publishes the new state; views never mutate layers themselves.
    """
    stateChanged = QtCore.Signal(object)       # ComposerState
    selectionChanged = QtCore.Signal(object)   # Optional[str]
    commandChanged = QtCore.Signal(str)
    copiedChanged = QtCore.Signal(bool)

    def __init__(self, state: Optional[ComposerState] = None, parent=None):
        super().__init__(parent)
        self._log = get_logger(__name__)
        self.state = state or ComposerState()
        self.command: str = ""
        self.measurer: TextMeasurer = estimate_text_width
        self.copy_ack = CopyAcknowledgement()
        self._copied_timer = QtCore.QTimer(self)
        self._copied_timer.setSingleShot(True)
        self._copied_timer.setTimerType(QtCore.Qt.PreciseTimer)
        self._copied_timer.timeout.connect(self._expire_copied)

    # State plumbing
    def _apply(self, fn: Callable[..., ComposerState], *args: Any, **kwargs: Any) -> None:
        before = self.state
        after = fn(before, *args, **kwargs)
        if after == before:
            return
        self.state = after
        self.stateChanged.emit(after)
        if after.selected_id != before.selected_id:
            self.selectionChanged.emit(after.selected_id)

    # Layers
    def add_video(self) -> None:
        self._apply(doc.add_video_layer)

    def add_text(self) -> None:
        self._apply(doc.add_text_layer)

    def update_layer(self, layer_id: str, **changes: Any) -> None:
        self._apply(doc.update_layer, layer_id, **changes)

    def update_field(self, layer_id: str, name: str, raw: Any) -> None:
        """Property-panel edit: raw widget text goes through the fallback parser."""
        self._apply(doc.update_layer, layer_id, **{name: doc.parse_field(name, raw)})

    def duplicate(self, layer_id: str) -> None:
        self._apply(doc.duplicate_layer, layer_id)

    def remove(self, layer_id: str) -> None:
        self._apply(doc.remove_layer, layer_id)

    def reset(self, layer_id: str) -> None:
        self._apply(doc.reset_layer, layer_id)

    def move_up(self, layer_id: str) -> None:
        self._apply(doc.move_layer_up, layer_id)

    def move_down(self, layer_id: str) -> None:
        self._apply(doc.move_layer_down, layer_id)

    def select(self, layer_id: Optional[str]) -> None:
        self._apply(doc.select_layer, layer_id)

    # Canvas / template / grid
    def load_template(self, path: str, width: int, height: int) -> None:
        self._apply(doc.load_template, path, width, height)

    def clear_template(self) -> None:
        self._apply(doc.clear_template)

    def reset_canvas(self) -> None:
        self._apply(doc.reset_canvas)

    def set_template_opacity(self, value: float) -> None:
        self._apply(doc.set_template_opacity, value)

    def set_show_grid(self, show: bool) -> None:
        self._apply(doc.set_show_grid, show)

    def set_snap_to_grid(self, enabled: bool) -> None:
        self._apply(doc.set_snap_to_grid, enabled)

    def set_grid_size(self, raw: Any) -> None:
        self._apply(doc.set_grid_size, raw)

    # Pointer events (canvas coordinates)
    def pointer_down(self, x: float, y: float) -> None:
        self._apply(interaction.pointer_down, x, y, self.measurer)

    def pointer_move(self, x: float, y: float) -> None:
        self._apply(interaction.pointer_move, x, y, self.measurer)

    def pointer_up(self) -> None:
        self._apply(interaction.pointer_up)

    def pointer_leave(self) -> None:
        self._apply(interaction.pointer_leave)

    def cursor_hint(self, x: float, y: float) -> str:
        return interaction.cursor_hint(self.state, x, y)

    # Command / export
    def generate(self) -> str:
        s = self.state
        self.command = compile_command(s.layers, s.canvas, s.template_present)
        self.commandChanged.emit(self.command)
        return self.command

    def mark_copied(self) -> None:
        self.copy_ack.mark()
        self.copiedChanged.emit(True)
        # Restarting drops any pending expiry from an earlier copy
        self._copied_timer.start(self.copy_ack.reset_ms)

    def _expire_copied(self) -> None:
        self.copy_ack.clear()
        self.copiedChanged.emit(False)

    def download(self) -> DownloadPayload:
        return download_payload(self.command)
