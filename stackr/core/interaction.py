# stackr/core/interaction.py
"""
Pointer events → state transitions.

    Idle --press on selected video handle--> Resizing
    Idle --press on a visible layer-------> Dragging (selects it)
    Idle --press on empty canvas----------> Idle (clears selection)
    Dragging/Resizing --move--> same mode, layer updated in place
    Dragging/Resizing --release/leave--> Idle

Coordinates are logical canvas pixels; the caller rescales from widget space.
"""
from __future__ import annotations
from dataclasses import replace

from stackr.core.logging import get_logger
from .document import IDLE, ComposerState, Dragging, Idle, Resizing, replace_layer
from .geometry import CURSORS, DEFAULT_CURSOR, bounding_box, cursor_for_point, find_layer, layer_at, selected_handle_at
from .layers import Rect, TextMeasurer, VideoLayer, estimate_text_width
from .transform import drag_position, resize_rect

log = get_logger(__name__)


def pointer_down(state: ComposerState, x: float, y: float,
                 measurer: TextMeasurer = estimate_text_width) -> ComposerState:
    selected = state.selected
    if isinstance(selected, VideoLayer):
        handle = selected_handle_at(state.layers, selected.id, x, y)
        if handle:
            anchor = Rect(selected.x, selected.y, selected.width, selected.height)
            return replace(state, interaction=Resizing(selected.id, handle, anchor, (x, y)))

    hit = layer_at(state.layers, x, y, measurer)
    if hit is None:
        return replace(state, selected_id=None, interaction=IDLE)
    return replace(state, selected_id=hit.id, interaction=Dragging(hit.id, (x - hit.x, y - hit.y)))


def pointer_move(state: ComposerState, x: float, y: float,
                 measurer: TextMeasurer = estimate_text_width) -> ComposerState:
    mode = state.interaction
    if isinstance(mode, Idle):
        return state

    layer = find_layer(state.layers, mode.layer_id)
    if layer is None:
        log.debug("pointer_move: layer %s is gone", mode.layer_id)
        return state
    snap = state.snapper()

    if isinstance(mode, Resizing):
        if not isinstance(layer, VideoLayer):
            return state
        dx = x - mode.pointer_anchor[0]
        dy = y - mode.pointer_anchor[1]
        r = resize_rect(mode.handle, mode.anchor, dx, dy, state.canvas,
                        layer.aspect_locked, layer.aspect_ratio, snap)
        return replace_layer(state, replace(layer, x=r.x, y=r.y, width=r.width, height=r.height))

    box = bounding_box(layer, measurer)
    nx, ny = drag_position((x, y), mode.grab_offset, box.width, box.height, state.canvas, snap)
    return replace_layer(state, replace(layer, x=nx, y=ny))


def pointer_up(state: ComposerState) -> ComposerState:
    if isinstance(state.interaction, Idle):
        return state
    return replace(state, interaction=IDLE)


# Leaving the canvas ends a gesture exactly like a release
pointer_leave = pointer_up


def cursor_hint(state: ComposerState, x: float, y: float) -> str:
    mode = state.interaction
    if isinstance(mode, Resizing):
        return CURSORS[mode.handle]
    if isinstance(mode, Dragging):
        return DEFAULT_CURSOR
    return cursor_for_point(state.layers, state.selected_id, x, y)
