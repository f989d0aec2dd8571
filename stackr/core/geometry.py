# stackr/core/geometry.py
"""
Hit-testing over the layer stack.

Boxes are half-open ([x, x+w) × [y, y+h)) for layer containment; handle squares
are closed so a pointer exactly on a handle's outer edge still grabs it.
Text boxes are never cached: they are measured on every call, so a change of
text or font is picked up immediately.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Literal, Optional, Sequence, Tuple

from app_config import HANDLE_SIZE
from .layers import Layer, Rect, TextLayer, TextMeasurer, VideoLayer, estimate_text_width, measure_text

Handle = Literal["nw", "n", "ne", "e", "se", "s", "sw", "w"]
HANDLES: Tuple[Handle, ...] = ("nw", "n", "ne", "e", "se", "s", "sw", "w")

CURSORS: Dict[str, str] = {
    "nw": "nwse-resize",
    "n": "ns-resize",
    "ne": "nesw-resize",
    "e": "ew-resize",
    "se": "nwse-resize",
    "s": "ns-resize",
    "sw": "nesw-resize",
    "w": "ew-resize",
}
DEFAULT_CURSOR = "move"


def bounding_box(layer: Layer, measurer: TextMeasurer = estimate_text_width) -> Rect:
    if isinstance(layer, VideoLayer):
        return Rect(layer.x, layer.y, layer.width, layer.height)
    if isinstance(layer, TextLayer):
        w, h = measure_text(layer, measurer)
        return Rect(layer.x, layer.y, w, h)
    raise TypeError(f"unknown layer type: {type(layer).__name__}")


def contains_point(layer: Layer, x: float, y: float, measurer: TextMeasurer = estimate_text_width) -> bool:
    r = bounding_box(layer, measurer)
    return r.x <= x < r.right and r.y <= y < r.bottom


def by_z_descending(layers: Iterable[Layer]) -> List[Layer]:
    return sorted(layers, key=lambda l: l.z_index, reverse=True)


def layer_at(layers: Sequence[Layer], x: float, y: float,
             measurer: TextMeasurer = estimate_text_width) -> Optional[Layer]:
    """Topmost visible layer under the point, or None."""
    for layer in by_z_descending(layers):
        if layer.visible and contains_point(layer, x, y, measurer):
            return layer
    return None


def handle_anchor(rect: Rect, handle: Handle) -> Tuple[float, float]:
    cx = rect.x + rect.width / 2
    cy = rect.y + rect.height / 2
    return {
        "nw": (rect.x, rect.y),
        "n": (cx, rect.y),
        "ne": (rect.right, rect.y),
        "e": (rect.right, cy),
        "se": (rect.right, rect.bottom),
        "s": (cx, rect.bottom),
        "sw": (rect.x, rect.bottom),
        "w": (rect.x, cy),
    }[handle]


def handle_rects(layer: Layer) -> List[Tuple[Handle, Rect]]:
    """Handle squares for a video layer; text layers have none."""
    if not isinstance(layer, VideoLayer):
        return []
    box = Rect(layer.x, layer.y, layer.width, layer.height)
    half = HANDLE_SIZE / 2
    out = []
    for h in HANDLES:
        ax, ay = handle_anchor(box, h)
        out.append((h, Rect(ax - half, ay - half, HANDLE_SIZE, HANDLE_SIZE)))
    return out


def handle_at(layer: Layer, x: float, y: float) -> Optional[Handle]:
    for h, r in handle_rects(layer):
        if r.x <= x <= r.right and r.y <= y <= r.bottom:
            return h
    return None


def find_layer(layers: Sequence[Layer], layer_id: Optional[str]) -> Optional[Layer]:
    if layer_id is None:
        return None
    for layer in layers:
        if layer.id == layer_id:
            return layer
    return None


def selected_handle_at(layers: Sequence[Layer], selected_id: Optional[str],
                       x: float, y: float) -> Optional[Handle]:
    """Handles only react on the selected layer, and only while it is shown."""
    layer = find_layer(layers, selected_id)
    if layer is None or not layer.visible:
        return None
    return handle_at(layer, x, y)


def cursor_for_point(layers: Sequence[Layer], selected_id: Optional[str], x: float, y: float) -> str:
    h = selected_handle_at(layers, selected_id, x, y)
    return CURSORS[h] if h else DEFAULT_CURSOR
