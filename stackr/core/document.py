# stackr/core/document.py
"""
Application state for one editing session and the reducers that change it.

ComposerState is immutable; every operation here takes a state and returns a
new one. Unknown layer ids (e.g. a stale selection after a delete) are not
errors: the reducer logs and hands back the state it was given.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple, Union

from app_config import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FONT_SIZE,
    DEFAULT_GRID_SIZE,
    DEFAULTS,
    DUPLICATE_BOUND,
    DUPLICATE_OFFSET,
    MIN_FONT_SIZE,
    MIN_GRID_SIZE,
    MIN_SIZE,
)
from stackr.core.logging import get_logger
from .geometry import Handle, find_layer
from .layers import CanvasSize, Layer, Rect, TextLayer, VideoLayer, clamp_size, valid_font_family
from .snapping import Snapper, clamp, round_half_up
from .zorder import lower_layer, next_z, raise_layer

log = get_logger(__name__)


# ──────────────────────────────────────────────────────────────────────────────
# Interaction modes
# ──────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Dragging:
    layer_id: str
    grab_offset: Tuple[float, float]  # pointer minus layer origin at press


@dataclass(frozen=True)
class Resizing:
    layer_id: str
    handle: Handle
    anchor: Rect                          # geometry at press
    pointer_anchor: Tuple[float, float]   # pointer at press


Interaction = Union[Idle, Dragging, Resizing]
IDLE = Idle()


@dataclass(frozen=True)
class ComposerState:
    layers: Tuple[Layer, ...] = ()
    selected_id: Optional[str] = None
    interaction: Interaction = IDLE
    canvas: CanvasSize = field(default_factory=CanvasSize)
    template_path: Optional[str] = None
    template_opacity: float = DEFAULTS["canvas"]["template_opacity"]
    show_grid: bool = DEFAULTS["canvas"]["show_grid"]
    snap_to_grid: bool = DEFAULTS["canvas"]["snap_to_grid"]
    grid_size: float = DEFAULT_GRID_SIZE
    id_counter: int = 0

    @property
    def template_present(self) -> bool:
        return self.template_path is not None

    @property
    def selected(self) -> Optional[Layer]:
        return find_layer(self.layers, self.selected_id)

    def snapper(self) -> Snapper:
        return Snapper(self.snap_to_grid, self.grid_size)


# ──────────────────────────────────────────────────────────────────────────────
# Field input
# ──────────────────────────────────────────────────────────────────────────────
def coerce_number(raw: Any, default: float) -> float:
    """Parse user input as a number; anything unusable becomes `default`."""
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return default
    if math.isnan(value) or math.isinf(value):
        return default
    return value


_NUMERIC_FALLBACKS: Dict[str, float] = {
    "x": 0.0,
    "y": 0.0,
}


def parse_field(name: str, raw: Any) -> Any:
    """Turn a property-panel value into a layer field value with safe defaults."""
    if name in ("width", "height"):
        return max(MIN_SIZE, coerce_number(raw, MIN_SIZE))
    if name == "font_size":
        return max(MIN_FONT_SIZE, coerce_number(raw, DEFAULT_FONT_SIZE))
    if name in _NUMERIC_FALLBACKS:
        return coerce_number(raw, _NUMERIC_FALLBACKS[name])
    return raw


# ──────────────────────────────────────────────────────────────────────────────
# Layer helpers
# ──────────────────────────────────────────────────────────────────────────────
def replace_layer(state: ComposerState, layer: Layer) -> ComposerState:
    layers = tuple(layer if l.id == layer.id else l for l in state.layers)
    return replace(state, layers=layers)


def _alloc_id(state: ComposerState, kind: str) -> Tuple[str, ComposerState]:
    n = state.id_counter + 1
    return f"{kind}-{n}", replace(state, id_counter=n)


def _append(state: ComposerState, layer: Layer) -> ComposerState:
    return replace(state, layers=state.layers + (layer,), selected_id=layer.id)


def _field_names(layer: Layer) -> set:
    return {f.name for f in fields(layer)} - {"id", "type"}


# ──────────────────────────────────────────────────────────────────────────────
# Layer lifecycle
# ──────────────────────────────────────────────────────────────────────────────
def add_video_layer(state: ComposerState) -> ComposerState:
    snap = state.snapper()
    d = DEFAULTS["video"]
    count = sum(1 for l in state.layers if isinstance(l, VideoLayer))
    stagger = (len(state.layers) % 3) * 30
    layer_id, state = _alloc_id(state, "video")
    layer = VideoLayer(
        id=layer_id,
        name=f"Video {count + 1}",
        x=snap(d["x"] + stagger),
        y=snap(d["y"] + stagger),
        width=d["width"],
        height=d["height"],
        z_index=next_z(state.layers),
    )
    log.info("Added %s (%s)", layer.name, layer.id)
    return _append(state, layer)


def add_text_layer(state: ComposerState) -> ComposerState:
    snap = state.snapper()
    d = DEFAULTS["text"]
    count = sum(1 for l in state.layers if isinstance(l, TextLayer))
    layer_id, state = _alloc_id(state, "text")
    layer = TextLayer(
        id=layer_id,
        name=f"Text {count + 1}",
        text=d["text"],
        font_size=d["font_size"],
        font_family=d["font_family"],
        color=d["color"],
        x=snap(d["x"]),
        y=snap(d["y"] + count * d["row_spacing"]),
        z_index=next_z(state.layers),
    )
    log.info("Added %s (%s)", layer.name, layer.id)
    return _append(state, layer)


def update_layer(state: ComposerState, layer_id: str, **changes: Any) -> ComposerState:
    """
    Apply field changes to one layer. Fields that do not exist on the layer's
    variant are dropped. For a video layer with the aspect lock on, changing
    only one of width/height derives the other; turning the lock on captures
    the current width/height ratio.
    """
    layer = find_layer(state.layers, layer_id)
    if layer is None:
        log.debug("update_layer: no layer %s", layer_id)
        return state

    allowed = _field_names(layer)
    changes = {k: v for k, v in changes.items() if k in allowed}
    if not changes:
        return state

    if isinstance(layer, VideoLayer):
        if "width" in changes:
            changes["width"] = clamp_size(changes["width"])
        if "height" in changes:
            changes["height"] = clamp_size(changes["height"])
        if layer.aspect_locked and layer.aspect_ratio > 0:
            if "width" in changes and "height" not in changes:
                changes["height"] = clamp_size(round_half_up(changes["width"] / layer.aspect_ratio))
            elif "height" in changes and "width" not in changes:
                changes["width"] = clamp_size(round_half_up(changes["height"] * layer.aspect_ratio))
        if changes.get("aspect_locked") is True:
            changes["aspect_ratio"] = layer.width / layer.height
    else:
        if "font_family" in changes:
            changes["font_family"] = valid_font_family(changes["font_family"])
        if "font_size" in changes:
            changes["font_size"] = max(MIN_FONT_SIZE, changes["font_size"])

    return replace_layer(state, replace(layer, **changes))


def duplicate_layer(state: ComposerState, layer_id: str) -> ComposerState:
    layer = find_layer(state.layers, layer_id)
    if layer is None:
        log.debug("duplicate_layer: no layer %s", layer_id)
        return state
    snap = state.snapper()
    new_id, state = _alloc_id(state, layer.type)
    # Fixed footprint for both kinds; text is not measured here
    x = min(layer.x + DUPLICATE_OFFSET, state.canvas.width - DUPLICATE_BOUND)
    y = min(layer.y + DUPLICATE_OFFSET, state.canvas.height - DUPLICATE_BOUND)
    copy = replace(
        layer,
        id=new_id,
        name=f"{layer.name} (copy)",
        x=snap(max(0.0, x)),
        y=snap(max(0.0, y)),
        z_index=next_z(state.layers),
    )
    log.info("Duplicated %s -> %s", layer.id, copy.id)
    return _append(state, copy)


def remove_layer(state: ComposerState, layer_id: str) -> ComposerState:
    if find_layer(state.layers, layer_id) is None:
        log.debug("remove_layer: no layer %s", layer_id)
        return state
    layers = tuple(l for l in state.layers if l.id != layer_id)
    selected = None if state.selected_id == layer_id else state.selected_id
    interaction = state.interaction
    if not isinstance(interaction, Idle) and interaction.layer_id == layer_id:
        interaction = IDLE
    log.info("Removed %s", layer_id)
    return replace(state, layers=layers, selected_id=selected, interaction=interaction)


def reset_layer(state: ComposerState, layer_id: str) -> ComposerState:
    layer = find_layer(state.layers, layer_id)
    if layer is None:
        return state
    if isinstance(layer, VideoLayer):
        d = DEFAULTS["video"]
        layer = replace(layer, width=d["width"], height=d["height"], x=d["x"], y=d["y"],
                        aspect_locked=False, aspect_ratio=1.0)
    else:
        d = DEFAULTS["text"]
        layer = replace(layer, x=d["x"], y=d["y"], font_size=d["font_size"], bold=False, italic=False)
    return replace_layer(state, layer)


def move_layer_up(state: ComposerState, layer_id: str) -> ComposerState:
    return replace(state, layers=raise_layer(state.layers, layer_id))


def move_layer_down(state: ComposerState, layer_id: str) -> ComposerState:
    return replace(state, layers=lower_layer(state.layers, layer_id))


def select_layer(state: ComposerState, layer_id: Optional[str]) -> ComposerState:
    if layer_id is not None and find_layer(state.layers, layer_id) is None:
        layer_id = None
    return replace(state, selected_id=layer_id)


def layers_top_down(state: ComposerState) -> Tuple[Layer, ...]:
    """Layers in sidebar order: top-most first."""
    return tuple(sorted(state.layers, key=lambda l: l.z_index, reverse=True))


# ──────────────────────────────────────────────────────────────────────────────
# Canvas / template / grid
# ──────────────────────────────────────────────────────────────────────────────
def load_template(state: ComposerState, path: str, width: int, height: int) -> ComposerState:
    """A template image sets the canvas to its natural size."""
    if width <= 0 or height <= 0:
        log.warning("Ignoring template %s with size %sx%s", path, width, height)
        return state
    log.info("Template %s (%dx%d)", path, width, height)
    return replace(state, template_path=path, canvas=CanvasSize(width, height))


def clear_template(state: ComposerState) -> ComposerState:
    return replace(state, template_path=None)


def reset_canvas(state: ComposerState) -> ComposerState:
    return replace(state, canvas=CanvasSize(DEFAULT_CANVAS_WIDTH, DEFAULT_CANVAS_HEIGHT))


def set_template_opacity(state: ComposerState, opacity: Any) -> ComposerState:
    value = clamp(coerce_number(opacity, DEFAULTS["canvas"]["template_opacity"]), 0.0, 1.0)
    return replace(state, template_opacity=value)


def set_show_grid(state: ComposerState, show: bool) -> ComposerState:
    return replace(state, show_grid=bool(show))


def set_snap_to_grid(state: ComposerState, enabled: bool) -> ComposerState:
    return replace(state, snap_to_grid=bool(enabled))


def set_grid_size(state: ComposerState, raw: Any) -> ComposerState:
    size = max(MIN_GRID_SIZE, coerce_number(raw, DEFAULT_GRID_SIZE))
    return replace(state, grid_size=size)
