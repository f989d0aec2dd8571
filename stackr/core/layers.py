# stackr/core/layers.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Literal, Tuple, Union

from app_config import (
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_FONT_SIZE,
    FONT_FAMILIES,
    MIN_SIZE,
)

TEXT_PLACEHOLDER = "Text"
TEXT_PADDING = 20
LINE_HEIGHT = 1.4


@dataclass(frozen=True)
class VideoLayer:
    id: str
    name: str
    x: float = 0.0
    y: float = 0.0
    visible: bool = True
    z_index: int = 0
    width: float = 340.0
    height: float = 340.0
    aspect_locked: bool = False
    aspect_ratio: float = 1.0  # only meaningful while aspect_locked
    type: Literal["video"] = "video"


@dataclass(frozen=True)
class TextLayer:
    id: str
    name: str
    x: float = 0.0
    y: float = 0.0
    visible: bool = True
    z_index: int = 0
    text: str = "Sample Text"
    font_size: float = DEFAULT_FONT_SIZE
    font_family: str = "Arial"
    color: str = "#ffffff"
    bold: bool = False
    italic: bool = False
    type: Literal["text"] = "text"


Layer = Union[VideoLayer, TextLayer]


@dataclass(frozen=True)
class CanvasSize:
    width: float = DEFAULT_CANVAS_WIDTH
    height: float = DEFAULT_CANVAS_HEIGHT


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height


# (text, font_size, font_family, bold, italic) -> advance width in px
TextMeasurer = Callable[[str, float, str, bool, bool], float]

# Rough per-glyph advance as a fraction of the em size
_AVG_ADVANCE = 0.55
_BOLD_WIDEN = 1.08
_FAMILY_ADVANCE = {"Courier New": 0.6, "Impact": 0.5, "Verdana": 0.62}


def estimate_text_width(text: str, font_size: float, font_family: str,
                        bold: bool = False, italic: bool = False) -> float:
    """
    Backend-free width estimate. The desktop shell swaps in QFontMetricsF;
    this keeps hit-testing usable (and deterministic) without a renderer.
    """
    advance = _FAMILY_ADVANCE.get(font_family, _AVG_ADVANCE)
    width = len(text) * float(font_size) * advance
    if bold:
        width *= _BOLD_WIDEN
    return width


def measure_text(layer: TextLayer, measurer: TextMeasurer = estimate_text_width) -> Tuple[float, float]:
    """Return (width, height) of a text layer's box, padding included."""
    text = layer.text or TEXT_PLACEHOLDER
    advance = measurer(text, layer.font_size, layer.font_family, layer.bold, layer.italic)
    return advance + TEXT_PADDING, float(layer.font_size) * LINE_HEIGHT


def is_video(layer: Layer) -> bool:
    return isinstance(layer, VideoLayer)


def is_text(layer: Layer) -> bool:
    return isinstance(layer, TextLayer)


def clamp_size(value: float) -> float:
    return max(float(MIN_SIZE), float(value))


def valid_font_family(name: str) -> str:
    return name if name in FONT_FAMILIES else FONT_FAMILIES[0]
