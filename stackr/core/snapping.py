# stackr/core/snapping.py
from __future__ import annotations
import math


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves going up (matches JS Math.round)."""
    return int(math.floor(float(value) + 0.5))


def snap_value(value: float, grid_size: float, enabled: bool = True) -> float:
    if not enabled or grid_size <= 0:
        return value
    return round_half_up(value / grid_size) * grid_size


def clamp(value: float, lo: float, hi: float) -> float:
    # lo wins when the range is inverted (item larger than the canvas)
    return max(lo, min(hi, value))


def clamp_to_canvas(x: float, y: float, width: float, height: float,
                    canvas_w: float, canvas_h: float) -> tuple[float, float]:
    """Clamp a top-left so a width×height box stays inside the canvas."""
    return clamp(x, 0.0, canvas_w - width), clamp(y, 0.0, canvas_h - height)


class Snapper:
    """Grid settings bundled with the snap function, as carried by the document state."""
    __slots__ = ("enabled", "grid_size")

    def __init__(self, enabled: bool, grid_size: float):
        self.enabled = bool(enabled)
        self.grid_size = grid_size

    def __call__(self, value: float) -> float:
        return snap_value(value, self.grid_size, self.enabled)
