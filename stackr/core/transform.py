# stackr/core/transform.py
"""
Resize and drag math for the canvas.

Every result goes through the same settle step: clamp into the canvas, snap,
then clamp once more so a snapped value can never leave the canvas (it may
sit slightly off-grid at the boundary instead).
"""
from __future__ import annotations
from typing import Callable, Tuple

from app_config import MIN_SIZE
from .geometry import Handle
from .layers import CanvasSize, Rect
from .snapping import clamp, clamp_to_canvas

SnapFn = Callable[[float], float]

_LEFT_EDGE = {"w", "nw", "sw"}     # handles that move x
_TOP_EDGE = {"n", "nw", "ne"}      # handles that move y
_GROW_RIGHT = {"e", "ne", "se"}
_GROW_DOWN = {"s", "se", "sw"}


def _identity(v: float) -> float:
    return v


def _raw_size(handle: Handle, anchor: Rect, dx: float, dy: float) -> Tuple[float, float]:
    w, h = anchor.width, anchor.height
    if handle in _GROW_RIGHT:
        w = anchor.width + dx
    elif handle in _LEFT_EDGE:
        w = anchor.width - dx
    if handle in _GROW_DOWN:
        h = anchor.height + dy
    elif handle in _TOP_EDGE:
        h = anchor.height - dy
    return w, h


def _locked_size(handle: Handle, w: float, h: float, ratio: float) -> Tuple[float, float]:
    # n/s drive height; every other handle drives width
    if handle in ("n", "s"):
        h = max(MIN_SIZE, h)
        w = h * ratio
        if w < MIN_SIZE:
            w = float(MIN_SIZE)
            h = w / ratio
    else:
        w = max(MIN_SIZE, w)
        h = w / ratio
        if h < MIN_SIZE:
            h = float(MIN_SIZE)
            w = h * ratio
    return w, h


def _fit_to_canvas(w: float, h: float, canvas: CanvasSize, keep_ratio: bool) -> Tuple[float, float]:
    if keep_ratio:
        scale = min(1.0, canvas.width / w, canvas.height / h)
        return w * scale, h * scale
    return min(w, canvas.width), min(h, canvas.height)


def _settle(rect: Rect, canvas: CanvasSize, snap: SnapFn, floor: float) -> Rect:
    w, h = rect.width, rect.height
    x, y = clamp_to_canvas(rect.x, rect.y, w, h, canvas.width, canvas.height)
    x, y, w, h = snap(x), snap(y), snap(w), snap(h)
    w = clamp(w, min(floor, canvas.width), canvas.width)
    h = clamp(h, min(floor, canvas.height), canvas.height)
    x, y = clamp_to_canvas(x, y, w, h, canvas.width, canvas.height)
    return Rect(x, y, w, h)


def resize_rect(handle: Handle, anchor: Rect, dx: float, dy: float, canvas: CanvasSize,
                aspect_locked: bool = False, aspect_ratio: float = 1.0,
                snap: SnapFn = _identity) -> Rect:
    """
    Apply a handle drag of (dx, dy), measured from the gesture start, to the
    geometry captured at that start. The edge opposite the handle stays put.
    """
    w, h = _raw_size(handle, anchor, dx, dy)
    locked = aspect_locked and aspect_ratio > 0
    if locked:
        w, h = _locked_size(handle, w, h, aspect_ratio)
    else:
        w, h = max(MIN_SIZE, w), max(MIN_SIZE, h)
    w, h = _fit_to_canvas(w, h, canvas, locked)

    x = anchor.x + anchor.width - w if handle in _LEFT_EDGE else anchor.x
    y = anchor.y + anchor.height - h if handle in _TOP_EDGE else anchor.y
    return _settle(Rect(x, y, w, h), canvas, snap, MIN_SIZE)


def drag_position(pointer: Tuple[float, float], grab_offset: Tuple[float, float],
                  box_w: float, box_h: float, canvas: CanvasSize,
                  snap: SnapFn = _identity) -> Tuple[float, float]:
    """New top-left for a dragged box of box_w×box_h."""
    x = pointer[0] - grab_offset[0]
    y = pointer[1] - grab_offset[1]
    x, y = clamp_to_canvas(x, y, box_w, box_h, canvas.width, canvas.height)
    return clamp_to_canvas(snap(x), snap(y), box_w, box_h, canvas.width, canvas.height)
