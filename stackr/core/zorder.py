# stackr/core/zorder.py
from __future__ import annotations
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from .geometry import find_layer
from .layers import Layer


def next_z(layers: Sequence[Layer]) -> int:
    """zIndex for a freshly created layer: one above everything."""
    return max((l.z_index for l in layers), default=0) + 1


def _swap(layers: Sequence[Layer], a: Layer, b: Layer) -> Tuple[Layer, ...]:
    out = []
    for l in layers:
        if l.id == a.id:
            out.append(replace(l, z_index=b.z_index))
        elif l.id == b.id:
            out.append(replace(l, z_index=a.z_index))
        else:
            out.append(l)
    return tuple(out)


def _neighbour(layers: Sequence[Layer], target: Layer, above: bool) -> Optional[Layer]:
    if above:
        higher = [l for l in layers if l.z_index > target.z_index]
        return min(higher, key=lambda l: l.z_index) if higher else None
    lower = [l for l in layers if l.z_index < target.z_index]
    return max(lower, key=lambda l: l.z_index) if lower else None


def raise_layer(layers: Sequence[Layer], layer_id: str) -> Tuple[Layer, ...]:
    """Swap zIndex with the next layer up. No-op when already on top or unknown."""
    target = find_layer(layers, layer_id)
    if target is None:
        return tuple(layers)
    other = _neighbour(layers, target, above=True)
    if other is None:
        return tuple(layers)
    return _swap(layers, target, other)


def lower_layer(layers: Sequence[Layer], layer_id: str) -> Tuple[Layer, ...]:
    target = find_layer(layers, layer_id)
    if target is None:
        return tuple(layers)
    other = _neighbour(layers, target, above=False)
    if other is None:
        return tuple(layers)
    return _swap(layers, target, other)
