from __future__ import annotations

from dataclasses import dataclass

import numpy as np

FALLOFF = 0.2
PULSE_RATE = 3.0
STRENGTH = 0.5


@dataclass(frozen=True)
class PointerState:
    x: float = 0.0
    y: float = 0.0
    active: bool = False


def falloff(x, y, pointer: PointerState):
    dist = np.hypot(x - pointer.x, y - pointer.y)
    return np.exp(-dist * FALLOFF)


def influence(x, y, pointer: PointerState, t: float):
    return falloff(x, y, pointer) * np.sin(t * PULSE_RATE)


def perturb(value, x, y, pointer: PointerState | None, t: float):
    # Accept scalar or whole-grid arrays for value/x/y
    if pointer is None or not pointer.active:
        return value
    return value + influence(x, y, pointer, t) * STRENGTH


def pointer_from_viewport(
    px: float,
    py: float,
    left: float,
    top: float,
    rect_width: float,
    rect_height: float,
    width: int,
    height: int,
    active: bool = True,
) -> PointerState:
    """Map a pixel position inside a bounding rectangle into grid coordinates."""
    if rect_width <= 0 or rect_height <= 0:
        raise ValueError(f"viewport rectangle must have a positive size, got {rect_width}x{rect_height}")
    gx = (px - left) / rect_width * width
    gy = (py - top) / rect_height * height
    return PointerState(float(gx), float(gy), bool(active))
