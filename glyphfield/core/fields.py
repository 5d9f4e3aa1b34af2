from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Union

import numpy as np

from ..errors import UnknownPatternError

logger = logging.getLogger(__name__)

PHI = (1 + math.sqrt(5)) / 2
GOLDEN_ANGLE = 2 * math.pi * (1 - 1 / PHI)
FIBONACCI = np.array([1, 1, 2, 3, 5, 8, 13, 21, 34, 55, 89], dtype=np.float64)

GOLDEN_RECT_LAYERS = 5
GOLDEN_PETALS = 13


@dataclass(frozen=True)
class PatternParams:
    scale: float = 0.2
    speed: float = 5.0
    width: int = 60
    height: int = 30
    density: float = 0.3

    def validate(self) -> "PatternParams":
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError(f"grid size must be positive, got {self.width}x{self.height}")
        if not self.density > 0:
            raise ValueError(f"density must be > 0, got {self.density}")
        for name in ("scale", "speed", "density"):
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite")
        return self


class Pattern(str, Enum):
    WAVES = "waves"
    RIPPLES = "ripples"
    SPIRAL = "spiral"
    MAZE = "maze"
    DIAMOND = "diamond"
    PLASMA = "plasma"
    TUNNEL = "tunnel"
    MANDALA = "mandala"
    MAVIGNIER_DOTS = "mavignier_dots"
    MAVIGNIER_LINES = "mavignier_lines"
    MAVIGNIER_KINETIC = "mavignier_kinetic"
    MAVIGNIER_GEOMETRIC = "mavignier_geometric"
    GOLDEN_SPIRAL = "golden_spiral"
    FIBONACCI_GRID = "fibonacci_grid"
    GOLDEN_RECTANGLES = "golden_rectangles"
    GOLDEN_PETALS = "golden_petals"

    def __str__(self) -> str:
        return self.value


# x and y may be floats or broadcastable arrays; every field returns the same shape.
FieldFunction = Callable[..., Union[float, np.ndarray]]


def _polar(x, y, p: PatternParams):
    dx = x - p.width / 2
    dy = y - p.height / 2
    return dx, dy, np.hypot(dx, dy), np.arctan2(dy, dx)


def waves(x, y, t: float, p: PatternParams):
    return np.sin(x * p.scale + t * p.speed * 0.1) * np.cos(y * p.scale * 0.8 + t * p.speed * 0.05)


def ripples(x, y, t: float, p: PatternParams):
    _, _, dist, _ = _polar(x, y, p)
    return np.sin(dist * p.scale - t * p.speed * 0.1)


def spiral(x, y, t: float, p: PatternParams):
    _, _, dist, angle = _polar(x, y, p)
    return np.sin(angle * 3 + dist * p.scale + t * p.speed * 0.1)


def maze(x, y, t: float, p: PatternParams):
    return np.sin(x * p.scale + t * p.speed * 0.05) * np.cos(y * p.scale + t * p.speed * 0.03)


def diamond(x, y, t: float, p: PatternParams):
    dx, dy, _, _ = _polar(x, y, p)
    return np.sin((np.abs(dx) + np.abs(dy)) * p.scale + t * p.speed * 0.1)


def plasma(x, y, t: float, p: PatternParams):
    v1 = np.sin(x * p.scale + t * p.speed * 0.1)
    v2 = np.sin(y * p.scale + t * p.speed * 0.08)
    v3 = np.sin((x + y) * p.scale * 0.5 + t * p.speed * 0.06)
    v4 = np.sin(np.hypot(x, y) * p.scale + t * p.speed * 0.12)
    return (v1 + v2 + v3 + v4) / 4


def tunnel(x, y, t: float, p: PatternParams):
    _, _, dist, angle = _polar(x, y, p)
    # +0.1 keeps the centre cell finite
    return np.sin(angle * 8) * np.cos(1 / (dist * p.scale + 0.1) + t * p.speed * 0.1)


def mandala(x, y, t: float, p: PatternParams):
    _, _, dist, angle = _polar(x, y, p)
    return np.sin(angle * 6 + t * p.speed * 0.05) * np.cos(dist * p.scale + t * p.speed * 0.08)


def mavignier_dots(x, y, t: float, p: PatternParams):
    _, _, _, angle = _polar(x, y, p)
    grid_x = np.floor(x / 3) * 3
    grid_y = np.floor(y / 3) * 3
    grid_dist = np.hypot(grid_x - p.width / 2, grid_y - p.height / 2)
    wave = np.sin(grid_dist * p.scale + t * p.speed * 0.1)
    optical = np.cos(angle * 8 + t * p.speed * 0.05)
    return wave * optical


def mavignier_lines(x, y, t: float, p: PatternParams):
    _, _, dist, angle = _polar(x, y, p)
    radial = np.sin(angle * 12 + dist * p.scale * 0.2 + t * p.speed * 0.08)
    circular = np.cos(dist * p.scale + t * p.speed * 0.06)
    return radial * 0.7 + circular * 0.3


def mavignier_kinetic(x, y, t: float, p: PatternParams):
    dx, dy, dist, angle = _polar(x, y, p)
    layer1 = np.sin(dist * p.scale * 0.3 + t * p.speed * 0.12)
    layer2 = np.cos(angle * 6 + t * p.speed * 0.08)
    layer3 = np.sin((dx + dy) * p.scale * 0.2 + t * p.speed * 0.15)
    return layer1 * 0.4 + layer2 * 0.35 + layer3 * 0.25


def mavignier_geometric(x, y, t: float, p: PatternParams):
    dx, dy, _, _ = _polar(x, y, p)
    theta = t * p.speed * 0.02
    rot_x = dx * math.cos(theta) - dy * math.sin(theta)
    rot_y = dx * math.sin(theta) + dy * math.cos(theta)
    manhattan = np.abs(rot_x) + np.abs(rot_y)
    chebyshev = np.maximum(np.abs(rot_x), np.abs(rot_y))
    pattern1 = np.sin(manhattan * p.scale + t * p.speed * 0.1)
    pattern2 = np.cos(chebyshev * p.scale * 0.8 + t * p.speed * 0.07)
    return pattern1 * 0.6 + pattern2 * 0.4


def golden_spiral(x, y, t: float, p: PatternParams):
    _, _, dist, angle = _polar(x, y, p)
    radius = np.exp(angle / PHI) * p.scale * 2
    spiral_wave = np.sin(np.abs(dist - radius) * p.scale * 10 + t * p.speed * 0.1)
    spiral_pattern = np.cos((angle + t * p.speed * 0.05) * PHI)
    return spiral_wave * 0.7 + spiral_pattern * 0.3


def fibonacci_grid(x, y, t: float, p: PatternParams):
    n = len(FIBONACCI)
    fib_x = FIBONACCI[np.floor(np.asarray(x) / 5).astype(np.int64) % n]
    fib_y = FIBONACCI[np.floor(np.asarray(y) / 5).astype(np.int64) % n]
    golden_x = np.sin(x * p.scale / PHI + t * p.speed * 0.08)
    golden_y = np.cos(y * p.scale * PHI + t * p.speed * 0.06)
    fib = np.sin(fib_x * p.scale + t * p.speed * 0.1) * np.cos(fib_y * p.scale + t * p.speed * 0.07)
    return golden_x * 0.4 + golden_y * 0.4 + fib * 0.2


def golden_rectangles(x, y, t: float, p: PatternParams):
    dx, dy, _, _ = _polar(x, y, p)
    pattern = np.zeros(np.broadcast(dx, dy).shape)
    for i in range(GOLDEN_RECT_LAYERS):
        rect_w = PHI ** i * p.scale * 3
        rect_h = rect_w / PHI
        rotation = t * p.speed * 0.03 + i * math.pi / 8
        c, s = math.cos(rotation), math.sin(rotation)
        rot_x = np.abs(dx * c - dy * s)
        rot_y = np.abs(dx * s + dy * c)
        inside = (rot_x < rect_w) & (rot_y < rect_h)
        edge = np.minimum(rect_w - rot_x, rect_h - rot_y)
        ring = np.sin(edge * p.scale * 2 + t * p.speed * 0.1) / (i + 1)
        pattern = pattern + np.where(inside, ring, 0.0)
    return pattern


def golden_petals(x, y, t: float, p: PatternParams):
    dx, dy, dist, _ = _polar(x, y, p)
    petals = np.zeros(np.broadcast(dx, dy).shape)
    for i in range(GOLDEN_PETALS):
        petal_angle = i * GOLDEN_ANGLE + t * p.speed * 0.02
        px, py = math.cos(petal_angle), math.sin(petal_angle)
        along = dx * px + dy * py
        across = np.abs(dx * py - dy * px)
        intensity = np.exp(-across * p.scale * 0.5) * np.sin(along * p.scale * 0.3 + t * p.speed * 0.1)
        petals = petals + np.where(along > 0, intensity, 0.0)
    center = np.sin(dist * p.scale * 0.5 + t * p.speed * 0.08)
    return petals * 0.8 + center * 0.2


FIELDS: Dict[Pattern, FieldFunction] = {
    Pattern.WAVES: waves,
    Pattern.RIPPLES: ripples,
    Pattern.SPIRAL: spiral,
    Pattern.MAZE: maze,
    Pattern.DIAMOND: diamond,
    Pattern.PLASMA: plasma,
    Pattern.TUNNEL: tunnel,
    Pattern.MANDALA: mandala,
    Pattern.MAVIGNIER_DOTS: mavignier_dots,
    Pattern.MAVIGNIER_LINES: mavignier_lines,
    Pattern.MAVIGNIER_KINETIC: mavignier_kinetic,
    Pattern.MAVIGNIER_GEOMETRIC: mavignier_geometric,
    Pattern.GOLDEN_SPIRAL: golden_spiral,
    Pattern.FIBONACCI_GRID: fibonacci_grid,
    Pattern.GOLDEN_RECTANGLES: golden_rectangles,
    Pattern.GOLDEN_PETALS: golden_petals,
}


def pattern_names() -> list[str]:
    return [p.value for p in FIELDS]


def resolve(name: Pattern | str) -> Pattern:
    if isinstance(name, Pattern):
        return name
    try:
        return Pattern(name)
    except ValueError:
        logger.error("Unknown pattern requested: %r", name)
        raise UnknownPatternError(name) from None


def field_function(name: Pattern | str) -> FieldFunction:
    return FIELDS[resolve(name)]


def evaluate(name: Pattern | str, x: float, y: float, t: float, params: PatternParams) -> float:
    """Sample one field at a single grid cell."""
    return float(field_function(name)(float(x), float(y), float(t), params))


def evaluate_grid(name: Pattern | str, t: float, params: PatternParams) -> np.ndarray:
    """Sample one field over the whole grid; result has shape (height, width)."""
    fn = field_function(name)
    rows, cols = int(params.height), int(params.width)
    yy, xx = np.mgrid[0:rows, 0:cols].astype(np.float64)
    out = fn(xx, yy, float(t), params)
    return np.broadcast_to(np.asarray(out, dtype=np.float64), (rows, cols))
