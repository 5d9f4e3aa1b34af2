from __future__ import annotations

import warnings

import numpy as np

from ..errors import NumericDomainWarning
from .palettes import Palette, as_palette


def normalize(value):
    # nominal field range [-1, 1] -> [0, 1]; out-of-range values are not clamped here
    return (value + 1) / 2


def remap(n, density: float):
    if not density > 0:
        raise ValueError(f"density must be > 0, got {density}")
    with np.errstate(invalid="ignore", over="ignore", divide="ignore"):
        return np.power(n, 1.0 / density)


def quantize_grid(values, density: float, length: int) -> np.ndarray:
    """Map field values to palette indices in [0, length - 1].

    A remap that comes out NaN or infinite is replaced by the boundary on the
    side of the normalized value (first glyph when negative, last otherwise)
    and reported with NumericDomainWarning. Finite remaps are floored and
    clamped like any other value.
    """
    if length < 1:
        raise ValueError("palette length must be at least 1")
    n = normalize(np.asarray(values, dtype=np.float64))
    a = remap(n, density)
    bad = ~np.isfinite(a)
    with np.errstate(invalid="ignore", over="ignore"):
        idx = np.floor(np.where(bad, 0.0, a) * length)
    idx = np.clip(idx, 0, length - 1).astype(np.int64)
    if bad.any():
        count = int(np.count_nonzero(bad))
        warnings.warn(
            NumericDomainWarning(
                f"density remap produced {count} non-finite value(s); snapped to palette boundary"
            ),
            stacklevel=2,
        )
        idx = np.where(bad, np.where(n < 0, 0, length - 1), idx)
    return idx


def to_index(value: float, density: float, length: int) -> int:
    return int(quantize_grid(value, density, length))


def to_char(value: float, density: float, palette: Palette | str) -> str:
    palette = as_palette(palette)
    return palette[to_index(value, density, len(palette))]


def index_to_chars(indices: np.ndarray, palette: Palette) -> list[str]:
    """Turn a (rows, cols) index grid into one joined string per row."""
    glyphs = palette.glyphs
    return ["".join(glyphs[i] for i in row) for row in indices.tolist()]
