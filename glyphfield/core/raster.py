from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from .fields import Pattern, PatternParams, evaluate, evaluate_grid, resolve
from .palettes import Palette, as_palette
from .pointer import PointerState, perturb
from .quantize import index_to_chars, quantize_grid, to_char

logger = logging.getLogger(__name__)

TIME_SCALE = 0.05
ROW_TERMINATOR = "\n"


class RenderedGrid(str):
    """One frame of text: `height` rows of `width` glyphs, each row ended by a newline."""

    pattern: str
    frame: int
    width: int
    height: int

    def __new__(cls, rows: Sequence[str], *, pattern: str, frame: int, width: int, height: int):
        text = "".join(row + ROW_TERMINATOR for row in rows)
        obj = super().__new__(cls, text)
        obj.pattern = pattern
        obj.frame = frame
        obj.width = width
        obj.height = height
        return obj

    def rows(self) -> List[str]:
        return self.split(ROW_TERMINATOR)[:-1]

    def __reduce__(self):
        return (_rebuild, (self.rows(), self.pattern, self.frame, self.width, self.height))


def _rebuild(rows, pattern, frame, width, height):
    return RenderedGrid(rows, pattern=pattern, frame=frame, width=width, height=height)


def frame_time(frame: int, time_scale: float = TIME_SCALE) -> float:
    if frame < 0:
        raise ValueError(f"frame must be non-negative, got {frame}")
    return frame * time_scale


def render(
    pattern: Pattern | str,
    frame: int,
    params: PatternParams,
    palette: Palette | str,
    pointer: PointerState | None = None,
    *,
    interaction: bool = True,
    time_scale: float = TIME_SCALE,
) -> RenderedGrid:
    # bad configuration is rejected before any cell is computed
    name = resolve(pattern)
    params.validate()
    palette = as_palette(palette)
    t = frame_time(frame, time_scale)
    rows, cols = int(params.height), int(params.width)

    values = evaluate_grid(name, t, params)
    if interaction and pointer is not None and pointer.active:
        yy, xx = np.mgrid[0:rows, 0:cols].astype(np.float64)
        values = perturb(values, xx, yy, pointer, t)

    indices = quantize_grid(values, params.density, len(palette))
    grid = RenderedGrid(
        index_to_chars(indices, palette),
        pattern=name.value,
        frame=frame,
        width=cols,
        height=rows,
    )
    logger.debug("Rendered %s frame %d (%dx%d)", name.value, frame, cols, rows)
    return grid


def render_cells(
    pattern: Pattern | str,
    frame: int,
    params: PatternParams,
    palette: Palette | str,
    pointer: PointerState | None = None,
    *,
    interaction: bool = True,
    time_scale: float = TIME_SCALE,
) -> RenderedGrid:
    """Cell-by-cell rendering; slow, but follows the per-cell pipeline literally."""
    name = resolve(pattern)
    params.validate()
    palette = as_palette(palette)
    t = frame_time(frame, time_scale)
    engaged = interaction and pointer is not None and pointer.active

    lines = []
    for y in range(int(params.height)):
        line = ""
        for x in range(int(params.width)):
            value = evaluate(name, x, y, t, params)
            if engaged:
                value = float(perturb(value, x, y, pointer, t))
            line += to_char(value, params.density, palette)
        lines.append(line)
    return RenderedGrid(lines, pattern=name.value, frame=frame, width=int(params.width), height=int(params.height))
