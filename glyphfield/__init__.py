"""Animated text fields: sample a procedural pattern per cell and pick a glyph."""

from .core.clock import AnimationClock, ClockState, ManualScheduler
from .core.fields import Pattern, PatternParams, evaluate, evaluate_grid, pattern_names
from .core.palettes import PRESETS, Palette
from .core.pointer import PointerState, perturb, pointer_from_viewport
from .core.quantize import to_char
from .core.raster import RenderedGrid, render
from .errors import (
    GlyphFieldError,
    InvalidPaletteError,
    NumericDomainWarning,
    UnknownPatternError,
)

__version__ = "0.1.0"

__all__ = [
    "AnimationClock",
    "ClockState",
    "GlyphFieldError",
    "InvalidPaletteError",
    "ManualScheduler",
    "NumericDomainWarning",
    "PRESETS",
    "Palette",
    "Pattern",
    "PatternParams",
    "PointerState",
    "RenderedGrid",
    "UnknownPatternError",
    "evaluate",
    "evaluate_grid",
    "pattern_names",
    "perturb",
    "pointer_from_viewport",
    "render",
    "to_char",
]
