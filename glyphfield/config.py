"""
Configuration
=============
Defaults, supported control ranges and the settings snapshot handed to the
renderer.

The renderer itself never keeps configuration around: the host builds a
`Settings` value (or just `PatternParams` plus a palette) and passes it in on
every render call.

Environment overrides (all optional):
    GLYPHFIELD_PATTERN, GLYPHFIELD_PALETTE, GLYPHFIELD_CHARACTERS,
    GLYPHFIELD_SCALE, GLYPHFIELD_SPEED, GLYPHFIELD_DENSITY,
    GLYPHFIELD_WIDTH, GLYPHFIELD_HEIGHT, GLYPHFIELD_LOG_LEVEL
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from typing import Dict, Mapping, Optional, Tuple

from .core.fields import PatternParams, resolve
from .core.palettes import PRESETS, Palette
from .errors import InvalidPaletteError

logger = logging.getLogger(__name__)

ENV_PREFIX = "GLYPHFIELD_"

DEFAULT_PATTERN = "waves"
DEFAULT_PALETTE = "blocks"
CUSTOM_PALETTE = "custom"

DEFAULT_BACKGROUND = "#F0EEE6"
DEFAULT_TEXT_COLOR = "#333333"
DEFAULT_FONT_SIZE = 12

# Bounds of the host's controls (min, max)
RANGES: Dict[str, Tuple[float, float]] = {
    "speed": (1.0, 20.0),
    "density": (0.1, 2.0),
    "scale": (0.05, 1.0),
    "width": (20, 120),
    "height": (10, 60),
}
FONT_SIZE_RANGE = (8, 24)


def default_params() -> PatternParams:
    return PatternParams(scale=0.2, speed=5.0, width=60, height=30, density=0.3)


def clamp_params(params: PatternParams) -> PatternParams:
    def clamp(name, value):
        lo, hi = RANGES[name]
        return min(hi, max(lo, value))

    return PatternParams(
        scale=float(clamp("scale", params.scale)),
        speed=float(clamp("speed", params.speed)),
        width=int(clamp("width", int(params.width))),
        height=int(clamp("height", int(params.height))),
        density=float(clamp("density", params.density)),
    )


def clamp_font_size(size: int) -> int:
    lo, hi = FONT_SIZE_RANGE
    return int(min(hi, max(lo, int(size))))


@dataclass(frozen=True)
class Settings:
    pattern: str = DEFAULT_PATTERN
    params: PatternParams = field(default_factory=default_params)
    palette_preset: str = DEFAULT_PALETTE
    characters: str = PRESETS[DEFAULT_PALETTE]
    pointer_interaction: bool = True
    animate: bool = True
    background: str = DEFAULT_BACKGROUND
    text_color: str = DEFAULT_TEXT_COLOR
    font_size: int = DEFAULT_FONT_SIZE

    @classmethod
    def defaults(cls) -> "Settings":
        return cls()

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        def get(name):
            return env.get(ENV_PREFIX + name)

        settings = cls()
        params = settings.params
        numeric = {}
        for name, cast in (("scale", float), ("speed", float), ("density", float), ("width", int), ("height", int)):
            raw = get(name.upper())
            if raw is None:
                continue
            try:
                numeric[name] = cast(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{name.upper()} is not a valid {cast.__name__}: {raw!r}") from None
        if numeric:
            params = replace(params, **numeric)

        preset = get("PALETTE") or settings.palette_preset
        characters = get("CHARACTERS")
        if characters is not None:
            preset = CUSTOM_PALETTE
        elif preset != CUSTOM_PALETTE:
            if preset not in PRESETS:
                raise InvalidPaletteError(f"unknown palette preset: {preset!r}")
            characters = PRESETS[preset]
        else:
            characters = settings.characters

        settings = replace(
            settings,
            pattern=get("PATTERN") or settings.pattern,
            params=params,
            palette_preset=preset,
            characters=characters,
        )
        return settings.validate()

    def validate(self) -> "Settings":
        resolve(self.pattern)
        self.params.validate()
        self.palette()
        return self

    def palette(self) -> Palette:
        if self.palette_preset == CUSTOM_PALETTE:
            return Palette(self.characters, name=CUSTOM_PALETTE)
        return Palette.preset(self.palette_preset)

    def with_preset(self, name: str) -> "Settings":
        """Switch presets; picking a named preset also replaces the characters."""
        if name == CUSTOM_PALETTE:
            return replace(self, palette_preset=name)
        palette = Palette.preset(name)
        return replace(self, palette_preset=name, characters=palette.text)

    def with_characters(self, characters: str) -> "Settings":
        Palette(characters)
        return replace(self, palette_preset=CUSTOM_PALETTE, characters=characters)

    def with_font_size(self, size: int) -> "Settings":
        return replace(self, font_size=clamp_font_size(size))


def log_level_from_env(environ: Optional[Mapping[str, str]] = None, default: int = logging.INFO) -> int:
    env = os.environ if environ is None else environ
    raw = env.get(ENV_PREFIX + "LOG_LEVEL")
    if not raw:
        return default
    level = logging.getLevelName(raw.upper())
    if isinstance(level, int):
        return level
    logger.warning("Ignoring unknown log level %r", raw)
    return default
