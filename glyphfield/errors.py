from __future__ import annotations


class GlyphFieldError(Exception):
    """Base class for errors raised by glyphfield."""


class UnknownPatternError(GlyphFieldError, KeyError):
    def __init__(self, name):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"unknown pattern: {self.name!r}"


class InvalidPaletteError(GlyphFieldError, ValueError):
    pass


class NumericDomainWarning(RuntimeWarning):
    """Density remap produced a non-finite value; a palette boundary was used instead."""
