from __future__ import annotations

import logging
import unicodedata
from typing import Dict, Iterator, List, Sequence, Tuple

from ..errors import InvalidPaletteError

logger = logging.getLogger(__name__)

# Dark/dense first, light/sparse last, matching the order the glyphs are shown in
PRESETS: Dict[str, str] = {
    "blocks": "█▓▒░·",
    "dots": "●○◐◑◒◓",
    "circles": "●◉○◎◌·",
    "squares": "■▪▫◼◻▢",
    "lines": "║│┃┆┇┊",
    "gradients": "██▓▒░ ",
    "minimal": "█░ ",
    "ascii": "@#*+=:-.",
    "braille": "⣿⣾⣽⣻⣟⣯⣷⣶",
    "geometric": "▲△▼▽◆◇",
}

ZWJ = 0x200D
EXTENDING_RANGES = (
    (0xFE00, 0xFE0F),  # variation selectors
    (0x1F3FB, 0x1F3FF),  # skin tone modifiers
    (0xE0020, 0xE007F),  # tags
    (0xE0100, 0xE01EF),  # variation selectors supplement
)
REGIONAL_INDICATORS = (0x1F1E6, 0x1F1FF)
# control characters and line/paragraph separators would break row layout
UNPRINTABLE = ("Cc", "Zl", "Zp")


def _extends(ch: str) -> bool:
    cp = ord(ch)
    if cp == ZWJ:
        return True
    for start, end in EXTENDING_RANGES:
        if start <= cp <= end:
            return True
    return unicodedata.category(ch) in ("Mn", "Mc", "Me")


def _is_regional(ch: str) -> bool:
    return REGIONAL_INDICATORS[0] <= ord(ch) <= REGIONAL_INDICATORS[1]


def split_graphemes(text: str) -> List[str]:
    """Split text into user-perceived characters.

    A cluster is one base code point followed by combining marks, variation
    selectors, skin tone modifiers and tag characters. A zero width joiner
    glues the next code point onto the cluster, and regional indicators pair
    up into a single flag.
    """
    clusters: List[str] = []
    joined = False
    for ch in text:
        if clusters and (joined or _extends(ch)):
            clusters[-1] += ch
        elif (
            clusters
            and _is_regional(ch)
            and len(clusters[-1]) == 1
            and _is_regional(clusters[-1])
        ):
            clusters[-1] += ch
        else:
            clusters.append(ch)
        joined = ord(ch) == ZWJ
    return clusters


class Palette(Sequence[str]):
    """Ordered, immutable run of glyphs used as the quantizer's lookup table."""

    __slots__ = ("_glyphs", "name")

    def __init__(self, text: str | Sequence[str], name: str = "custom"):
        if isinstance(text, str):
            glyphs = split_graphemes(text)
        else:
            glyphs = [g for g in text]
            if any(not isinstance(g, str) or not g for g in glyphs):
                raise InvalidPaletteError("palette entries must be non-empty strings")
        if not glyphs:
            logger.error("Rejected empty palette %r", name)
            raise InvalidPaletteError("palette must contain at least one character")
        for glyph in glyphs:
            if any(unicodedata.category(ch) in UNPRINTABLE for ch in glyph):
                logger.error("Rejected palette %r with control glyph %r", name, glyph)
                raise InvalidPaletteError(f"palette glyph {glyph!r} is a control or line break character")
        self._glyphs: Tuple[str, ...] = tuple(glyphs)
        self.name = name

    @classmethod
    def preset(cls, name: str) -> "Palette":
        try:
            return cls(PRESETS[name], name=name)
        except KeyError:
            logger.error("Unknown palette preset %r", name)
            raise InvalidPaletteError(f"unknown palette preset: {name!r}") from None

    @property
    def glyphs(self) -> Tuple[str, ...]:
        return self._glyphs

    @property
    def text(self) -> str:
        return "".join(self._glyphs)

    def __getitem__(self, index):
        return self._glyphs[index]

    def __len__(self) -> int:
        return len(self._glyphs)

    def __iter__(self) -> Iterator[str]:
        return iter(self._glyphs)

    def __eq__(self, other) -> bool:
        if isinstance(other, Palette):
            return self._glyphs == other._glyphs
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._glyphs)

    def __repr__(self) -> str:
        return f"Palette({self.text!r}, name={self.name!r})"


def as_palette(palette: Palette | str | Sequence[str]) -> Palette:
    if isinstance(palette, Palette):
        return palette
    return Palette(palette)
