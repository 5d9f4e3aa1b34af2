import pytest

from glyphfield.core.palettes import PRESETS, Palette, as_palette, split_graphemes
from glyphfield.errors import InvalidPaletteError


def test_presets_have_expected_sizes():
    sizes = {name: len(Palette.preset(name)) for name in PRESETS}
    assert sizes["blocks"] == 5
    assert sizes["braille"] == 8
    assert sizes["minimal"] == 3
    assert sizes["ascii"] == 8
    assert all(n >= 1 for n in sizes.values())


def test_preset_order_is_kept():
    p = Palette.preset("blocks")
    assert p[0] == "█"
    assert p[-1] == "·"
    assert p.text == "█▓▒░·"
    assert p.name == "blocks"


def test_unknown_preset():
    with pytest.raises(InvalidPaletteError):
        Palette.preset("sparkles")


@pytest.mark.parametrize("text", ["", []])
def test_empty_palette_rejected(text):
    with pytest.raises(InvalidPaletteError):
        Palette(text)


def test_sequence_palette_rejects_empty_entries():
    with pytest.raises(InvalidPaletteError):
        Palette(["a", ""])


def test_combining_marks_stay_with_their_base():
    assert split_graphemes("e\u0301a") == ["e\u0301", "a"]


def test_variation_selector_and_zwj_sequences():
    heart = "\u2764\ufe0f"
    family = "\U0001F468\u200d\U0001F469\u200d\U0001F467"
    assert split_graphemes(heart + "x") == [heart, "x"]
    assert split_graphemes(family + ".") == [family, "."]


def test_flags_pair_up():
    flag = "\U0001F1E7\U0001F1F7"
    assert split_graphemes(flag + flag) == [flag, flag]


def test_palette_behaves_like_a_sequence():
    p = Palette("ab\u0301c")
    assert len(p) == 3
    assert list(p) == ["a", "b\u0301", "c"]
    assert "c" in p
    assert p == Palette(["a", "b\u0301", "c"])
    assert hash(p) == hash(Palette("ab\u0301c"))


def test_as_palette_passthrough():
    p = Palette.preset("dots")
    assert as_palette(p) is p
    assert as_palette("xy") == Palette("xy")


@pytest.mark.parametrize("text", ["A\nB", "\tx", "ab\r", "a\u2028b", "a\u2029", "\x00"])
def test_control_and_line_break_glyphs_rejected(text):
    with pytest.raises(InvalidPaletteError):
        Palette(text)


def test_control_glyph_rejected_in_sequence_form():
    with pytest.raises(InvalidPaletteError):
        Palette(["a", "b\n"])


def test_spaces_are_still_valid_glyphs():
    assert list(Palette.preset("minimal")) == ["█", "░", " "]
