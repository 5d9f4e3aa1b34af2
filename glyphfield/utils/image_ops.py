from __future__ import annotations

from typing import Dict, Optional, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..core.palettes import split_graphemes

Color = Tuple[int, int, int]


def parse_color(value: str | Sequence[int]) -> Color:
    if isinstance(value, str):
        rgb = ImageColor.getrgb(value)
        return (rgb[0], rgb[1], rgb[2])
    r, g, b = value[:3]
    return (int(r), int(g), int(b))


def load_font(font_size: int = 12, font_path: Optional[str] = None) -> ImageFont.ImageFont:
    if font_path:
        return ImageFont.truetype(font_path, font_size)
    return ImageFont.load_default(size=font_size)


def cell_size(font: ImageFont.ImageFont, font_size: int) -> Tuple[int, int]:
    bbox = font.getbbox("M")
    cell_w = max(1, int(round(bbox[2] - bbox[0])))
    return cell_w, max(1, int(font_size))


def build_text_image(
    rows: Sequence[str],
    font_pil: ImageFont.ImageFont,
    cell_w: int,
    cell_h: int,
    fg_color: Color = (0x33, 0x33, 0x33),
    bg_color: Color = (0xF0, 0xEE, 0xE6),
    gap_x: int = 0,
    gap_y: int = 0,
    padding: int = 20,
    glyph_cache: Dict[str, Image.Image] | None = None,
) -> Image.Image:
    """Paint a grid of glyphs onto an RGB image, one fixed-size cell per glyph."""
    grid = [split_graphemes(row) for row in rows]
    n_rows = len(grid)
    n_cols = max((len(r) for r in grid), default=0)
    W = 2 * padding + n_cols * cell_w + max(0, n_cols - 1) * gap_x
    H = 2 * padding + n_rows * cell_h + max(0, n_rows - 1) * gap_y
    img = Image.new("RGB", (max(1, int(W)), max(1, int(H))), color=bg_color)

    if glyph_cache is None:
        glyph_cache = {}

    for y, row in enumerate(grid):
        for x, ch in enumerate(row):
            if ch.isspace():
                continue
            if ch not in glyph_cache:
                glyph_img = Image.new("RGBA", (cell_w, cell_h), (0, 0, 0, 0))
                glyph_draw = ImageDraw.Draw(glyph_img)
                glyph_draw.text((0, 0), ch, fill=fg_color + (255,), font=font_pil, anchor="lt")
                glyph_cache[ch] = glyph_img
            pos_x = padding + x * (cell_w + gap_x)
            pos_y = padding + y * (cell_h + gap_y)
            img.paste(glyph_cache[ch], (pos_x, pos_y), glyph_cache[ch])

    return img


def render_grid_image(
    text: str,
    font_size: int = 12,
    fg: str | Sequence[int] = "#333333",
    bg: str | Sequence[int] = "#F0EEE6",
    font_path: Optional[str] = None,
) -> Image.Image:
    font = load_font(font_size, font_path)
    cell_w, cell_h = cell_size(font, font_size)
    rows = text.split("\n")
    if rows and rows[-1] == "":
        rows.pop()
    return build_text_image(rows, font, cell_w, cell_h, parse_color(fg), parse_color(bg))
