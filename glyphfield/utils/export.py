from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional, Sequence

from .image_ops import render_grid_image

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


def export_filename(pattern: str, timestamp_ms: Optional[int] = None, suffix: str = ".txt") -> str:
    """`pattern-<name>-<unix millis>.txt`, the name downstream tools expect."""
    if timestamp_ms is None:
        timestamp_ms = _now_ms()
    return f"pattern-{pattern}-{int(timestamp_ms)}{suffix}"


def export_text(
    grid: str,
    directory: str | Path,
    pattern: Optional[str] = None,
    timestamp_ms: Optional[int] = None,
) -> Path:
    pattern = pattern or getattr(grid, "pattern", None)
    if not pattern:
        raise ValueError("pattern name is required to name the export")
    path = Path(directory) / export_filename(pattern, timestamp_ms)
    path.write_text(str(grid), encoding="utf-8", newline="\n")
    logger.info("Exported %s", path)
    return path


def export_image(
    grid: str,
    directory: str | Path,
    pattern: Optional[str] = None,
    timestamp_ms: Optional[int] = None,
    font_size: int = 12,
    fg: str | Sequence[int] = "#333333",
    bg: str | Sequence[int] = "#F0EEE6",
    font_path: Optional[str] = None,
) -> Path:
    pattern = pattern or getattr(grid, "pattern", None)
    if not pattern:
        raise ValueError("pattern name is required to name the export")
    img = render_grid_image(str(grid), font_size=font_size, fg=fg, bg=bg, font_path=font_path)
    path = Path(directory) / export_filename(pattern, timestamp_ms, suffix=".png")
    img.save(path, format="PNG")
    logger.info("Exported %s (%dx%d px)", path, img.width, img.height)
    return path
