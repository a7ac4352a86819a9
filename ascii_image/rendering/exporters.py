#!/usr/bin/env python3
# ascii_image/rendering/exporters.py
"""
File outputs for a rendered grid.

- text: exactly what the terminal printer writes
- html: standalone page, <pre> block, black on white
- png:  glyphs drawn with Pillow onto a white canvas

All outputs are monochrome. Parent directories are created on demand.
"""

from __future__ import annotations

import html
import logging
import os
from typing import Optional, Union

from PIL import Image, ImageDraw, ImageFont

from ascii_image.errors import ExportError
from ascii_image.rendering.grid import OutputGrid

log = logging.getLogger(__name__)

__all__ = [
    "write_text",
    "write_html",
    "render_png",
    "write_png",
    "load_font",
]

# Common monospace fonts, first hit wins when no font is configured.
_FONT_CANDIDATES = (
    "/usr/share/fonts/truetype/dejavu/DejaVuSansMono.ttf",
    "/usr/share/fonts/truetype/liberation/LiberationMono-Regular.ttf",
    "/usr/share/fonts/truetype/freefont/FreeMono.ttf",
    "/usr/share/fonts/truetype/noto/NotoMono-Regular.ttf",
    "/System/Library/Fonts/Menlo.ttc",
    "C:\\Windows\\Fonts\\consola.ttf",
)

_PAD = 10          # canvas margin in px
_LINE_GAP = 2      # extra px between rows

_HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
body {{ background: #ffffff; color: #000000; margin: 0; padding: 1em; }}
pre {{ font-family: Consolas, "DejaVu Sans Mono", Menlo, monospace; font-size: {font_pt:.2f}pt; line-height: 1.0; margin: 0; }}
</style>
</head>
<body>
<pre>
{body}</pre>
</body>
</html>
"""

FontType = Union[ImageFont.ImageFont, ImageFont.FreeTypeFont]


def _ensure_parent(path: str) -> None:
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)


def write_text(grid: OutputGrid, path: str) -> str:
    try:
        _ensure_parent(path)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(grid.to_text())
    except OSError as e:
        raise ExportError(f"cannot write text output '{path}': {e}") from e
    log.info("Wrote text output: %s", path)
    return path


def write_html(grid: OutputGrid, path: str, font_size_pt: float = 8.0, title: str = "ASCII Art") -> str:
    page = _HTML_TEMPLATE.format(
        title=html.escape(title),
        font_pt=float(font_size_pt),
        body=html.escape(grid.to_text(), quote=False),
    )
    try:
        _ensure_parent(path)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(page)
    except OSError as e:
        raise ExportError(f"cannot write HTML output '{path}': {e}") from e
    log.info("Wrote HTML output: %s", path)
    return path


def load_font(font_path: Optional[str] = None, font_size: int = 14) -> FontType:
    """
    Load the configured TrueType font, else the first available candidate,
    else Pillow's built-in bitmap font.
    """
    if font_path:
        try:
            return ImageFont.truetype(font_path, font_size)
        except OSError as e:
            raise ExportError(f"cannot load font '{font_path}': {e}") from e
    for candidate in _FONT_CANDIDATES:
        if os.path.exists(candidate):
            try:
                return ImageFont.truetype(candidate, font_size)
            except OSError:
                log.debug("Font candidate %s not loadable", candidate)
    log.debug("No TrueType monospace font found, using Pillow default font")
    return ImageFont.load_default()


def render_png(grid: OutputGrid, font: Optional[FontType] = None) -> Image.Image:
    """Draw the grid as black text on a white RGB canvas."""
    font = font or load_font()
    # Cell size from a wide glyph; monospace fonts give every glyph this advance.
    cell_w = max(1, int(round(font.getlength("M"))))
    _, top, _, bottom = font.getbbox("@Mg|")
    cell_h = max(1, bottom - min(0, top)) + _LINE_GAP

    width = grid.width * cell_w + 2 * _PAD
    height = grid.height * cell_h + 2 * _PAD
    img = Image.new("RGB", (width, height), (255, 255, 255))
    draw = ImageDraw.Draw(img)
    y = _PAD
    for row in grid:
        draw.text((_PAD, y), row, font=font, fill=(0, 0, 0))
        y += cell_h
    return img


def write_png(grid: OutputGrid, path: str, font_path: Optional[str] = None, font_size: int = 14) -> str:
    img = render_png(grid, load_font(font_path, font_size))
    try:
        _ensure_parent(path)
        img.save(path, "PNG")
    except OSError as e:
        raise ExportError(f"cannot write PNG output '{path}': {e}") from e
    log.info("Wrote PNG output: %s (%dx%d)", path, img.width, img.height)
    return path
