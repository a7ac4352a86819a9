#!/usr/bin/env python3
# ascii_image/pipeline.py
"""
One run of the converter: load -> validate -> geometry -> sample -> print,
followed by any file exports that are switched on.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional, TextIO

from ascii_image.config import Config, RenderSettings
from ascii_image.loader import open_image
from ascii_image.rendering.ascii_mode import AsciiRenderer
from ascii_image.rendering.exporters import write_html, write_png, write_text
from ascii_image.rendering.grid import OutputGrid
from ascii_image.rendering.printer import print_grid

log = logging.getLogger(__name__)

__all__ = ["render_path", "export_grid", "run"]


def render_path(source: str, settings: RenderSettings, network: Optional[Dict[str, Any]] = None) -> OutputGrid:
    """Decode source and render it; the pixel buffer is released before returning."""
    with open_image(source, network) as image:
        log.info("Loaded image: %dx%d, channels: %d", image.width, image.height, image.channels)
        log.info("Target ASCII width: %d", settings.target_width)
        grid = AsciiRenderer().render(image, settings)
    log.info("Computed ASCII height: %d", grid.height)
    return grid


def export_grid(grid: OutputGrid, output: Dict[str, Any], title: str = "ASCII Art") -> List[str]:
    """Write every enabled file output; returns the written paths."""
    written = []
    if output.get("text_file"):
        written.append(write_text(grid, output["text_file"]))
    if output.get("html_file"):
        written.append(write_html(grid, output["html_file"], output.get("html_font_pt", 8.0), title))
    if output.get("png_file"):
        written.append(write_png(grid, output["png_file"], output.get("font_path"), output.get("font_size", 14)))
    return written


def run(source: str, cfg: Config, stream: Optional[TextIO] = None) -> OutputGrid:
    """
    Full run for one image. Settings are validated before the image is read,
    and nothing reaches the stream unless the whole grid was built.
    """
    settings = cfg.render_settings()
    grid = render_path(source, settings, cfg.network)
    print_grid(grid, stream)
    export_grid(grid, cfg.output, title=os.path.basename(source) or source)
    return grid
