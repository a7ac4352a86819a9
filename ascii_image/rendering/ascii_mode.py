#!/usr/bin/env python3
# ascii_image/rendering/ascii_mode.py
"""
ASCII renderer backend.

Nearest-center point sampling: each output cell takes the single source
pixel under its center, averages R, G, B with integer truncation and maps
that brightness onto the ramp (index 0 = darkest).
"""

from __future__ import annotations

import logging

import numpy as np

from ascii_image.config import RenderSettings
from ascii_image.geometry import compute_target_height
from ascii_image.loader import SourceImage
from ascii_image.rendering.grid import OutputGrid

log = logging.getLogger(__name__)

__all__ = [
    "AsciiRenderer",
    "brightness",
    "ramp_index",
    "sample_coordinates",
]


def sample_coordinates(size: int, cells: int) -> np.ndarray:
    """
    Source index under the center of each of `cells` cells spanning `size` pixels,
    clamped to [0, size - 1].
    """
    scale = size / cells
    coords = np.floor((np.arange(cells) + 0.5) * scale).astype(np.int64)
    return np.clip(coords, 0, size - 1)


def brightness(r: int, g: int, b: int) -> int:
    return (int(r) + int(g) + int(b)) // 3


def ramp_index(gray: int, ramp_length: int) -> int:
    # floor(gray / 255 * (n - 1)) in exact integer arithmetic
    idx = (int(gray) * (ramp_length - 1)) // 255
    return max(0, min(idx, ramp_length - 1))


class AsciiRenderer:
    name = "ascii"

    @staticmethod
    def _gray(cells: np.ndarray) -> np.ndarray:
        """(rows, cols, channels) uint8 -> (rows, cols) int brightness; alpha ignored."""
        c = cells.astype(np.int32)
        r = c[..., 0]
        g = c[..., 1] if c.shape[-1] > 1 else r
        b = c[..., 2] if c.shape[-1] > 2 else r
        return (r + g + b) // 3

    def render(self, image: SourceImage, settings: RenderSettings) -> OutputGrid:
        if image.released:
            raise ValueError("cannot render a released image")

        w = settings.target_width
        h = compute_target_height(image.width, image.height, w, settings.aspect_correction)
        log.debug("Sampling %dx%d source into %dx%d cells", image.width, image.height, w, h)

        xs = sample_coordinates(image.width, w)
        ys = sample_coordinates(image.height, h)
        cells = image.pixels[np.ix_(ys, xs)]

        n = len(settings.ramp)
        idx = np.clip((self._gray(cells) * (n - 1)) // 255, 0, n - 1)
        glyphs = np.array(list(settings.ramp))
        return OutputGrid(tuple("".join(glyphs[idx[y, :]].tolist()) for y in range(h)))
