#!/usr/bin/env python3
# ascii_image/geometry.py
"""
Output grid geometry.
Converts source pixel dimensions into the character-grid height for a fixed
column count, correcting for terminal cells being taller than they are wide.
"""

import math

from ascii_image.errors import ConfigurationError

__all__ = [
    "round_half_away",
    "compute_target_height",
]


def round_half_away(x: float) -> int:
    """Round to nearest int, ties away from zero (C round(), not Python's)."""
    if x >= 0:
        return int(math.floor(x + 0.5))
    return -int(math.floor(-x + 0.5))


def compute_target_height(width: int, height: int, target_width: int, aspect_correction: float = 2.0) -> int:
    """
    Rows needed to keep the image's proportions at target_width columns.
    height * target_width / (width * aspect_correction), rounded, at least 1.
    """
    if isinstance(target_width, bool) or not isinstance(target_width, int) or target_width <= 0:
        raise ConfigurationError(f"target width must be a positive integer, got {target_width!r}")
    if not aspect_correction > 0 or not math.isfinite(aspect_correction):
        raise ConfigurationError(f"aspect correction must be a positive number, got {aspect_correction!r}")
    if width <= 0 or height <= 0:
        raise ValueError(f"image dimensions must be positive, got {width}x{height}")
    rows = round_half_away((height * target_width) / (width * aspect_correction))
    return max(1, rows)
