#!/usr/bin/env python3
# ascii_image/rendering/printer.py
"""Write a finished grid to a text stream."""

import sys
from typing import Optional, TextIO

from ascii_image.rendering.grid import OutputGrid

__all__ = ["print_grid"]


def print_grid(grid: OutputGrid, stream: Optional[TextIO] = None) -> None:
    out = stream if stream is not None else sys.stdout
    for row in grid:
        out.write(row)
        out.write("\n")
    out.flush()
