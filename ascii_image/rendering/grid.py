#!/usr/bin/env python3
# ascii_image/rendering/grid.py
"""Character grid produced by the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Sequence, Tuple

__all__ = ["OutputGrid"]


@dataclass(frozen=True)
class OutputGrid:
    """Rows of equal-length strings, top to bottom."""
    rows: Tuple[str, ...]

    def __post_init__(self):
        rows = tuple(self.rows)
        if not rows:
            raise ValueError("grid must have at least one row")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"row {i} has {len(row)} characters, expected {width}")
        object.__setattr__(self, "rows", rows)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "OutputGrid":
        return cls(tuple(rows))

    @property
    def width(self) -> int:
        return len(self.rows[0])

    @property
    def height(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[str]:
        return iter(self.rows)

    def to_text(self) -> str:
        """Rows joined with a single newline terminator each."""
        return "".join(row + "\n" for row in self.rows)
