#!/usr/bin/env python3
# ascii_image/errors.py
"""
Error taxonomy for ASCII Image.
Every failure stops the run; cli.main reports it and exits non-zero.
"""

from __future__ import annotations

__all__ = [
    "AsciiImageError",
    "ConfigurationError",
    "DecodeError",
    "ExportError",
]


class AsciiImageError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(AsciiImageError):
    """Invalid render settings (width, aspect factor, ramp) or missing input."""


class DecodeError(AsciiImageError):
    """Image could not be read or decoded."""

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"cannot load image '{source}': {reason}")


class ExportError(AsciiImageError):
    """A text/HTML/PNG output file could not be written."""
