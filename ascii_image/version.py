#!/usr/bin/env python3
# ascii_image/version.py
"""
Version and build metadata for ASCII Image.
"""

__version__ = "1.2.0"
__build__ = "2026-10-18"
__license__ = "MIT"

def version_info() -> str:
    """Return human-readable version string."""
    return f"ASCII Image v{__version__} (build {__build__})"
