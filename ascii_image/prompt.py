#!/usr/bin/env python3
# ascii_image/prompt.py
"""
The single interactive question: which image to render.

On a terminal this is a prompt_toolkit prompt with file-system completion.
When stdin or stdout is redirected, one full line is read from stdin; only
the line terminator is removed so paths with spaces (even leading or
trailing ones) survive verbatim.
"""

from __future__ import annotations

import sys
from typing import Optional, TextIO

from prompt_toolkit import prompt
from prompt_toolkit.completion import PathCompleter

from ascii_image.errors import ConfigurationError

__all__ = ["PROMPT_TEXT", "read_image_path"]

PROMPT_TEXT = "Image file path: "


def _strip_eol(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith("\n") or line.endswith("\r"):
        return line[:-1]
    return line


def _interactive(stdin: TextIO) -> bool:
    try:
        return stdin.isatty() and sys.stdout.isatty()
    except (AttributeError, ValueError):
        return False


def read_image_path(stdin: Optional[TextIO] = None, prompt_stream: Optional[TextIO] = None) -> str:
    """Ask for the image path and return it untrimmed."""
    stdin = stdin if stdin is not None else sys.stdin

    if _interactive(stdin):
        try:
            path = prompt(PROMPT_TEXT, completer=PathCompleter(expanduser=True))
        except EOFError:
            raise ConfigurationError("no image path given") from None
    else:
        # stdout is reserved for the grid
        err = prompt_stream if prompt_stream is not None else sys.stderr
        err.write(PROMPT_TEXT)
        err.flush()
        line = stdin.readline()
        if not line:
            raise ConfigurationError("no image path given")
        path = _strip_eol(line)

    if not path:
        raise ConfigurationError("no image path given")
    return path
