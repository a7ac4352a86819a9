#!/usr/bin/env python3
# ascii_image/cli.py
"""
Entry point for ASCII Image.
Loads configuration, asks for an image path and prints the ASCII rendering.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional

from ascii_image.config import Config
from ascii_image.errors import AsciiImageError
from ascii_image.logging_conf import setup_logging
from ascii_image.pipeline import run
from ascii_image.prompt import read_image_path
from ascii_image.version import version_info

log = logging.getLogger("ascii_image")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ascii-image",
        description="Render an image as ASCII art. The image path is asked for interactively.",
    )
    parser.add_argument("--config", default=None, help="Path to JSON config file")
    parser.add_argument("-w", "--width", type=int, default=None, help="Output width in columns (default: 80)")
    parser.add_argument("-a", "--aspect", type=float, default=None,
                        help="Character cell height/width correction (default: 2.0)")
    parser.add_argument("--log-level", default=None,
                        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
                        type=str.upper, help="Diagnostics level on stderr")
    parser.add_argument("--text-out", default=None, help="Also write the ASCII text to this file")
    parser.add_argument("--html-out", default=None, help="Also write an HTML page to this file")
    parser.add_argument("--png-out", default=None, help="Also render the ASCII text to this PNG")
    parser.add_argument("--version", action="version", version=version_info())
    return parser


def _overrides(args: argparse.Namespace) -> Dict[str, Any]:
    partial: Dict[str, Any] = {}
    render: Dict[str, Any] = {}
    if args.width is not None:
        render["width"] = args.width
    if args.aspect is not None:
        render["aspect_correction"] = args.aspect
    if render:
        partial["render"] = render
    output = {k: v for k, v in (
        ("text_file", args.text_out),
        ("html_file", args.html_out),
        ("png_file", args.png_out),
    ) if v}
    if output:
        partial["output"] = output
    return partial


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = Config.load(args.config)
    cfg.update(_overrides(args))
    setup_logging(cfg, args.log_level)

    try:
        # Reject bad geometry before asking for anything.
        cfg.render_settings()
        source = read_image_path()
        run(source, cfg, sys.stdout)
    except AsciiImageError as e:
        log.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
