#!/usr/bin/env python3
# ascii_image/logging_conf.py
"""
Central logging setup for ASCII Image.
Diagnostics go to stderr so stdout carries only the ASCII grid.
Optional rotating file log.
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from ascii_image.config import Config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def setup_logging(cfg: Config, level_override: Optional[str] = None) -> None:
    lg = cfg["logging"]
    level_name = (level_override or lg.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)

    log_file = lg.get("file")
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=int(lg.get("rotate_bytes", 5 * 1024 * 1024)),
            backupCount=int(lg.get("rotate_keep", 3)),
            encoding="utf-8",
        )
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)

    # Pillow logs every PNG chunk at DEBUG; keep it out of --log-level DEBUG runs.
    logging.getLogger("PIL").setLevel(logging.DEBUG if lg.get("decoder_debug") else logging.INFO)

    if lg.get("http_debug"):
        logging.getLogger("urllib3").setLevel(logging.DEBUG)
        logging.getLogger("requests").setLevel(logging.DEBUG)
