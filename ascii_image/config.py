#!/usr/bin/env python3
# ascii_image/config.py
"""
Config loader and defaults for ASCII Image.

Goals:
- Single optional JSON file per user.
- Deep-merge of user config over defaults.
- Basic validation with sane fallbacks for ambient settings.
- Render geometry is never silently "fixed": an invalid width or aspect
  factor is reported as ConfigurationError when the settings are built.

Usage:
    from ascii_image.config import Config
    cfg = Config.load()                 # ~/.config/ascii_image/ascii_image.json
    cfg.update({"render": {"width": 120}})
    settings = cfg.render_settings()
"""

from __future__ import annotations

import copy
import json
import logging
import math
import os
import platform
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from ascii_image.errors import ConfigurationError

log = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

DEFAULT_RAMP = "@%#*+=-:. "          # dense/dark -> sparse/light

DEFAULT_CONFIG: Dict[str, Any] = {
    "render": {
        "width": 80,                      # output columns
        "aspect_correction": 2.0,         # char cell height / width
        "ramp": DEFAULT_RAMP,
    },
    "output": {
        "text_file": None,                # path or None
        "html_file": None,
        "png_file": None,
        "font_path": None,                # monospace TTF for PNG; auto if None
        "font_size": 14,
        "html_font_pt": 8.0,
    },
    "network": {
        "user_agent": "ascii-image/1.2 (+https://example.invalid)",
        "connect_timeout_s": 5.0,
        "read_timeout_s": 15.0,
        "retries": 3,
    },
    "logging": {
        "level": "INFO",
        "http_debug": False,
        "decoder_debug": False,           # Pillow plugin chatter
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "AsciiImage")
    # macOS: ~/Library/Application Support/AsciiImage
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "AsciiImage")
    # Linux and others: ~/.config/ascii_image
    return os.path.join(os.path.expanduser("~/.config"), "ascii_image")

def _default_config_path() -> str:
    """Resolve default config path, honoring ASCII_IMAGE_CONFIG env override."""
    env = os.environ.get("ASCII_IMAGE_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "ascii_image.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
        if minmax:
            lo, hi = minmax
            if x < lo: x = lo
            if x > hi: x = hi
        return x
    except (TypeError, ValueError):
        return float(default)

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    try:
        x = int(v)
        if minmax:
            lo, hi = minmax
            if x < lo: x = lo
            if x > hi: x = hi
        return x
    except (TypeError, ValueError):
        return int(default)

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

def _coerce_path(v: Any) -> Optional[str]:
    return os.path.expanduser(str(v)) if v else None

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied.

    render.width and render.aspect_correction are passed through untouched;
    render_settings() is where they are checked.
    """
    c = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), copy.deepcopy(cfg or {}))

    # output
    o = c["output"]
    for key in ("text_file", "html_file", "png_file", "font_path"):
        o[key] = _coerce_path(o.get(key))
    o["font_size"]    = _coerce_int(o.get("font_size"), 14, (4, 256))
    o["html_font_pt"] = _coerce_num(o.get("html_font_pt"), 8.0, (1.0, 72.0))

    # network
    n = c["network"]
    n["user_agent"] = str(n.get("user_agent") or DEFAULT_CONFIG["network"]["user_agent"])
    n["connect_timeout_s"] = _coerce_num(n.get("connect_timeout_s"), 5.0, (0.2, 60.0))
    n["read_timeout_s"]    = _coerce_num(n.get("read_timeout_s"), 15.0, (0.5, 120.0))
    n["retries"]           = _coerce_int(n.get("retries"), 3, (0, 10))

    # logging
    lg = c["logging"]
    level = str(lg.get("level") or "").upper()
    if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        level = DEFAULT_CONFIG["logging"]["level"]
    lg["level"] = level
    lg["http_debug"] = _coerce_bool(lg.get("http_debug"), DEFAULT_CONFIG["logging"]["http_debug"])
    lg["decoder_debug"] = _coerce_bool(lg.get("decoder_debug"), DEFAULT_CONFIG["logging"]["decoder_debug"])
    lg["file"] = _coerce_path(lg.get("file"))
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Render settings
# ----------------------------

@dataclass(frozen=True)
class RenderSettings:
    """Immutable per-run settings handed to the renderer."""
    target_width: int = 80
    aspect_correction: float = 2.0
    ramp: str = DEFAULT_RAMP

    def __post_init__(self):
        w = self.target_width
        if isinstance(w, bool) or not isinstance(w, int) or w <= 0:
            raise ConfigurationError(f"target width must be a positive integer, got {w!r}")
        a = self.aspect_correction
        if isinstance(a, bool) or not isinstance(a, (int, float)) or not math.isfinite(a) or a <= 0:
            raise ConfigurationError(f"aspect correction must be a positive number, got {a!r}")
        if not isinstance(self.ramp, str) or not self.ramp:
            raise ConfigurationError("character ramp must be a non-empty string")

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def __setitem__(self, k: str, v: Any) -> None:
        self.data[k] = v

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            log.debug("Config file %s not found, using defaults", cfg_path)
            return cls(_validate(DEFAULT_CONFIG), cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
        except (OSError, ValueError) as e:
            log.warning("Failed to read config file %s (%s); using defaults", cfg_path, e)
            user_cfg = {}
        if not isinstance(user_cfg, dict):
            log.warning("Config file %s is not a JSON object; using defaults", cfg_path)
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    def render_settings(self) -> RenderSettings:
        """Build the immutable render settings; raises ConfigurationError."""
        r = self.data["render"]
        return RenderSettings(
            target_width=r.get("width"),
            aspect_correction=r.get("aspect_correction"),
            ramp=r.get("ramp"),
        )

    # Convenience getters
    @property
    def network(self) -> Dict[str, Any]:
        return self.data["network"]

    @property
    def output(self) -> Dict[str, Any]:
        return self.data["output"]


__all__ = [
    "Config",
    "DEFAULT_CONFIG",
    "DEFAULT_RAMP",
    "RenderSettings",
]
