#!/usr/bin/env python3
# ascii_image/loader.py
"""
Image loader.

Decodes a file (or http(s) URL) with Pillow into a SourceImage: a
row-major, channel-interleaved uint8 buffer with 1..4 channels.
Any failure surfaces as DecodeError carrying the decoder's reason.
"""

from __future__ import annotations

import io
import logging
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Tuple

import numpy as np
from PIL import Image

from ascii_image.errors import DecodeError
from ascii_image.remote import fetch_bytes, is_url

log = logging.getLogger(__name__)

__all__ = [
    "SourceImage",
    "SUPPORTED_EXTENSIONS",
    "is_image_file",
    "load_image",
    "open_image",
]

SUPPORTED_EXTENSIONS = frozenset({
    ".png", ".jpg", ".jpeg", ".bmp", ".tga", ".gif",
    ".webp", ".tif", ".tiff", ".ppm", ".pgm",
})

# Pillow mode -> mode we keep. Channel count follows from the target mode.
_MODE_MAP = {
    "L": "L",
    "LA": "LA",
    "RGB": "RGB",
    "RGBA": "RGBA",
    "1": "L",
    "PA": "RGBA",
    "La": "LA",
    "RGBa": "RGBA",
}

_CHANNELS = {"L": 1, "LA": 2, "RGB": 3, "RGBA": 4}

# 16-bit and 32-bit integer grayscale, scaled down to 8 bits (not clipped)
_WIDE_GRAY_MODES = frozenset({"I", "I;16", "I;16B", "I;16L", "I;16N"})


@dataclass
class SourceImage:
    """Decoded pixel buffer, read-only after load."""
    width: int
    height: int
    channels: int
    pixels: Optional[np.ndarray]  # (height, width, channels) uint8

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"image dimensions must be positive, got {self.width}x{self.height}")
        if not 1 <= self.channels <= 4:
            raise ValueError(f"channel count must be 1..4, got {self.channels}")
        buf = np.asarray(self.pixels, dtype=np.uint8)
        expected = self.width * self.height * self.channels
        if buf.size != expected:
            raise ValueError(
                f"pixel buffer holds {buf.size} bytes, expected {expected} "
                f"({self.width}x{self.height}x{self.channels})"
            )
        buf = buf.reshape(self.height, self.width, self.channels)
        buf.setflags(write=False)
        self.pixels = buf

    @classmethod
    def from_bytes(cls, width: int, height: int, channels: int, data: bytes) -> "SourceImage":
        """Wrap a flat row-major, channel-interleaved byte buffer."""
        return cls(width, height, channels, np.frombuffer(bytes(data), dtype=np.uint8))

    @classmethod
    def from_pil(cls, img: Image.Image) -> "SourceImage":
        if img.mode in _WIDE_GRAY_MODES or img.mode == "F":
            gray = _gray8(img)
            return cls(img.width, img.height, 1, gray.reshape(img.height, img.width, 1))
        mode = _normalized_mode(img)
        if img.mode != mode:
            img = img.convert(mode)
        arr = np.asarray(img, dtype=np.uint8)
        channels = _CHANNELS[mode]
        return cls(img.width, img.height, channels, arr.reshape(img.height, img.width, channels))

    def pixel(self, x: int, y: int) -> Tuple[int, ...]:
        """Return the channel values at (x, y). Out-of-range raises IndexError."""
        if self.pixels is None:
            raise ValueError("pixel buffer already released")
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return tuple(int(v) for v in self.pixels[y, x])

    def release(self) -> None:
        self.pixels = None

    @property
    def released(self) -> bool:
        return self.pixels is None


def _gray8(img: Image.Image) -> np.ndarray:
    """
    Single-channel wide image -> uint8.
    Integer samples are treated as 0..65535 and keep their top 8 bits;
    float samples are already on the 0..255 scale and are clipped.
    """
    arr = np.asarray(img)
    if img.mode == "F":
        return np.clip(np.nan_to_num(arr, nan=0.0), 0, 255).astype(np.uint8)
    return (np.clip(arr.astype(np.int64), 0, 65535) >> 8).astype(np.uint8)


def _normalized_mode(img: Image.Image) -> str:
    if img.mode == "P":
        return "RGBA" if "transparency" in img.info else "RGB"
    return _MODE_MAP.get(img.mode, "RGB")


def is_image_file(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in SUPPORTED_EXTENSIONS


def _decode(fp: Any, source: str) -> SourceImage:
    try:
        with Image.open(fp) as img:
            img.load()
            if img.width <= 0 or img.height <= 0:
                raise DecodeError(source, f"image has no pixels ({img.width}x{img.height})")
            return SourceImage.from_pil(img)
    except FileNotFoundError as e:
        raise DecodeError(source, e.strerror or "file not found") from e
    except (OSError, ValueError, SyntaxError, Image.DecompressionBombError) as e:
        raise DecodeError(source, str(e) or type(e).__name__) from e


def load_image(source: str, network: Optional[Dict[str, Any]] = None) -> SourceImage:
    """
    Decode source into a SourceImage.
    source is used verbatim as a path unless it is an http(s) URL.
    """
    if is_url(source):
        data = fetch_bytes(source, network)
        log.debug("Fetched %d bytes from %s", len(data), source)
        return _decode(io.BytesIO(data), source)

    if os.path.isdir(source):
        raise DecodeError(source, "path is a directory")
    if os.path.exists(source) and not is_image_file(source):
        log.warning("'%s' does not have a known image extension; trying to decode anyway", source)
    return _decode(source, source)


@contextmanager
def open_image(source: str, network: Optional[Dict[str, Any]] = None) -> Iterator[SourceImage]:
    """Load an image and release its buffer on every exit path."""
    image = load_image(source, network)
    try:
        yield image
    finally:
        image.release()
