#!/usr/bin/env python3
# ascii_image/remote.py
"""
HTTP fetch for images given as http(s) URLs.

Same session setup as a tile fetcher: one requests.Session with a
urllib3 Retry policy mounted for both schemes.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ascii_image.errors import DecodeError

log = logging.getLogger(__name__)

__all__ = ["is_url", "make_session", "fetch_bytes"]


def is_url(source: str) -> bool:
    s = source.lower()
    return s.startswith("http://") or s.startswith("https://")


def make_session(user_agent: str, retries: int = 3) -> requests.Session:
    """Build an HTTP session with retry on transient server errors."""
    session = requests.Session()
    session.headers["User-Agent"] = user_agent
    retry = Retry(
        total=retries,
        connect=retries,
        read=retries,
        backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def fetch_bytes(url: str, network: Optional[Dict[str, Any]] = None) -> bytes:
    """
    Download the body at url.
    Raises DecodeError on transport failure, non-200 status or empty body.
    """
    network = network or {}
    session = make_session(
        network.get("user_agent", "ascii-image"),
        int(network.get("retries", 3)),
    )
    timeout = (
        float(network.get("connect_timeout_s", 5.0)),
        float(network.get("read_timeout_s", 15.0)),
    )
    log.debug("GET %s", url)
    try:
        with session:
            r = session.get(url, timeout=timeout)
    except requests.RequestException as e:
        raise DecodeError(url, f"download failed: {e}") from e
    if r.status_code != 200:
        raise DecodeError(url, f"HTTP {r.status_code}")
    if not r.content:
        raise DecodeError(url, "empty response body")
    return r.content
