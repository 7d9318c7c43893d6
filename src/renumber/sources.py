"""Loading source documents from local paths or URLs."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

import regex as re
import requests

from renumber.errors import SourceUnavailable

_UNSAFE_NAME_RE = re.compile(r"[^a-zA-Z0-9._-]")


def is_url(ref: str) -> bool:
    return urlparse(ref).scheme in {"http", "https"}


def fetch_bytes(url: str, timeout: float = 60.0) -> bytes:
    """Download ``url``; any network or HTTP error becomes :class:`SourceUnavailable`."""
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise SourceUnavailable(f"Failed to fetch PDF: {exc}") from exc
    if not r.ok:
        raise SourceUnavailable(f"Failed to fetch PDF ({r.status_code})")
    return r.content


def load_source(ref: str, timeout: float = 60.0) -> bytes:
    """Read a document from a URL or a local file path."""
    if is_url(ref):
        return fetch_bytes(ref, timeout=timeout)
    path = Path(ref)
    if not path.is_file():
        raise SourceUnavailable(f"Input not found: {ref}")
    return path.read_bytes()


def safe_file_name(ref: str, default: str = "output.pdf") -> str:
    """Last path component of ``ref`` with unsafe characters replaced by ``_``."""
    name = urlparse(ref).path if is_url(ref) else ref
    name = name.replace("\\", "/").rstrip("/").split("/")[-1]
    return _UNSAFE_NAME_RE.sub("_", name or default)


__all__ = ["is_url", "fetch_bytes", "load_source", "safe_file_name"]
