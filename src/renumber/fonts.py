"""Font acquisition for replacement stamps and rebuilt pages.

A Unicode font (Noto Sans by default) is downloaded once per process and
embedded into every output document. For offline use a local TTF or one of
PyMuPDF's built-in Base-14 fonts can be selected instead; the latter only
covers Latin-1.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

import fitz  # PyMuPDF
import requests

from renumber.errors import RenderFailure, SourceUnavailable
from renumber.logging import get_logger

logger = get_logger(__name__)

DEFAULT_FONT_URL = (
    "https://raw.githubusercontent.com/GreatWizard/notosans-fontface/"
    "master/fonts/NotoSans-Regular.ttf"
)
EMBEDDED_FONT_NAME = "RenumberSans"


@dataclass
class EmbeddedFont:
    """A font usable for drawing on PyMuPDF pages.

    ``buffer`` is ``None`` for built-in fonts, which need no embedding.
    """

    name: str
    font: fitz.Font
    buffer: Optional[bytes] = None

    def register(self, page: fitz.Page) -> None:
        if self.buffer is None:
            return
        try:
            page.insert_font(fontname=self.name, fontbuffer=self.buffer)
        except Exception as exc:
            raise RenderFailure(f"Font embedding rejected: {exc}") from exc

    def text_length(self, text: str, size: float) -> float:
        return self.font.text_length(text, fontsize=size)


@lru_cache(maxsize=4)
def _download(url: str, timeout: float) -> bytes:
    try:
        r = requests.get(url, timeout=timeout)
    except requests.RequestException as exc:
        raise SourceUnavailable(f"Font download failed: {exc}") from exc
    if not r.ok:
        raise SourceUnavailable(f"Font download failed ({r.status_code})")
    logger.info("font downloaded", extra={"url": url, "bytes": len(r.content)})
    return r.content


def _from_buffer(data: bytes) -> EmbeddedFont:
    try:
        font = fitz.Font(fontbuffer=data)
    except Exception as exc:
        raise RenderFailure(f"Unusable font file: {exc}") from exc
    return EmbeddedFont(name=EMBEDDED_FONT_NAME, font=font, buffer=data)


def load_font(
    *,
    font_path: Optional[str] = None,
    font_url: Optional[str] = None,
    builtin: str = "helv",
    timeout: float = 30.0,
) -> EmbeddedFont:
    """Resolve a font from a local file, a URL, or a built-in name.

    Parameters
    ----------
    font_path:
        Local TTF/OTF file. Takes precedence over ``font_url``.
    font_url:
        HTTP(S) location of a font file.
    builtin:
        PyMuPDF built-in font name used when neither source is given.
    timeout:
        Download timeout in seconds.

    Raises
    ------
    SourceUnavailable
        If the file is missing or the download fails.
    RenderFailure
        If the bytes are not a usable font.
    """
    if font_path:
        path = Path(font_path)
        if not path.is_file():
            raise SourceUnavailable(f"Font file not found: {font_path}")
        return _from_buffer(path.read_bytes())
    if font_url:
        return _from_buffer(_download(font_url, timeout))
    try:
        font = fitz.Font(fontname=builtin)
    except Exception as exc:
        raise RenderFailure(f"Unknown built-in font: {builtin}") from exc
    return EmbeddedFont(name=builtin, font=font)


__all__ = ["DEFAULT_FONT_URL", "EmbeddedFont", "load_font"]
