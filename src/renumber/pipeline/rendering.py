"""Rendering helpers shared by the in-place and rebuild pipelines."""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

import fitz  # PyMuPDF

from renumber.errors import RenderFailure
from renumber.fonts import EmbeddedFont, load_font
from renumber.layout import DestBox
from renumber.redact import draw_preview

from .config import RunConfig


def font_for(cfg: RunConfig) -> EmbeddedFont:
    """Load the font selected by ``cfg`` (local file, URL, or built-in)."""
    return load_font(
        font_path=cfg.font_path,
        font_url=cfg.font_url,
        builtin=cfg.builtin_font,
        timeout=cfg.fetch_timeout,
    )


def save_document(doc: fitz.Document, subset: bool = False) -> bytes:
    """Serialise ``doc``; with ``subset`` embedded fonts keep only used glyphs."""
    try:
        if subset:
            doc.subset_fonts()
        return doc.tobytes(garbage=3, deflate=True)
    except Exception as exc:
        raise RenderFailure(f"Could not write output PDF: {exc}") from exc


def write_preview(
    page: fitz.Page,
    boxes: Sequence[DestBox],
    cfg: RunConfig,
    page_index: int,
) -> Optional[str]:
    """Save a PNG of ``page`` with the covered boxes outlined, if enabled."""
    if not cfg.preview_dir:
        return None
    preview_dir = Path(cfg.preview_dir)
    preview_dir.mkdir(parents=True, exist_ok=True)
    preview_file = preview_dir / f"page_{page_index:04d}.png"
    draw_preview(page, boxes, dpi=cfg.preview_dpi).save(preview_file)
    return str(preview_file)


__all__ = ["font_for", "save_document", "write_preview"]
