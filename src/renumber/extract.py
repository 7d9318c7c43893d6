"""PDF text extraction via PyMuPDF.

Produces the two views the pipelines need: positioned fragments per page
(one fragment per whitespace-delimited run inside a text span, built from
per-character boxes) and plain text for the rebuild modes.

Fragments are reported with the y axis pointing up from the bottom edge of
the page: a fragment's ``y`` is the top edge of its run measured from the
page bottom, so its glyph box spans ``y - height`` to ``y``.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import fitz  # PyMuPDF

from renumber.errors import ParseFailure
from renumber.layout import Fragment, Size


def open_pdf(data: bytes) -> fitz.Document:
    """Open PDF bytes, raising :class:`ParseFailure` for unreadable input."""
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        raise ParseFailure(f"Could not open PDF: {exc}") from exc
    if doc.needs_pass:
        doc.close()
        raise ParseFailure("PDF is encrypted")
    if doc.page_count == 0:
        doc.close()
        raise ParseFailure("PDF has no pages")
    return doc


def page_viewport(page: fitz.Page) -> Size:
    rect = page.rect
    return Size(width=rect.width, height=rect.height)


def _runs(chars: Iterable[Dict[str, Any]]) -> Iterable[List[Dict[str, Any]]]:
    run: List[Dict[str, Any]] = []
    for ch in chars:
        if ch["c"].isspace():
            if run:
                yield run
            run = []
        else:
            run.append(ch)
    if run:
        yield run


def _fragment(run: List[Dict[str, Any]], page_height: float) -> Fragment:
    x0 = min(c["bbox"][0] for c in run)
    y0 = min(c["bbox"][1] for c in run)
    x1 = max(c["bbox"][2] for c in run)
    y1 = max(c["bbox"][3] for c in run)
    return Fragment(
        text="".join(c["c"] for c in run),
        x=x0,
        y=page_height - y0,
        width=x1 - x0,
        height=y1 - y0,
    )


def page_fragments(page: fitz.Page) -> List[Fragment]:
    """Return the page's fragments in extraction order.

    Raises
    ------
    ParseFailure
        If PyMuPDF cannot decode the page's text layer.
    """
    try:
        raw = page.get_text("rawdict")
    except Exception as exc:
        raise ParseFailure(f"Text extraction failed on page {page.number}: {exc}") from exc
    page_height = page.rect.height
    fragments: List[Fragment] = []
    for block in raw.get("blocks", []):
        if block.get("type", 0) != 0:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                for run in _runs(span.get("chars", [])):
                    fragments.append(_fragment(run, page_height))
    return fragments


def document_text(doc: fitz.Document) -> str:
    """Plain text of every page, pages separated by a newline."""
    try:
        return "\n".join(page.get_text("text") for page in doc)
    except Exception as exc:
        raise ParseFailure(f"Text extraction failed: {exc}") from exc


__all__ = ["open_pdf", "page_viewport", "page_fragments", "document_text"]
