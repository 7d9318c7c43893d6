"""Layout-preserving replacement: cover each phone number where it is drawn."""

from __future__ import annotations

import time
from typing import List, Optional

import fitz  # PyMuPDF
from tqdm import tqdm

from renumber.align import assemble_lines, map_match_to_box
from renumber.extract import open_pdf, page_fragments, page_viewport
from renumber.fonts import EmbeddedFont
from renumber.layout import DestBox
from renumber.logging import get_logger
from renumber.phone import PhoneMatcher
from renumber.redact import redact_box

from .config import MatchRecord, Mode, PageResult, ProcessOutcome, RunConfig
from .rendering import font_for, save_document, write_preview

logger = get_logger(__name__)


def render_page(
    src_page: fitz.Page,
    dest_page: fitz.Page,
    replacement: str,
    font: EmbeddedFont,
    cfg: RunConfig,
    matcher: PhoneMatcher,
    page_index: int,
) -> PageResult:
    """Find phone numbers on ``src_page`` and cover them on ``dest_page``."""

    t0 = time.perf_counter()
    fragments = page_fragments(src_page)
    lines = assemble_lines(fragments, cfg.layout)
    t_assemble = time.perf_counter()

    source_viewport = page_viewport(src_page)
    dest_size = page_viewport(dest_page)
    records: List[MatchRecord] = []
    boxes: List[DestBox] = []
    for line_no, line in enumerate(lines):
        for match in matcher.find_matches(line.text):
            box = map_match_to_box(line, match, source_viewport, dest_size, cfg.layout)
            records.append(
                MatchRecord(
                    text=match.matched_text,
                    line=line_no,
                    start=match.start,
                    end=match.end,
                    box=list(box.as_tuple()) if box else None,
                )
            )
            if box is None:
                continue
            redact_box(dest_page, box, replacement, font, cfg.layout)
            boxes.append(box)
            logger.debug(
                "covered match",
                extra={"page": page_index, "text": match.matched_text, "box": box.as_tuple()},
            )
    t_redact = time.perf_counter()

    timings = None
    if cfg.instrument:
        timings = {
            "assemble": t_assemble - t0,
            "redact": t_redact - t_assemble,
            "total": t_redact - t0,
        }
    return PageResult(
        page_index=page_index,
        fragments=len(fragments),
        lines=len(lines),
        matches=records,
        boxes_applied=len(boxes),
        timings=timings,
        preview_path=write_preview(dest_page, boxes, cfg, page_index),
    )


def run_in_place(
    source_bytes: bytes,
    replacement: str,
    cfg: RunConfig,
    font: Optional[EmbeddedFont] = None,
) -> ProcessOutcome:
    """Copy every page into a new document and cover its phone numbers.

    Pages are handled strictly in order: each source page is appended to the
    output before anything is drawn on it.
    """
    font = font or font_for(cfg)
    matcher = PhoneMatcher()
    src = open_pdf(source_bytes)
    out = fitz.open()
    pages: List[PageResult] = []
    try:
        for idx in tqdm(range(src.page_count), desc="Renumber in place"):
            out.insert_pdf(src, from_page=idx, to_page=idx)
            dest_page = out[out.page_count - 1]
            pages.append(
                render_page(src[idx], dest_page, replacement, font, cfg, matcher, idx)
            )
        output = save_document(out, subset=font.buffer is not None)
    finally:
        out.close()
        src.close()

    total = sum(p.boxes_applied for p in pages)
    if total == 0:
        logger.info("no phone numbers found", extra={"pages": len(pages)})
    logger.info(
        "in-place replacement finished",
        extra={"pages": len(pages), "replacements": total},
    )
    return ProcessOutcome(mode=Mode.IN_PLACE, output=output, pages=pages, replacements=total)


def process_in_place(
    source_bytes: bytes,
    replacement: str,
    cfg: Optional[RunConfig] = None,
    font: Optional[EmbeddedFont] = None,
) -> bytes:
    """Return a copy of the PDF with every phone number covered and restamped."""
    return run_in_place(source_bytes, replacement, cfg or RunConfig(), font).output


__all__ = ["render_page", "run_in_place", "process_in_place"]
