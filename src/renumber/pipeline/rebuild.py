"""Whole-text pipelines: rebuild a plain document or a presentable one.

Both modes drop the source layout. The extracted text is normalised, vanity
and spelled-out numbers are turned into digits, every phone-like run is
replaced, and the result is reflowed onto new pages.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import fitz  # PyMuPDF
from tqdm import tqdm

from renumber.extract import document_text, open_pdf, page_viewport
from renumber.fonts import EmbeddedFont
from renumber.layout import Size
from renumber.logging import get_logger
from renumber.normalize import normalize_lines
from renumber.phone import PhoneMatcher, collapse_spelled_digits, decode_vanity
from renumber.redact import draw_lines
from renumber.reflow import paginate, segment_presentable, split_title, wrap_text

from .config import Mode, PageResult, ProcessOutcome, RunConfig
from .llm_cleanup import llm_cleanup
from .rendering import font_for, save_document

logger = get_logger(__name__)


def prepare_text(
    raw: str, replacement: str, cfg: RunConfig, matcher: Optional[PhoneMatcher] = None
) -> Tuple[str, int]:
    """Normalise ``raw`` and replace every phone number.

    Returns the rewritten text and the number of replacements made.
    """
    matcher = matcher or PhoneMatcher()
    text = normalize_lines(raw, split_letters=cfg.split_letter_digit)
    if cfg.decode_vanity:
        text = decode_vanity(text)
    if cfg.collapse_spelled:
        text = collapse_spelled_digits(text)
    count = len(matcher.find_matches(text))
    return matcher.replace_all(text, replacement), count


def _extract(source_bytes: bytes) -> Tuple[str, Size]:
    src = open_pdf(source_bytes)
    try:
        return document_text(src), page_viewport(src[0])
    finally:
        src.close()


def run_rebuild(
    source_bytes: bytes,
    replacement: str,
    cfg: RunConfig,
    font: Optional[EmbeddedFont] = None,
) -> ProcessOutcome:
    """Reflow the replaced text onto fresh Letter-sized pages."""
    font = font or font_for(cfg)
    raw, _ = _extract(source_bytes)
    text, count = prepare_text(raw, replacement, cfg)

    opts = cfg.rebuild_reflow
    width, height = cfg.rebuild_page_width, cfg.rebuild_page_height
    pages = paginate(text, width, height, opts, font.text_length) or [[]]

    out = fitz.open()
    results: List[PageResult] = []
    try:
        for idx, lines in enumerate(tqdm(pages, desc="Renumber rebuild")):
            page = out.new_page(width=width, height=height)
            draw_lines(
                page,
                lines,
                x=opts.margin,
                top=opts.margin,
                font=font,
                size=opts.font_size,
                line_height=opts.line_height,
            )
            results.append(PageResult(page_index=idx, lines=len(lines)))
        output = save_document(out, subset=font.buffer is not None)
    finally:
        out.close()

    logger.info("rebuild finished", extra={"pages": len(results), "replacements": count})
    return ProcessOutcome(mode=Mode.REBUILD, output=output, pages=results, replacements=count)


class _PageWriter:
    """Writes wrapped lines top to bottom, starting a new page when full."""

    def __init__(self, doc: fitz.Document, size: Size, font: EmbeddedFont, margin: float, top: float):
        self.doc = doc
        self.size = size
        self.font = font
        self.margin = margin
        self.top = top
        self.line_counts: List[int] = []
        self._new_page()

    def _new_page(self) -> None:
        self.page = self.doc.new_page(width=self.size.width, height=self.size.height)
        self.y = self.top
        self.line_counts.append(0)

    def write(self, lines: List[str], size: float, line_height: float) -> None:
        for line in lines:
            if self.y + line_height > self.size.height - self.margin:
                self._new_page()
            self.y = draw_lines(
                self.page,
                [line],
                x=self.margin,
                top=self.y,
                font=self.font,
                size=size,
                line_height=line_height,
            )
            self.line_counts[-1] += 1

    def skip(self, gap: float) -> None:
        self.y += gap


def run_presentable(
    source_bytes: bytes,
    replacement: str,
    cfg: RunConfig,
    font: Optional[EmbeddedFont] = None,
) -> ProcessOutcome:
    """Lay out title, subtitle, bullets and paragraphs on pages sized like the source."""
    font = font or font_for(cfg)
    raw, size = _extract(source_bytes)
    text, count = prepare_text(raw, replacement, cfg)
    if cfg.use_llm:
        title, body = split_title(text)
        text = f"{title}\n{llm_cleanup(body, replacement, cfg)}"
    doc = segment_presentable(text)

    opts = cfg.presentable_reflow
    max_width = size.width - 2 * opts.margin
    measure = font.text_length

    out = fitz.open()
    try:
        writer = _PageWriter(out, size, font, opts.margin, top=opts.margin)
        writer.write(
            wrap_text(doc.title, max_width, measure, cfg.title_size),
            cfg.title_size,
            cfg.title_size * 1.1,
        )
        writer.skip(8)
        if doc.subtitle:
            writer.write(
                wrap_text(doc.subtitle, max_width, measure, cfg.subtitle_size),
                cfg.subtitle_size,
                cfg.subtitle_size * 1.3,
            )
            writer.skip(8)
        for block in doc.blocks:
            writer.write(
                wrap_text(block.text, max_width, measure, opts.font_size),
                opts.font_size,
                opts.line_height,
            )
            writer.skip(10 if block.kind == "paragraph" else 4)
        output = save_document(out, subset=font.buffer is not None)
    finally:
        out.close()

    results = [
        PageResult(page_index=idx, lines=n) for idx, n in enumerate(writer.line_counts)
    ]
    logger.info(
        "presentable finished",
        extra={"pages": len(results), "replacements": count, "blocks": len(doc.blocks)},
    )
    return ProcessOutcome(mode=Mode.PRESENTABLE, output=output, pages=results, replacements=count)


def process_rebuild(
    source_bytes: bytes,
    replacement: str,
    cfg: Optional[RunConfig] = None,
    font: Optional[EmbeddedFont] = None,
) -> bytes:
    return run_rebuild(source_bytes, replacement, cfg or RunConfig(mode=Mode.REBUILD), font).output


def process_presentable(
    source_bytes: bytes,
    replacement: str,
    cfg: Optional[RunConfig] = None,
    font: Optional[EmbeddedFont] = None,
) -> bytes:
    return run_presentable(
        source_bytes, replacement, cfg or RunConfig(mode=Mode.PRESENTABLE), font
    ).output


__all__ = [
    "prepare_text",
    "run_rebuild",
    "run_presentable",
    "process_rebuild",
    "process_presentable",
]
