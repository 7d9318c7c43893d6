"""Text reflow for rebuilt documents.

Greedy word wrapping with measured widths, pagination by line count, and the
segmentation used by the "presentable" layout (title, subtitle, bullets and
paragraphs).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional

import regex as re

Measure = Callable[[str, float], float]

SUBTITLE_MAX_CHARS = 80
BULLET_RE = re.compile(r"^(?:[•·▪●*\-–]\s*|\d{1,3}[.)]\s+)")


@dataclass(frozen=True)
class ReflowOptions:
    margin: float = 36.0
    font_size: float = 10.0
    line_height: float = 12.0


def _split_token(token: str, measure: Measure, size: float, max_width: float) -> List[str]:
    pieces: List[str] = []
    chunk = ""
    for ch in token:
        candidate = chunk + ch
        if not chunk or measure(candidate, size) <= max_width:
            chunk = candidate
        else:
            pieces.append(chunk)
            chunk = ch
    if chunk:
        pieces.append(chunk)
    return pieces


def wrap_line(text: str, max_width: float, measure: Measure, size: float) -> List[str]:
    """Greedy wrap of one logical line; overlong tokens are split per character."""
    lines: List[str] = []
    cur = ""
    for word in text.split():
        candidate = f"{cur} {word}" if cur else word
        if measure(candidate, size) <= max_width:
            cur = candidate
            continue
        if cur:
            lines.append(cur)
        if measure(word, size) > max_width:
            pieces = _split_token(word, measure, size, max_width)
            lines.extend(pieces[:-1])
            cur = pieces[-1]
        else:
            cur = word
    if cur:
        lines.append(cur)
    return lines


def wrap_text(text: str, max_width: float, measure: Measure, size: float) -> List[str]:
    """Wrap ``text``; newlines are kept as hard breaks and blank lines dropped."""
    out: List[str] = []
    for raw in text.split("\n"):
        out.extend(wrap_line(raw, max_width, measure, size))
    return out


def lines_per_page(page_height: float, options: ReflowOptions) -> int:
    return max(1, math.floor((page_height - 2 * options.margin) / options.line_height))


def paginate(
    text: str,
    page_width: float,
    page_height: float,
    options: ReflowOptions,
    measure: Measure,
) -> List[List[str]]:
    """Wrap ``text`` to the page width and cut it into pages.

    Parameters
    ----------
    text:
        Text to lay out.
    page_width, page_height:
        Output page size.
    options:
        Margin, font size and line height.
    measure:
        ``measure(text, size)`` returns the rendered width of ``text``.

    Returns
    -------
    list[list[str]]
        One list of line strings per page.
    """
    max_width = page_width - 2 * options.margin
    lines = wrap_text(text, max_width, measure, options.font_size)
    per_page = lines_per_page(page_height, options)
    return [lines[i : i + per_page] for i in range(0, len(lines), per_page)]


@dataclass
class Block:
    kind: str  # "bullet" | "paragraph"
    text: str


@dataclass
class PresentableDoc:
    title: str
    subtitle: Optional[str] = None
    blocks: List[Block] = field(default_factory=list)


def is_artifact(line: str) -> bool:
    """True for residue such as page numbers: mostly digits, few distinct characters."""
    compact = "".join(line.split())
    if not compact:
        return True
    digits = sum(ch.isdigit() for ch in compact)
    return digits / len(compact) >= 0.6 and len(set(compact)) <= 3


def split_title(text: str) -> tuple[str, str]:
    """Return the first non-empty line and the text after it."""
    lines = [ln.strip() for ln in text.splitlines()]
    for idx, line in enumerate(lines):
        if line:
            return line, "\n".join(lines[idx + 1 :])
    return "Document", text


def segment_presentable(text: str) -> PresentableDoc:
    """Segment cleaned text into title, optional subtitle, bullets and paragraphs."""
    seen = set()
    lines: List[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            lines.append("")
            continue
        key = line.casefold()
        if key in seen:
            continue
        seen.add(key)
        lines.append(line)

    non_empty = [ln for ln in lines if ln]
    if not non_empty:
        return PresentableDoc(title="Document")
    doc = PresentableDoc(title=non_empty[0])
    rest = non_empty[1:]
    if (
        rest
        and len(rest[0]) <= SUBTITLE_MAX_CHARS
        and not BULLET_RE.match(rest[0])
        and not is_artifact(rest[0])
    ):
        doc.subtitle = rest[0]

    # keep blank-line paragraph breaks from the original sequence
    consumed = {doc.title.casefold()}
    if doc.subtitle:
        consumed.add(doc.subtitle.casefold())
    paragraph: List[str] = []

    def flush() -> None:
        if paragraph:
            doc.blocks.append(Block("paragraph", " ".join(paragraph)))
            paragraph.clear()

    for line in lines:
        if not line:
            flush()
            continue
        if line.casefold() in consumed:
            consumed.discard(line.casefold())
            continue
        bullet = BULLET_RE.match(line)
        if bullet:
            body = line[bullet.end() :].strip()
            if not body or is_artifact(body):
                continue
            flush()
            doc.blocks.append(Block("bullet", "• " + body))
        elif is_artifact(line):
            continue
        else:
            paragraph.append(line)
    flush()
    return doc


__all__ = [
    "ReflowOptions",
    "wrap_line",
    "wrap_text",
    "lines_per_page",
    "paginate",
    "Block",
    "PresentableDoc",
    "is_artifact",
    "split_title",
    "segment_presentable",
]
