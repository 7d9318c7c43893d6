"""Align character spans to positioned text fragments to produce cover boxes.

Lines are rebuilt from a page's fragments by vertical clustering, each line
gets a span table mapping character ranges back to fragments, and a match on
the line string is turned into the union box of the fragments it touches.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from renumber.layout import (
    DestBox,
    Fragment,
    LayoutConfig,
    Line,
    Size,
    SourceBox,
    Span,
)
from renumber.phone import Match

DEFAULT_LAYOUT = LayoutConfig()


def _find_line(lines: List[Line], y: float, cfg: LayoutConfig) -> Optional[Line]:
    if cfg.line_policy == "nearest":
        best: Optional[Line] = None
        best_dist = 0.0
        for line in lines:
            dist = abs(line.y_reference - y)
            if dist <= cfg.line_y_tol and (best is None or dist < best_dist):
                best, best_dist = line, dist
        return best
    # first-fit: can mis-cluster text that drifts vertically; kept as the default
    for line in lines:
        if abs(line.y_reference - y) <= cfg.line_y_tol:
            return line
    return None


def _build_text(line: Line, cfg: LayoutConfig) -> None:
    parts: List[str] = []
    spans: List[Span] = []
    cursor = 0
    prev: Optional[Fragment] = None
    for idx, frag in enumerate(line.fragments):
        if prev is not None and frag.x - (prev.x + prev.width) > cfg.word_gap_tol:
            parts.append(" ")
            spans.append(Span(cursor, cursor + 1, None))
            cursor += 1
        parts.append(frag.text)
        spans.append(Span(cursor, cursor + len(frag.text), idx))
        cursor += len(frag.text)
        prev = frag
    line.text = "".join(parts)
    line.spans = spans


def assemble_lines(
    fragments: Sequence[Fragment], config: Optional[LayoutConfig] = None
) -> List[Line]:
    """Group fragments into visual lines and build their text and span tables.

    Parameters
    ----------
    fragments:
        Page fragments in extraction order.
    config:
        Tolerances; defaults to :class:`LayoutConfig` defaults.

    Returns
    -------
    list[Line]
        Lines ordered by ``y_reference`` descending, each with fragments
        ordered left to right.
    """
    cfg = config or DEFAULT_LAYOUT
    lines: List[Line] = []
    for frag in fragments:
        line = _find_line(lines, frag.y, cfg)
        if line is None:
            line = Line(y_reference=frag.y)
            lines.append(line)
        line.fragments.append(frag)

    lines.sort(key=lambda ln: ln.y_reference, reverse=True)
    for line in lines:
        line.fragments.sort(key=lambda f: f.x)
        _build_text(line, cfg)
    return lines


def contributing_fragments(line: Line, match: Match) -> List[Fragment]:
    """Fragments whose spans overlap ``[match.start, match.end)``."""
    selected: List[Fragment] = []
    for span in line.spans:
        if span.fragment_index is None:
            continue
        if span.end <= match.start or span.start >= match.end:
            continue
        selected.append(line.fragments[span.fragment_index])
    return selected


def source_box_for(
    line: Line, match: Match, config: Optional[LayoutConfig] = None
) -> Optional[SourceBox]:
    """Union box of the fragments behind ``match``, padded, in source space."""
    cfg = config or DEFAULT_LAYOUT
    frags = contributing_fragments(line, match)
    if not frags:
        return None
    pad = cfg.pad
    return SourceBox(
        min_x=min(f.x for f in frags) - pad,
        max_x=max(f.x + f.width for f in frags) + pad,
        top_y=max(f.y for f in frags) + pad,
        bottom_y=min(f.y - f.height for f in frags) - pad,
    )


def to_dest_box(box: SourceBox, source_viewport: Size, dest_page: Size) -> DestBox:
    """Scale a source box onto the destination page and flip its y axis.

    The axes are scaled independently because the two representations of a
    page need not share a size (e.g. a Letter viewport drawn onto A4).
    """
    scale_x = dest_page.width / source_viewport.width
    scale_y = dest_page.height / source_viewport.height
    x = box.min_x * scale_x
    width = (box.max_x - box.min_x) * scale_x
    top_from_bottom = dest_page.height - box.top_y * scale_y
    height = (box.top_y - box.bottom_y) * scale_y
    return DestBox(x=x, y=top_from_bottom - height, width=width, height=height)


def map_match_to_box(
    line: Line,
    match: Match,
    source_viewport: Size,
    dest_page: Size,
    config: Optional[LayoutConfig] = None,
) -> Optional[DestBox]:
    """Map a match on ``line.text`` to a destination-page box.

    Returns ``None`` when only synthesised spaces overlap the match.
    """
    box = source_box_for(line, match, config)
    if box is None:
        return None
    return to_dest_box(box, source_viewport, dest_page)


__all__ = [
    "assemble_lines",
    "contributing_fragments",
    "source_box_for",
    "to_dest_box",
    "map_match_to_box",
]
