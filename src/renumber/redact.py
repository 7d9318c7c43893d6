"""Redaction routines.

Covers located phone numbers on an output page with an opaque rectangle and
stamps the replacement text on top, and renders QA previews of the covered
areas.
"""

from typing import List, Sequence, Tuple

import fitz  # PyMuPDF
from PIL import Image, ImageDraw

from renumber.fonts import EmbeddedFont
from renumber.layout import DestBox, LayoutConfig


def _rgb(color: Tuple[int, int, int]) -> Tuple[float, float, float]:
    return tuple(c / 255.0 for c in color)  # type: ignore[return-value]


def to_page_rect(box: DestBox) -> fitz.Rect:
    """Convert a mapped box to a PyMuPDF rect (origin top-left).

    Fragments are measured upward from the page bottom and the mapper flips
    them once more, so ``box.y + box.height`` is the distance from the page
    top to the cover's upper edge. The rect spans ``height`` down from there,
    which is exactly the padded glyph box of the matched fragments.
    """
    top = box.y + box.height
    return fitz.Rect(box.x, top, box.x + box.width, top + box.height)


def clip_to_width(text: str, font: EmbeddedFont, size: float, max_width: float) -> str:
    """Drop trailing characters until ``text`` fits in ``max_width``."""
    if max_width <= 0:
        return ""
    out = text
    while out and font.text_length(out, size) > max_width:
        out = out[:-1]
    return out


def redact_box(
    page: fitz.Page,
    box: DestBox,
    replacement: str,
    font: EmbeddedFont,
    config: LayoutConfig,
) -> None:
    """Cover ``box`` and stamp ``replacement`` inside it.

    Parameters
    ----------
    page:
        Destination page; its draw stream is modified.
    box:
        Area to cover, as produced by :func:`renumber.align.map_match_to_box`.
    replacement:
        Single line of text, baseline 0.5 above the cover's lower edge and
        0.5 in from its left edge, clipped to ``box.width - 1``.
    font:
        Font for the stamp. Encoding problems propagate to the caller.
    config:
        Fill colour, text colour and draw size.
    """
    rect = to_page_rect(box)
    page.draw_rect(
        rect,
        color=None,
        fill=_rgb(config.fill_rgb),
        width=0,
        overlay=True,
    )
    stamp = clip_to_width(replacement, font, config.draw_size, box.width - 1)
    if not stamp:
        return
    font.register(page)
    page.insert_text(
        fitz.Point(box.x + 0.5, rect.y1 - 0.5),
        stamp,
        fontsize=config.draw_size,
        fontname=font.name,
        color=_rgb(config.text_rgb),
        overlay=True,
    )


def draw_preview(
    page: fitz.Page,
    boxes: Sequence[DestBox],
    *,
    dpi: int = 96,
    outline=(255, 0, 0),
    width: int = 2,
) -> Image.Image:
    """Render ``page`` and outline the covered boxes for QA review."""
    zoom = dpi / 72.0
    pix = page.get_pixmap(matrix=fitz.Matrix(zoom, zoom), alpha=False)
    img = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
    draw = ImageDraw.Draw(img)
    for box in boxes:
        r = to_page_rect(box)
        draw.rectangle(
            [r.x0 * zoom, r.y0 * zoom, r.x1 * zoom, r.y1 * zoom],
            outline=outline,
            width=width,
        )
    return img


def draw_lines(
    page: fitz.Page,
    lines: List[str],
    *,
    x: float,
    top: float,
    font: EmbeddedFont,
    size: float,
    line_height: float,
    color=(0, 0, 0),
) -> float:
    """Write ``lines`` downward from ``top`` (distance from page top).

    Returns the y position below the last line.
    """
    font.register(page)
    y = top
    for text in lines:
        y += line_height
        if text:
            page.insert_text(
                fitz.Point(x, y), text, fontsize=size, fontname=font.name, color=_rgb(color)
            )
    return y
