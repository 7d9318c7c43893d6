"""Geometry value types shared by line assembly, box mapping and rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Literal, Optional, Tuple

LinePolicy = Literal["first", "nearest"]


@dataclass(frozen=True)
class LayoutConfig:
    """Tolerances and draw settings for the in-place pipeline.

    Attributes
    ----------
    line_y_tol:
        Maximum vertical distance between a fragment and a line anchor for
        the fragment to join that line.
    word_gap_tol:
        Horizontal gap above which a space is synthesised between fragments.
    line_policy:
        ``"first"`` joins the first line within tolerance (insertion order);
        ``"nearest"`` joins the closest one.
    pad:
        Margin added around the union of matched fragments.
    draw_size:
        Font size of the replacement stamp.
    fill_rgb / text_rgb:
        Cover and stamp colours, 0-255 per channel.
    """

    line_y_tol: float = 2.0
    word_gap_tol: float = 2.0
    line_policy: LinePolicy = "first"
    pad: float = 1.5
    draw_size: float = 10.0
    fill_rgb: Tuple[int, int, int] = (255, 255, 255)
    text_rgb: Tuple[int, int, int] = (0, 0, 0)


@dataclass(frozen=True)
class Fragment:
    """One positioned run of characters from a page's text layer.

    ``y`` is the run's top edge measured up from the page bottom.
    """

    text: str
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    fragment_index: Optional[int] = None


@dataclass
class Line:
    y_reference: float
    fragments: List[Fragment] = field(default_factory=list)
    text: str = ""
    spans: List[Span] = field(default_factory=list)


@dataclass(frozen=True)
class Size:
    width: float
    height: float


@dataclass(frozen=True)
class SourceBox:
    """Union box of matched fragments in source coordinates."""

    min_x: float
    max_x: float
    top_y: float
    bottom_y: float


@dataclass(frozen=True)
class DestBox:
    """Mapped cover box on the destination page.

    ``y + height`` is the distance from the page top to the cover's upper
    edge; :func:`renumber.redact.to_page_rect` turns it into a page rect.
    """

    x: float
    y: float
    width: float
    height: float

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


__all__ = [
    "LinePolicy",
    "LayoutConfig",
    "Fragment",
    "Span",
    "Line",
    "Size",
    "SourceBox",
    "DestBox",
]
