"""Configuration primitives for the renumber pipelines."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any

from pydantic import BaseModel, Field

from renumber.fonts import DEFAULT_FONT_URL
from renumber.layout import LayoutConfig
from renumber.reflow import ReflowOptions


class Mode(str, Enum):
    """How a document is rewritten."""

    IN_PLACE = "in_place"
    REBUILD = "rebuild"
    PRESENTABLE = "presentable"


@dataclass
class RunConfig:
    """Runtime configuration for extraction, matching and rendering."""

    mode: Mode = Mode.IN_PLACE
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    font_path: Optional[str] = None
    font_url: Optional[str] = DEFAULT_FONT_URL
    builtin_font: str = "helv"
    fetch_timeout: float = 60.0
    rebuild_page_width: float = 612.0  # US Letter
    rebuild_page_height: float = 792.0
    rebuild_reflow: ReflowOptions = field(default_factory=ReflowOptions)
    presentable_reflow: ReflowOptions = field(
        default_factory=lambda: ReflowOptions(margin=36.0, font_size=11.0, line_height=14.0)
    )
    title_size: float = 20.0
    subtitle_size: float = 14.0
    split_letter_digit: bool = True
    decode_vanity: bool = True
    collapse_spelled: bool = False
    use_llm: bool = False
    llm_model: str = "llama3.1:8b"
    llm_url: str = "http://localhost:11434/api/generate"
    llm_timeout: int = 300
    prompt_path: Optional[str] = None
    preview_dir: Optional[str] = None
    preview_dpi: int = 96
    instrument: bool = True


class MatchRecord(BaseModel):
    """One located phone number and where it was covered."""

    text: str
    line: int
    start: int
    end: int
    box: Optional[List[float]] = None


class PageResult(BaseModel):
    """Per-page output payload."""

    page_index: int
    fragments: int = 0
    lines: int = 0
    matches: List[MatchRecord] = Field(default_factory=list)
    boxes_applied: int = 0
    timings: Optional[Dict[str, float]] = None
    preview_path: Optional[str] = None


class ProcessOutcome(BaseModel):
    """Output bytes of one document plus its per-page reports."""

    mode: Mode
    output: bytes
    pages: List[PageResult] = Field(default_factory=list)
    replacements: int = 0

    def summary(self) -> Dict[str, Any]:
        return {
            "mode": self.mode.value,
            "replacements": self.replacements,
            "pages": [p.model_dump() for p in self.pages],
        }


class DocumentResult(BaseModel):
    """Success-with-output or failure-with-message for one input of a batch."""

    input: str
    ok: bool
    output_path: Optional[str] = None
    replacements: int = 0
    error: Optional[str] = None


__all__ = [
    "Mode",
    "LayoutConfig",
    "RunConfig",
    "MatchRecord",
    "PageResult",
    "ProcessOutcome",
    "DocumentResult",
]
