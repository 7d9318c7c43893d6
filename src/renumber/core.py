"""Public entry points for the renumber pipelines.

The implementation lives in ``renumber.pipeline`` modules split by
responsibility (in-place, rebuild, rendering, orchestration). This module
re-exports the surface most callers need.
"""

from __future__ import annotations

from .pipeline import (
    DocumentResult,
    Mode,
    PageResult,
    ProcessOutcome,
    RunConfig,
    process_document,
    process_in_place,
    process_path,
    process_presentable,
    process_rebuild,
)

__all__ = [
    "Mode",
    "RunConfig",
    "PageResult",
    "ProcessOutcome",
    "DocumentResult",
    "process_in_place",
    "process_rebuild",
    "process_presentable",
    "process_document",
    "process_path",
]
