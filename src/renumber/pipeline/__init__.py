"""Composable building blocks for the renumber pipelines."""

from .config import DocumentResult, Mode, PageResult, ProcessOutcome, RunConfig
from .in_place import process_in_place, render_page, run_in_place
from .llm_cleanup import llm_cleanup
from .orchestration import process_document, process_path
from .rebuild import (
    prepare_text,
    process_presentable,
    process_rebuild,
    run_presentable,
    run_rebuild,
)

__all__ = [
    "Mode",
    "RunConfig",
    "PageResult",
    "ProcessOutcome",
    "DocumentResult",
    "render_page",
    "run_in_place",
    "run_rebuild",
    "run_presentable",
    "prepare_text",
    "llm_cleanup",
    "process_in_place",
    "process_rebuild",
    "process_presentable",
    "process_document",
    "process_path",
]
