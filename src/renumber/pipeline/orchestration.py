"""High-level orchestration for renumber runs."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from renumber.audit import write_meta
from renumber.fonts import EmbeddedFont
from renumber.logging import get_logger
from renumber.sources import load_source

from .config import Mode, ProcessOutcome, RunConfig
from .in_place import run_in_place
from .rebuild import run_presentable, run_rebuild

logger = get_logger("renumber")

Runner = Callable[[bytes, str, RunConfig, Optional[EmbeddedFont]], ProcessOutcome]

_RUNNERS: Dict[Mode, Runner] = {
    Mode.IN_PLACE: run_in_place,
    Mode.REBUILD: run_rebuild,
    Mode.PRESENTABLE: run_presentable,
}


def process_document(
    source_bytes: bytes,
    replacement: str,
    cfg: RunConfig,
    font: Optional[EmbeddedFont] = None,
) -> ProcessOutcome:
    """Rewrite one PDF according to ``cfg.mode``.

    Parameters
    ----------
    source_bytes:
        The source PDF.
    replacement:
        Text stamped wherever a phone number was found.
    cfg:
        Run configuration. ``cfg.mode`` may be a :class:`Mode` or its value.
    font:
        Pre-loaded font; loaded from ``cfg`` when omitted.

    Returns
    -------
    ProcessOutcome
        Output bytes plus per-page reports.
    """
    runner = _RUNNERS[Mode(cfg.mode)]
    t0 = time.perf_counter()
    outcome = runner(source_bytes, replacement, cfg, font)
    logger.info(
        "document processed",
        extra={
            "mode": outcome.mode.value,
            "pages": len(outcome.pages),
            "replacements": outcome.replacements,
            "seconds": round(time.perf_counter() - t0, 3),
        },
    )
    return outcome


def process_path(
    input_ref: str,
    output_path: str,
    replacement: str,
    cfg: RunConfig,
    *,
    write_metadata: bool = False,
) -> Dict[str, Any]:
    """Load ``input_ref`` (path or URL), process it and write ``output_path``.

    Returns a JSON-able summary of the run. With ``write_metadata`` a
    ``.meta.json`` record is written beside the output as well.
    """
    source = load_source(input_ref, timeout=cfg.fetch_timeout)
    outcome = process_document(source, replacement, cfg)
    out = Path(output_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(outcome.output)

    result = outcome.summary()
    result["out"] = str(out)
    if write_metadata:
        result["meta"] = str(write_meta(input_ref, source, out, result, cfg))
    return result


__all__ = ["process_document", "process_path"]
