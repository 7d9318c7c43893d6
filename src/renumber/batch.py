"""Simple batch runner with optional multiprocessing concurrency.

Processes a list of inputs (paths or URLs) and writes rewritten PDFs to an
output directory, preserving base filenames. Inputs that share a base name
get a numeric suffix so no output overwrites another. A failing document
never stops the others; its error is reported in its own result.
"""

from __future__ import annotations

from concurrent.futures import Future, ProcessPoolExecutor
from pathlib import Path
from typing import List, Set, Tuple

from .errors import RenumberError
from .logging import get_logger
from .pipeline import DocumentResult, RunConfig, process_path
from .sources import safe_file_name

logger = get_logger(__name__)

Job = Tuple[str, str, str, RunConfig]


def output_path_for(input_ref: str, output_dir: str) -> Path:
    stem = Path(safe_file_name(input_ref)).stem or "output"
    return Path(output_dir) / f"{stem}.renumbered.pdf"


def output_paths(inputs: List[str], output_dir: str) -> List[Path]:
    """One output path per input, unique within the batch.

    The first input with a given base name keeps ``<stem>.renumbered.pdf``;
    later ones become ``<stem>-2.renumbered.pdf``, ``<stem>-3...`` and so on.
    """
    taken: Set[Path] = set()
    paths: List[Path] = []
    for inp in inputs:
        path = output_path_for(inp, output_dir)
        stem = path.name[: -len(".renumbered.pdf")]
        n = 1
        while path in taken:
            n += 1
            path = path.with_name(f"{stem}-{n}.renumbered.pdf")
        taken.add(path)
        paths.append(path)
    return paths


def _failed(inp: str, exc: BaseException) -> DocumentResult:
    return DocumentResult(input=inp, ok=False, error=str(exc) or type(exc).__name__)


def _one(args: Job) -> DocumentResult:
    inp, out_path, replacement, cfg = args
    try:
        res = process_path(inp, out_path, replacement, cfg)
    except (RenumberError, OSError) as exc:
        logger.warning("document failed", extra={"input": inp, "error": str(exc)})
        return _failed(inp, exc)
    except Exception as exc:
        logger.exception("document crashed", extra={"input": inp})
        return _failed(inp, exc)
    return DocumentResult(
        input=inp,
        ok=True,
        output_path=res.get("out", out_path),
        replacements=res.get("replacements", 0),
    )


def _collect(job: Job, fut: Future) -> DocumentResult:
    try:
        return fut.result()
    except Exception as exc:
        logger.exception("worker failed", extra={"input": job[0]})
        return _failed(job[0], exc)


def run_batch(
    inputs: List[str],
    output_dir: str,
    replacement: str,
    cfg: RunConfig,
    workers: int = 1,
) -> List[DocumentResult]:
    """Process multiple inputs, sequentially or in a process pool.

    Returns one :class:`DocumentResult` per input, in input order.
    """
    Path(output_dir).mkdir(parents=True, exist_ok=True)
    jobs: List[Job] = [
        (inp, str(out), replacement, cfg)
        for inp, out in zip(inputs, output_paths(inputs, output_dir))
    ]
    if int(workers) <= 1:
        results = [_one(job) for job in jobs]
    else:
        with ProcessPoolExecutor(max_workers=int(workers)) as ex:
            futures = [ex.submit(_one, job) for job in jobs]
            results = [_collect(job, fut) for job, fut in zip(jobs, futures)]
    failed = sum(1 for r in results if not r.ok)
    logger.info("batch finished", extra={"documents": len(results), "failed": failed})
    return results


__all__ = ["run_batch", "output_path_for", "output_paths"]
