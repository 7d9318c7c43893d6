"""Run metadata for renumber outputs.

Produces a ``.meta.json`` record alongside the output PDF with a config
snapshot, input and output hashes, the package version and per-page
summaries.
"""

from __future__ import annotations

import dataclasses
import getpass
import hashlib
import socket
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

import orjson


def _sha256_bytes(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def meta_path_for(output_path: str | Path) -> Path:
    out = Path(output_path)
    return out.with_name(f"{out.stem}.meta.json")


def write_meta(
    input_ref: str,
    source: bytes,
    output_path: str | Path,
    result: Dict[str, Any],
    cfg: Any,
    errors: Optional[List[str]] = None,
) -> Path:
    """Write the metadata JSON next to the output PDF and return its path."""
    from renumber import __version__ as version

    out_pdf = Path(output_path)
    pages = result.get("pages", [])
    page_summaries = [
        {
            "page_index": p.get("page_index"),
            "boxes": int(p.get("boxes_applied", 0)),
            "matches": [m.get("text") for m in p.get("matches", [])],
        }
        for p in pages
    ]
    config = dataclasses.asdict(cfg) if dataclasses.is_dataclass(cfg) else dict(cfg)

    record = {
        "version": version,
        "timestamp": int(time.time()),
        "user": getpass.getuser(),
        "host": socket.gethostname(),
        "input": {"ref": input_ref, "sha256": _sha256_bytes(source)},
        "output": {
            "path": str(out_pdf),
            "sha256": _sha256_file(out_pdf) if out_pdf.exists() else None,
        },
        "config": config,
        "result": {
            "mode": result.get("mode"),
            "replacements": result.get("replacements", 0),
            "pages": page_summaries,
        },
        "errors": errors or [],
    }

    meta_path = meta_path_for(out_pdf)
    meta_path.write_bytes(
        orjson.dumps(record, option=orjson.OPT_INDENT_2, default=str)
    )
    return meta_path


__all__ = ["write_meta", "meta_path_for"]
