"""Optional LLM pass that rewrites numbers and tidies text for the presentable layout."""

from __future__ import annotations

import requests

from renumber.errors import CleanupFailure
from renumber.llm import get_ollama_client
from renumber.logging import get_logger

from .config import RunConfig
from .prompts import cleanup_instruction

logger = get_logger(__name__)


def llm_cleanup(body: str, replacement: str, cfg: RunConfig) -> str:
    """Ask the local LLM to replace every phone number in ``body`` and tidy it.

    Raises
    ------
    CleanupFailure
        If the endpoint fails or answers with empty text.
    """
    system = cleanup_instruction(cfg.prompt_path, replacement)
    client = get_ollama_client(cfg.llm_url)
    try:
        cleaned = client.generate(body, model=cfg.llm_model, system=system, timeout=cfg.llm_timeout)
    except requests.RequestException as exc:
        raise CleanupFailure(f"LLM request failed: {exc}") from exc
    cleaned = (cleaned or "").strip()
    if not cleaned:
        raise CleanupFailure("LLM returned empty text.")
    logger.info("llm cleanup done", extra={"model": cfg.llm_model, "chars": len(cleaned)})
    return cleaned


__all__ = ["llm_cleanup"]
