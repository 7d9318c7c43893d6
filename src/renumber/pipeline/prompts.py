"""Prompt loading helpers for the LLM cleanup step."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Optional

CLEANUP_PROMPT_FILENAME = "phone_cleanup.txt"

CLEANUP_PROMPT_FALLBACK = (
    "You are a text-normalization assistant.\n"
    "Replace ALL phone numbers (any format, including symbols, vanity numbers "
    "like 1-800-FLOWERS, or spaced/obfuscated digits) with: {replacement}.\n"
    "Then lightly clean and reflow the content for readability:\n"
    "- Preserve headings if present; do NOT invent new content.\n"
    '- Keep bullet lists as simple lines starting with "• " where appropriate.\n'
    "- Remove blatant repetitions of contact lines.\n"
    "Return ONLY the cleaned text (no markdown, no code fences)."
)


@lru_cache(maxsize=16)
def _read_text_cached(path: str) -> str:
    return Path(path).read_text(encoding="utf-8")


@lru_cache(maxsize=4)
def _search_repo_prompt(filename: str) -> Optional[str]:
    for parent in Path(__file__).resolve().parents:
        cand = parent / "prompts" / filename
        if cand.exists():
            return _read_text_cached(str(cand.resolve()))
    return None


def load_prompt(explicit_path: Optional[str], filename: str, fallback: str) -> str:
    """Resolve a prompt from an explicit path, a ``prompts/`` directory, or the fallback."""

    if explicit_path:
        path_obj = Path(explicit_path)
        if path_obj.exists():
            return _read_text_cached(str(path_obj.resolve()))
    repo_prompt = _search_repo_prompt(filename)
    if repo_prompt:
        return repo_prompt
    return fallback


def cleanup_instruction(explicit_path: Optional[str], replacement: str) -> str:
    template = load_prompt(explicit_path, CLEANUP_PROMPT_FILENAME, CLEANUP_PROMPT_FALLBACK)
    return template.replace("{replacement}", replacement)


__all__ = [
    "CLEANUP_PROMPT_FILENAME",
    "CLEANUP_PROMPT_FALLBACK",
    "load_prompt",
    "cleanup_instruction",
]
