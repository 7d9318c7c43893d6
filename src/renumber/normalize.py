"""Text canonicalisation applied before whole-text phone matching.

The transforms are deliberately small and pure so that applying
:func:`normalize_text` twice gives the same result as applying it once. They
are never used by the in-place pipeline: removing or merging characters there
would shift offsets away from the fragments that produced them.
"""

from __future__ import annotations

import regex as re

# zero-width space/joiners, BOM, soft hyphen, word joiner
INVISIBLE_RE = re.compile("[\u200b-\u200d\ufeff\u00ad\u2060]")
SEPARATOR_RE = re.compile(r"[⇄⇋•·–—_]+")
WHITESPACE_RUN_RE = re.compile(r"\s{2,}")
LETTER_DIGIT_RE = re.compile(r"(?<=\p{L})(?=\d)|(?<=\d)(?=\p{L})")


def strip_invisible(text: str) -> str:
    return INVISIBLE_RE.sub("", text)


def unify_separators(text: str) -> str:
    """Collapse bullets, dashes, arrows and underscores to a single ``-``."""
    return SEPARATOR_RE.sub("-", text)


def split_letter_digit(text: str) -> str:
    """Insert a space wherever a letter touches a digit (``Tel555`` -> ``Tel 555``)."""
    return LETTER_DIGIT_RE.sub(" ", text)


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RUN_RE.sub(" ", text)


def normalize_text(text: str, *, split_letters: bool = False) -> str:
    """Canonicalise extracted text for matching.

    Parameters
    ----------
    text:
        Raw extracted text.
    split_letters:
        Separate letters from adjacent digits. Only meaningful for rebuild
        style pipelines.

    Returns
    -------
    str
        Normalised, stripped text.
    """
    out = strip_invisible(text or "")
    out = unify_separators(out)
    if split_letters:
        out = split_letter_digit(out)
    out = collapse_whitespace(out)
    return out.strip()


def normalize_lines(text: str, *, split_letters: bool = False) -> str:
    """Normalise each line on its own so line breaks and blank lines survive."""
    return "\n".join(
        normalize_text(line, split_letters=split_letters) for line in (text or "").splitlines()
    ).strip("\n")


__all__ = [
    "normalize_text",
    "normalize_lines",
    "strip_invisible",
    "unify_separators",
    "split_letter_digit",
    "collapse_whitespace",
]
