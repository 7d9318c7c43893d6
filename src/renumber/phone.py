"""Phone-number detection and whole-text rewriting.

A single permissive pattern is used on purpose: anything that starts and
ends with a digit and is made of phone punctuation in between is reported,
so ID numbers and the like will match too. Missing a real number is worse
than stamping over a false positive.

Vanity decoding and spelled-digit collapsing change the length of the text
and are therefore only applied to whole-text pipelines.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import regex as re

PHONE_RE = re.compile(r"\+?\d[\d\s\-().]{7,}\d")

VANITY_RE = re.compile(
    r"\b(1[\s-]?8(?:00|33|44|55|66|77|88)[\s-]?)([A-Za-z][A-Za-z-]{3,})\b",
    re.IGNORECASE,
)

KEYPAD = {
    **dict.fromkeys("ABC", "2"),
    **dict.fromkeys("DEF", "3"),
    **dict.fromkeys("GHI", "4"),
    **dict.fromkeys("JKL", "5"),
    **dict.fromkeys("MNO", "6"),
    **dict.fromkeys("PQRS", "7"),
    **dict.fromkeys("TUV", "8"),
    **dict.fromkeys("WXYZ", "9"),
}

DIGIT_WORDS = {
    "zero": "0",
    "oh": "0",
    "one": "1",
    "two": "2",
    "three": "3",
    "four": "4",
    "five": "5",
    "six": "6",
    "seven": "7",
    "eight": "8",
    "nine": "9",
}

_DIGIT_WORD = "|".join(sorted(DIGIT_WORDS, key=len, reverse=True))
SPELLED_RUN_RE = re.compile(
    rf"\b(?:{_DIGIT_WORD})(?:[\s-]+(?:{_DIGIT_WORD})){{2,}}\b", re.IGNORECASE
)
_SPELLED_WORD_RE = re.compile(_DIGIT_WORD, re.IGNORECASE)


@dataclass(frozen=True)
class Match:
    """A phone-like substring located at ``text[start:end]``."""

    start: int
    end: int
    matched_text: str


class PhoneMatcher:
    """Find and replace phone-number-like runs of text."""

    def __init__(self, pattern: "re.Pattern[str]" = PHONE_RE) -> None:
        self.pattern = pattern

    def find_matches(self, text: str) -> List[Match]:
        """Return non-overlapping matches, scanning left to right.

        Parameters
        ----------
        text:
            String to scan. Offsets refer to this exact string.

        Returns
        -------
        list[Match]
            Matches in order of appearance.
        """
        return [
            Match(start=m.start(), end=m.end(), matched_text=m.group(0))
            for m in self.pattern.finditer(text)
        ]

    def replace_all(self, text: str, replacement: str) -> str:
        # a callable keeps backslashes in the replacement literal
        return self.pattern.sub(lambda _m: replacement, text)


def decode_vanity(text: str) -> str:
    """Rewrite toll-free vanity numbers to digits.

    ``1-800-FLOWERS`` becomes ``1-800-3569377``. Only the ``1-8XX`` prefixes
    in ``{800, 833, 844, 855, 866, 877, 888}`` are recognised.
    """

    def _sub(m: "re.Match[str]") -> str:
        prefix, word = m.group(1), m.group(2)
        digits = "".join(KEYPAD.get(ch, "") for ch in word.upper())
        return prefix + (digits or word)

    return VANITY_RE.sub(_sub, text)


def collapse_spelled_digits(text: str) -> str:
    """Turn runs of three or more spelled digits into digits.

    ``"call five five five-one two one two"`` -> ``"call 5551212"``. The
    separators inside a run are dropped along with the words.
    """

    def _sub(m: "re.Match[str]") -> str:
        words = _SPELLED_WORD_RE.findall(m.group(0))
        return "".join(DIGIT_WORDS[w.lower()] for w in words)

    return SPELLED_RUN_RE.sub(_sub, text)


__all__ = [
    "PHONE_RE",
    "Match",
    "PhoneMatcher",
    "decode_vanity",
    "collapse_spelled_digits",
]
