import pytest

from renumber.normalize import normalize_lines, normalize_text


@pytest.mark.parametrize(
    "raw",
    [
        "Call\u200b 555\u00ad-123-4567",
        "Tel555•123•4567   now",
        "  spaced   out\ttext  ",
        "arrows ⇄ and — dashes __ here",
        "",
    ],
)
def test_normalize_is_idempotent(raw):
    once = normalize_text(raw, split_letters=True)
    assert normalize_text(once, split_letters=True) == once


def test_invisible_characters_are_removed():
    assert normalize_text("555\u200b-12\u20603-4567") == "555-123-4567"


def test_separator_glyphs_become_hyphens():
    assert normalize_text("555•123–4567") == "555-123-4567"
    assert normalize_text("555__123") == "555-123"


def test_letter_digit_split_is_optional():
    assert normalize_text("Tel555") == "Tel555"
    assert normalize_text("Tel555", split_letters=True) == "Tel 555"


def test_normalize_lines_keeps_line_breaks():
    text = "Title  here\n\n  body\u200b text \nlast"
    assert normalize_lines(text) == "Title here\n\nbody text\nlast"
