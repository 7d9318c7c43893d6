from renumber.reflow import (
    ReflowOptions,
    is_artifact,
    lines_per_page,
    paginate,
    segment_presentable,
    split_title,
    wrap_line,
    wrap_text,
)


def char_width(text, size):
    return float(len(text))


def test_pagination_splits_into_full_pages():
    text = " ".join(["abcd"] * 500)
    opts = ReflowOptions(margin=36, font_size=10, line_height=12)
    # 110 units of usable width fit 22 four-letter words per line
    pages = paginate(text, 182, 200, opts, char_width)
    assert lines_per_page(200, opts) == 10
    assert [len(p) for p in pages] == [10, 10, 3]
    assert sum(len(line.split()) for page in pages for line in page) == 500


def test_wrap_never_exceeds_width_except_split_tokens():
    lines = wrap_line("a bb ccc dddd eeeee", 7, char_width, 10)
    assert lines == ["a bb", "ccc", "dddd", "eeeee"]
    assert all(len(line) <= 7 for line in lines)


def test_overlong_token_is_split():
    assert wrap_line("0123456789", 4, char_width, 10) == ["0123", "4567", "89"]


def test_hard_breaks_are_kept_and_blank_lines_dropped():
    assert wrap_text("one\n\ntwo three", 100, char_width, 10) == ["one", "two three"]


def test_empty_text_has_no_pages():
    assert paginate("", 612, 792, ReflowOptions(), char_width) == []


def test_artifact_detection():
    assert is_artifact("42")
    assert is_artifact("1 1 1")
    assert not is_artifact("555-123-4567")
    assert not is_artifact("Chapter 1")


def test_split_title():
    assert split_title("\n  Heading \nbody one\nbody two") == ("Heading", "body one\nbody two")
    assert split_title("   ") == ("Document", "   ")


def test_presentable_segmentation():
    text = (
        "Big Sale\n"
        "Call today\n"
        "• Item one\n"
        "- Item two\n"
        "\n"
        "Para line one\n"
        "para line two\n"
        "\n"
        "42\n"
        "Big Sale\n"
    )
    doc = segment_presentable(text)
    assert doc.title == "Big Sale"
    assert doc.subtitle == "Call today"
    assert [(b.kind, b.text) for b in doc.blocks] == [
        ("bullet", "• Item one"),
        ("bullet", "• Item two"),
        ("paragraph", "Para line one para line two"),
    ]


def test_bullet_is_never_a_subtitle():
    doc = segment_presentable("Menu\n* coffee\n* tea")
    assert doc.subtitle is None
    assert [b.text for b in doc.blocks] == ["• coffee", "• tea"]


def test_long_second_line_is_a_paragraph():
    long_line = "word " * 30
    doc = segment_presentable(f"Title\n{long_line}")
    assert doc.subtitle is None
    assert doc.blocks[0].kind == "paragraph"


def test_empty_document_gets_placeholder_title():
    doc = segment_presentable("\n\n")
    assert doc.title == "Document"
    assert doc.blocks == []
