import fitz  # PyMuPDF
import pytest

from renumber.fonts import load_font
from renumber.layout import DestBox, LayoutConfig
from renumber.redact import clip_to_width, redact_box, to_page_rect

NUMBER = "555-000-1111"


@pytest.fixture
def helv():
    return load_font(font_path=None, font_url=None)


@pytest.fixture
def page():
    doc = fitz.open()
    yield doc.new_page(width=612, height=792)
    doc.close()


def _stamp_chars(page):
    raw = page.get_text("rawdict")
    return [
        ch
        for block in raw["blocks"]
        if block.get("type", 0) == 0
        for line in block["lines"]
        for span in line["spans"]
        for ch in span["chars"]
    ]


def _box(top, width, height=13.0, x=100.0):
    # box whose page rect starts ``top`` points below the page top
    return DestBox(x=x, y=top - height, width=width, height=height)


def test_clip_keeps_the_longest_fitting_prefix(helv):
    out = clip_to_width(NUMBER, helv, 10, 30)
    assert out and NUMBER.startswith(out) and out != NUMBER
    assert helv.text_length(out, 10) <= 30
    assert helv.text_length(NUMBER[: len(out) + 1], 10) > 30


def test_clip_leaves_fitting_text_alone(helv):
    assert clip_to_width(NUMBER, helv, 10, 500) == NUMBER


@pytest.mark.parametrize("max_width", [0, -0.5, -10])
def test_clip_to_non_positive_width_is_empty(helv, max_width):
    assert clip_to_width(NUMBER, helv, 10, max_width) == ""


def test_page_rect_spans_box_height_below_its_top():
    rect = to_page_rect(_box(top=200, width=40))
    assert (rect.x0, rect.y0, rect.x1, rect.y1) == pytest.approx((100, 200, 140, 213))


def test_long_replacement_is_clipped_inside_the_cover(page, helv):
    box = _box(top=200, width=40)
    cfg = LayoutConfig()
    redact_box(page, box, NUMBER, helv, cfg)

    rect = to_page_rect(box)
    drawings = page.get_drawings()
    assert len(drawings) == 1
    assert tuple(drawings[0]["rect"]) == pytest.approx(tuple(rect))

    chars = _stamp_chars(page)
    expected = clip_to_width(NUMBER, helv, cfg.draw_size, box.width - 1)
    assert "".join(c["c"] for c in chars) == expected
    assert len(expected) < len(NUMBER)
    assert chars[0]["origin"] == pytest.approx((box.x + 0.5, rect.y1 - 0.5))
    assert min(c["bbox"][0] for c in chars) >= rect.x0
    assert max(c["bbox"][2] for c in chars) <= rect.x1


def test_narrow_box_gets_cover_but_no_text(page, helv):
    box = _box(top=200, width=1)
    redact_box(page, box, NUMBER, helv, LayoutConfig())
    assert len(page.get_drawings()) == 1
    assert page.get_text().strip() == ""
