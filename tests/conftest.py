from typing import List

import fitz  # PyMuPDF
import pytest

from renumber.pipeline import Mode, RunConfig


def make_pdf(pages: List[List[str]], size=(612, 792), font_size=10) -> bytes:
    """Build a PDF with one Helvetica line per string, 20pt apart."""
    doc = fitz.open()
    for lines in pages:
        page = doc.new_page(width=size[0], height=size[1])
        for i, text in enumerate(lines):
            page.insert_text((72, 100 + i * 20), text, fontname="helv", fontsize=font_size)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def flyer_pdf() -> bytes:
    return make_pdf([["Spring Open House", "Call 555-123-4567 today", "See you there"]])


@pytest.fixture
def plain_pdf() -> bytes:
    return make_pdf([["Quarterly Newsletter", "No contact details on this page."]])


@pytest.fixture
def offline_cfg():
    def _make(mode: Mode = Mode.IN_PLACE, **kwargs) -> RunConfig:
        return RunConfig(mode=mode, font_url=None, **kwargs)

    return _make
