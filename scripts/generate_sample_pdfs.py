"""Write a handful of single-page PDFs with phone numbers for manual runs."""

import os
from datetime import date

import fitz  # PyMuPDF


def write_pdf(path: str, lines, font_size=12, left=72, top=72, leading=18):
    doc = fitz.open()
    page = doc.new_page(width=612, height=792)
    for i, line in enumerate(lines):
        page.insert_text((left, top + i * leading), line, fontname="helv", fontsize=font_size)
    doc.save(path)
    doc.close()


def main(output_dir: str = "data/in"):
    os.makedirs(output_dir, exist_ok=True)
    today = date.today().strftime("%Y-%m-%d")

    datasets = {
        "flyer_basic.pdf": [
            "Spring Open House",
            f"Date: {today}",
            "Call us: (415) 555-0123",
            "Visit 1234 Market St, San Francisco",
        ],
        "flyer_vanity.pdf": [
            "Fresh Flowers Delivered",
            "Order now at 1-800-FLOWERS",
            "Questions? 212-555-0199",
        ],
        "flyer_mixed.pdf": [
            "Client Intake",
            f"Received: {today}",
            "Mobile: +1 202-555-0188",
            "Office: 650.555.0007",
            "Fax: +44 20 7946 0958",
        ],
        "flyer_bullets.pdf": [
            "Support Desk",
            "Available around the clock",
            "- Sales: 555-123-4567",
            "- Billing: 555 987 6543",
            "Account #: 42",
        ],
        "flyer_none.pdf": [
            "Quarterly Newsletter",
            "No contact details on this page.",
        ],
    }

    for filename, lines in datasets.items():
        write_pdf(os.path.join(output_dir, filename), lines)


if __name__ == "__main__":
    main()
