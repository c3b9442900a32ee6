"""DOCX export for generated press-release drafts."""

from __future__ import annotations

import re
from pathlib import Path
from typing import List

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Pt

SECTION_MARKER = re.compile(r"^\[(.+)\]$")
END_MARKER = "# # #"
BODY_FONT = "Malgun Gothic"


def _set_styles(doc: Document) -> None:
    """
    Use a Hangul-capable font for body and headings.

    python-docx only sets the Latin font name; the eastAsia attribute has to
    be written on the run properties directly.
    """
    for style_name, size in (("Normal", 10.5), ("Title", 18), ("Heading 1", 12)):
        style = doc.styles[style_name]
        style.font.name = BODY_FONT
        style.font.size = Pt(size)
        try:
            style._element.get_or_add_rPr().get_or_add_rFonts().set(
                qn("w:eastAsia"), BODY_FONT
            )
        except AttributeError:
            pass


def _blocks(draft: str) -> List[str]:
    return [line.strip() for line in draft.splitlines() if line.strip()]


def build_draft_docx(draft: str, output_path: Path) -> Path:
    """
    Render a draft into a Word document.

    Section markers such as ``[신제품 출시]`` become headings, the line after
    the opening marker becomes the document title, ``- `` lines become
    bullets and the ``# # #`` end mark is centered.
    """
    doc = Document()
    _set_styles(doc)

    expect_headline = False
    first_marker = True
    for line in _blocks(draft):
        marker = SECTION_MARKER.match(line)
        if marker:
            doc.add_heading(marker.group(1), level=1)
            expect_headline = first_marker
            first_marker = False
            continue
        if expect_headline:
            title = doc.add_heading(line, 0)
            title.alignment = WD_ALIGN_PARAGRAPH.CENTER
            expect_headline = False
            continue
        if line == END_MARKER:
            end = doc.add_paragraph(line)
            end.alignment = WD_ALIGN_PARAGRAPH.CENTER
            continue
        if line.startswith("- "):
            doc.add_paragraph(line[2:], style="List Bullet")
            continue
        doc.add_paragraph(line)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    doc.save(output_path)
    return output_path
