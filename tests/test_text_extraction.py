import io
from types import SimpleNamespace

import pypdf
import pytest
from docx import Document

from presscraft.text_extraction import (
    UnsupportedFileTypeError,
    extract_text,
    extract_text_from_bytes,
    is_sufficient,
    ocr_image,
)


class FakeResponses:
    def __init__(self, text: str):
        self.text = text
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        return SimpleNamespace(output_text=self.text)


class FakeClient:
    def __init__(self, text: str):
        self.responses = FakeResponses(text)


def _docx_bytes() -> bytes:
    doc = Document()
    doc.add_paragraph("데스커 모션데스크 출시 보도자료")
    table = doc.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "번호"
    table.cell(0, 1).text = "매체"
    table.cell(1, 0).text = "1"
    table.cell(1, 1).text = "한국경제"
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


def test_extracts_docx_paragraphs_and_table_rows():
    text = extract_text_from_bytes(_docx_bytes(), "release.docx")
    lines = text.splitlines()
    assert lines[0] == "데스커 모션데스크 출시 보도자료"
    assert "번호 매체" in lines
    assert "1 한국경제" in lines


def test_extracts_utf8_and_cp949_text():
    assert extract_text_from_bytes("보도자료 본문".encode("utf-8"), "a.txt") == "보도자료 본문"
    assert extract_text_from_bytes("보도자료 본문".encode("cp949"), "b.TXT") == "보도자료 본문"


def test_blank_pdf_yields_empty_text():
    writer = pypdf.PdfWriter()
    writer.add_blank_page(width=200, height=200)
    buffer = io.BytesIO()
    writer.write(buffer)
    assert extract_text_from_bytes(buffer.getvalue(), "scan.pdf").strip() == ""


def test_corrupt_file_is_logged_and_returns_empty(caplog):
    assert extract_text_from_bytes(b"not a real pdf", "broken.pdf") == ""
    assert "Text extraction failed" in caplog.text


def test_unsupported_extension_raises():
    with pytest.raises(UnsupportedFileTypeError) as excinfo:
        extract_text_from_bytes(b"data", "sheet.xlsx")
    assert "지원하지 않는 파일 형식입니다" in str(excinfo.value)
    assert isinstance(excinfo.value, ValueError)


def test_image_goes_through_vision_model():
    client = FakeClient("번호 1 2 3")
    text = extract_text_from_bytes(b"\x89PNG fake", "clip.png", client=client)
    assert text == "번호 1 2 3"
    content = client.responses.calls[0]["input"][0]["content"]
    assert content[1]["image_url"].startswith("data:image/png;base64,")


def test_ocr_without_client_returns_empty():
    assert ocr_image(b"data", "image/png", None) == ""


def test_extract_text_reads_path(tmp_path):
    path = tmp_path / "source.md"
    path.write_text("# 데스커 신제품", encoding="utf-8")
    assert extract_text(path) == "# 데스커 신제품"


def test_is_sufficient_threshold():
    assert not is_sufficient("  짧다  ")
    assert is_sufficient("가" * 20)
