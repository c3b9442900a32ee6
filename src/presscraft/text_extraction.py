"""Raw text extraction from uploaded PDF, Word, text and image files.

Extraction failures return an empty string and are logged; callers decide
whether the text is long enough to analyze (see MIN_TEXT_LENGTH).
"""

from __future__ import annotations

import base64
import io
import logging
from pathlib import Path
from typing import Optional

import pypdf
from docx import Document
from openai import OpenAI

from .config import get_settings
from .llm import client_from_settings, response_text_or_raise

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 20

PDF_EXTENSIONS = {".pdf"}
WORD_EXTENSIONS = {".docx"}
TEXT_EXTENSIONS = {".txt", ".md"}
IMAGE_MIME_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
}
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS | WORD_EXTENSIONS | TEXT_EXTENSIONS | set(IMAGE_MIME_TYPES)

OCR_PROMPT = (
    "이미지에 보이는 모든 텍스트를 원문 그대로 옮겨 적어주세요. "
    "표는 한 행을 한 줄로, 셀은 공백으로 구분하세요. 설명이나 요약은 덧붙이지 마세요."
)


class UnsupportedFileTypeError(ValueError):
    """Raised for uploads whose extension no extractor handles."""


def is_sufficient(text: str) -> bool:
    return len((text or "").strip()) >= MIN_TEXT_LENGTH


def _extension(file_name: str) -> str:
    return Path(file_name).suffix.lower()


def _extract_pdf(data: bytes) -> str:
    reader = pypdf.PdfReader(io.BytesIO(data))
    pages = [page.extract_text() or "" for page in reader.pages]
    return "\n\n".join(pages)


def _extract_docx(data: bytes) -> str:
    doc = Document(io.BytesIO(data))
    parts = [para.text for para in doc.paragraphs if para.text.strip()]
    # Clipping reports are mostly tables; keep one line per row.
    for table in doc.tables:
        for row in table.rows:
            row_text = " ".join(cell.text.strip() for cell in row.cells if cell.text.strip())
            if row_text:
                parts.append(row_text)
    return "\n".join(parts)


def _extract_plain(data: bytes) -> str:
    for encoding in ("utf-8", "cp949"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("utf-8", errors="ignore")


def ocr_image(data: bytes, mime_type: str, client: Optional[OpenAI]) -> str:
    """Transcribe the text in an image with a vision-capable model."""
    if client is None:
        logger.warning("No OpenAI client configured; cannot OCR image.")
        return ""
    settings = get_settings()
    encoded = base64.b64encode(data).decode("ascii")
    response = client.responses.create(
        model=settings.ocr_model,
        input=[
            {
                "role": "user",
                "content": [
                    {"type": "input_text", "text": OCR_PROMPT},
                    {"type": "input_image", "image_url": f"data:{mime_type};base64,{encoded}"},
                ],
            }
        ],
    )
    return response_text_or_raise(response, step="OCR")


def extract_text_from_bytes(
    data: bytes, file_name: str, client: Optional[OpenAI] = None
) -> str:
    """
    Return the text content of an uploaded file.

    Raises UnsupportedFileTypeError for unknown extensions; any failure while
    reading a supported file is logged and yields "".
    """
    ext = _extension(file_name)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFileTypeError(f"지원하지 않는 파일 형식입니다: {ext.lstrip('.') or file_name}")

    try:
        if ext in PDF_EXTENSIONS:
            text = _extract_pdf(data)
        elif ext in WORD_EXTENSIONS:
            text = _extract_docx(data)
        elif ext in TEXT_EXTENSIONS:
            text = _extract_plain(data)
        else:
            text = ocr_image(data, IMAGE_MIME_TYPES[ext], client or client_from_settings())
    except Exception as exc:  # parsers raise library-specific errors on corrupt files
        logger.warning("Text extraction failed for %s: %s", file_name, exc)
        return ""

    logger.info("Extracted %d characters from %s", len(text), file_name)
    return text


def extract_text(path: Path, client: Optional[OpenAI] = None) -> str:
    path = Path(path)
    return extract_text_from_bytes(path.read_bytes(), path.name, client=client)
