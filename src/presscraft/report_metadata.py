"""Best-effort metadata extraction from uploaded performance-report files.

Report files are usually clipping exports or scanned clipping sheets named
like ``20240316_제품출시_기타.pdf``. Everything here is heuristic and the
article count is always user-correctable, so no function raises on
unparseable input; each chain ends in a default.
"""

from __future__ import annotations

import logging
import re
from datetime import date, timedelta
from typing import List, Optional

from .models import ReportFileMetadata

logger = logging.getLogger(__name__)

_FILENAME_DATE_PATTERNS = (
    re.compile(r"^(\d{4})(\d{2})(\d{2})$"),
    re.compile(r"^(\d{2})(\d{2})(\d{2})$"),
    re.compile(r"^(\d{4})[.-](\d{1,2})[.-](\d{1,2})$"),
)
_TEXT_DATE_PATTERN = re.compile(
    r"(\d{4})[.-](\d{1,2})[.-](\d{1,2})|(\d{4})년\s*(\d{1,2})월\s*(\d{1,2})일"
)
# Label may follow other words on the line, as in "보도 제목: ...".
_TITLE_LINE_PATTERN = re.compile(r"(?:title|제목|headline)\s*:\s*(.*)$", re.IGNORECASE)

_COUNT_HEADER_PATTERN = re.compile(r"\bno\b\.?|번호", re.IGNORECASE)
# Integers delimited by whitespace or punctuation; skips pieces of dates like 2024.03.16.
_STANDALONE_INT_PATTERN = re.compile(r"(?<![\w.\-])\d+(?!\w|[.\-]\d)")
_COPYRIGHT_PATTERN = re.compile(r"ⓒ|copyright|all rights reserved", re.IGNORECASE)
_BYLINE_PATTERN = re.compile(r"[가-힣]{2,4}\s?기자|reporter", re.IGNORECASE)
_EMAIL_PATTERN = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_EXTENSION_PATTERN = re.compile(r"\.[A-Za-z][A-Za-z0-9]{0,4}$")

MAX_LISTED_ARTICLES = 500
TITLE_MAX_LENGTH = 50
UNPARSEABLE_TEXT_LENGTH = 100


def _safe_date(year: int, month: int, day: int) -> Optional[date]:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _stem(file_name: str) -> str:
    """Drop a trailing extension; dotted dates such as 2024.03.16 stay intact."""
    return _EXTENSION_PATTERN.sub("", (file_name or "").strip())


def date_from_filename(file_name: str) -> Optional[date]:
    """
    Return the distribution date encoded in a report file name.

    Report exports are named after the day they were pulled, which is the day
    after the release ran, so the parsed date is moved back by one day.
    """
    for token in _stem(file_name).split("_"):
        token = token.strip()
        for pattern in _FILENAME_DATE_PATTERNS:
            match = pattern.match(token)
            if not match:
                continue
            year, month, day = (int(part) for part in match.groups())
            if year < 100:
                year += 2000
            parsed = _safe_date(year, month, day)
            if parsed:
                return parsed - timedelta(days=1)
    return None


def date_from_text(text: str) -> Optional[date]:
    """Return the first real calendar date written in the text, unadjusted."""
    for match in _TEXT_DATE_PATTERN.finditer(text or ""):
        parts = [g for g in match.groups() if g is not None]
        parsed = _safe_date(*(int(p) for p in parts))
        if parsed:
            return parsed
    return None


def extract_date(file_name: str, text: str, today: Optional[date] = None) -> date:
    return (
        date_from_filename(file_name)
        or date_from_text(text)
        or today
        or date.today()
    )


def extract_title(file_name: str, text: str) -> str:
    parts = _stem(file_name).split("_")
    if len(parts) >= 2 and parts[1].strip():
        return parts[1].strip()

    lines = (text or "").splitlines()
    for line in lines:
        match = _TITLE_LINE_PATTERN.search(line)
        if match and match.group(1).strip():
            return match.group(1).strip()

    for line in lines:
        stripped = line.strip()
        if len(stripped) > 5:
            return stripped[:TITLE_MAX_LENGTH]

    return _stem(file_name)


def _count_from_numbered_list(text: str) -> int:
    header = _COUNT_HEADER_PATTERN.search(text)
    if not header:
        return 0
    candidates: List[int] = sorted(
        {
            int(raw)
            for raw in _STANDALONE_INT_PATTERN.findall(text[header.end():])
            if 0 < int(raw) < MAX_LISTED_ARTICLES
        }
    )
    run = 0
    for number in candidates:
        if number != run + 1:
            break
        run = number
    if run:
        return run
    return len(candidates)


def _count_from_markers(text: str) -> int:
    return max(
        len(_COPYRIGHT_PATTERN.findall(text)),
        len(_BYLINE_PATTERN.findall(text)),
        len(_EMAIL_PATTERN.findall(text)),
    )


def count_articles(text: str) -> int:
    """
    Estimate how many articles a clipping report lists.

    Prefers a numbered table (``번호``/``No.`` column counting 1..k); falls back
    to counting copyright notices, reporter bylines or email addresses, one of
    which appears once per article in most Korean news clippings.
    """
    text = text or ""
    count = _count_from_numbered_list(text)
    if count:
        return count
    count = _count_from_markers(text)
    if count:
        return count
    return 1 if len(text) > UNPARSEABLE_TEXT_LENGTH else 0


def extract_report_metadata(
    file_name: str, text: str, today: Optional[date] = None
) -> ReportFileMetadata:
    metadata = ReportFileMetadata(
        extracted_date=extract_date(file_name, text, today=today),
        extracted_title=extract_title(file_name, text),
        article_count=count_articles(text),
    )
    logger.info(
        "Report %s -> date=%s title=%r articles=%d",
        file_name,
        metadata.extracted_date.isoformat(),
        metadata.extracted_title,
        metadata.article_count,
    )
    return metadata
