"""End-to-end flows that chain extraction, analysis, templating and grouping.

- draft: source document -> fact sheet -> press-release draft
- report upload: coverage report file -> date, title and article count
- news timeline: keyword search -> day buckets -> story groups
- feed timeline: watched RSS feeds -> merged stream -> day buckets -> story groups

Collaborators (analysis, search, feed parsing) can be injected so tests run offline.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from openai import OpenAI

from .analysis import AnalysisResult, analyze_file_content
from .config import get_settings
from .feeds import ParseFn, collect_feeds, watched_feeds
from .models import (
    DailyNewsGroups,
    FactSheet,
    FeedSource,
    NewsItem,
    PrType,
    ReportFileMetadata,
    SpecItem,
)
from .news_search import NaverNewsClient
from .press_release import generate_draft
from .report_metadata import extract_report_metadata
from .similarity import group_news_by_day
from .text_extraction import UnsupportedFileTypeError, extract_text, extract_text_from_bytes

logger = logging.getLogger(__name__)

AnalyzerFn = Callable[..., AnalysisResult]


@dataclass
class DraftResult:
    fact_sheet: Optional[FactSheet]
    draft: Optional[str]
    message: Optional[str] = None
    used_fallback: bool = False
    specs: List[SpecItem] = field(default_factory=list)


def draft_from_fact_sheet(
    fact_sheet: FactSheet,
    specs: Iterable[SpecItem] = (),
    pr_type: PrType | str | None = None,
) -> str:
    """Render a draft, optionally overriding the fact sheet's angle."""
    if pr_type is not None:
        fact_sheet = fact_sheet.model_copy(update={"pr_type": PrType.coerce(pr_type)})
    return generate_draft(fact_sheet, specs)


def draft_from_source(
    text: str,
    file_name: str,
    specs: Iterable[SpecItem] = (),
    pr_type: PrType | str | None = None,
    client: Optional[OpenAI] = None,
    *,
    analyzer_fn: AnalyzerFn | None = None,
) -> DraftResult:
    """
    Analyze extracted source text and render a draft from the result.

    Specs found by the analyzer are used when the caller passes none.
    Insufficient text yields no fact sheet and no draft, only the message.
    """
    analyzer_fn = analyzer_fn or analyze_file_content
    analysis = analyzer_fn(text, file_name, client, pr_type=pr_type)
    if not analysis.success or analysis.data is None:
        return DraftResult(fact_sheet=None, draft=None, message=analysis.message)

    specs = list(specs) or list(analysis.specs)
    draft = draft_from_fact_sheet(analysis.data, specs, pr_type)
    return DraftResult(
        fact_sheet=analysis.data,
        draft=draft,
        message=analysis.message,
        used_fallback=analysis.used_fallback,
        specs=specs,
    )


def draft_from_file(
    path: Path,
    specs: Iterable[SpecItem] = (),
    pr_type: PrType | str | None = None,
    client: Optional[OpenAI] = None,
    *,
    analyzer_fn: AnalyzerFn | None = None,
) -> DraftResult:
    path = Path(path)
    text = extract_text(path, client=client)
    return draft_from_source(text, path.name, specs, pr_type, client, analyzer_fn=analyzer_fn)


def process_report_upload(
    file_name: str,
    data: bytes,
    client: Optional[OpenAI] = None,
    *,
    today: Optional[date] = None,
) -> ReportFileMetadata:
    """
    Derive metadata for an uploaded coverage report.

    Files whose text cannot be read (or whose type has no extractor) still get
    a filename-derived date and title.
    """
    try:
        text = extract_text_from_bytes(data, file_name, client=client)
    except UnsupportedFileTypeError as exc:
        logger.warning("No text extractor for %s: %s", file_name, exc)
        text = ""
    return extract_report_metadata(file_name, text, today=today)


def build_news_timeline(
    query: str,
    search_client: Optional[NaverNewsClient] = None,
    *,
    max_pages: Optional[int] = None,
    timezone: Optional[str] = None,
    sort: str = "date",
) -> List[DailyNewsGroups]:
    """Search news for a keyword and group each day's results into stories."""
    settings = get_settings()
    search_client = search_client or NaverNewsClient.from_settings(settings)
    items: List[NewsItem] = search_client.search_all(
        query, sort=sort, max_pages=max_pages or settings.news_max_pages
    )
    return group_news_by_day(items, timezone=timezone or settings.timezone)


def build_feed_timeline(
    sources: Optional[Iterable[FeedSource]] = None,
    *,
    parse_fn: Optional[ParseFn] = None,
    timezone: Optional[str] = None,
) -> Tuple[List[NewsItem], List[DailyNewsGroups]]:
    """Collect the watched feeds; return the merged stream and its day-by-day story groups."""
    settings = get_settings()
    if sources is None:
        sources = watched_feeds(settings=settings)
    items = collect_feeds(sources, parse_fn=parse_fn)
    return items, group_news_by_day(items, timezone=timezone or settings.timezone)
