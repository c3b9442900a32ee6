"""Coverage rollups for the reports dashboard."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, List

from pydantic import BaseModel, Field

from .models import Event, EventStatus

WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


class CoverageSummary(BaseModel):
    total_events: int = 0
    total_articles: int = 0
    by_month: Dict[str, int] = Field(default_factory=dict)
    by_weekday: Dict[str, int] = Field(default_factory=dict)
    by_status: Dict[str, int] = Field(default_factory=dict)


def total_articles(events: Iterable[Event]) -> int:
    return sum(event.article_count for event in events)


def monthly_article_counts(events: Iterable[Event]) -> Dict[str, int]:
    """Articles per ``YYYY-MM``, in chronological order."""
    counts: Counter[str] = Counter()
    for event in events:
        counts[event.date.strftime("%Y-%m")] += event.article_count
    return {month: counts[month] for month in sorted(counts)}


def weekday_article_counts(events: Iterable[Event]) -> Dict[str, int]:
    counts = {day: 0 for day in WEEKDAYS}
    for event in events:
        counts[WEEKDAYS[event.date.weekday()]] += event.article_count
    return counts


def status_counts(events: Iterable[Event]) -> Dict[str, int]:
    counts = {status.value: 0 for status in EventStatus}
    for event in events:
        counts[event.status.value] += 1
    return counts


def summarize_events(events: Iterable[Event]) -> CoverageSummary:
    items: List[Event] = list(events)
    return CoverageSummary(
        total_events=len(items),
        total_articles=total_articles(items),
        by_month=monthly_article_counts(items),
        by_weekday=weekday_article_counts(items),
        by_status=status_counts(items),
    )
