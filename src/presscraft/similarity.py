"""Near-duplicate grouping of news headlines.

Titles are compared on a normalized form (markup, bracketed tags and
punctuation removed). Two titles are similar when the normal forms are equal,
one contains the other, or almost every character of the shorter one also
occurs in the longer one. The predicate is not transitive: an item is only
compared against each group's first member, so grouping depends on arrival
order.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import Dict, Iterable, List

import pytz

from .models import DailyNewsGroups, NewsGroup, NewsItem

logger = logging.getLogger(__name__)

CONTAINMENT_MIN_LENGTH = 10
OVERLAP_THRESHOLD = 0.85

_TAG = re.compile(r"<[^>]*>")
_BRACKET = re.compile(r"\[[^\]]*\]")
_PAREN = re.compile(r"\([^)]*\)")
# Keep ASCII letters/digits, Hangul syllables and Hangul jamo.
_DISALLOWED = re.compile(r"[^a-zA-Z0-9가-힣ㄱ-ㅎㅏ-ㅣ\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_title(title: str) -> str:
    """Reduce a headline to the characters used for comparison."""
    text = _TAG.sub("", title or "")
    text = _BRACKET.sub("", text)
    text = _PAREN.sub("", text)
    text = _DISALLOWED.sub("", text)
    return _WHITESPACE.sub("", text)


def _overlap_ratio(first: str, second: str) -> float:
    shorter, longer = (first, second) if len(first) <= len(second) else (second, first)
    hits = sum(1 for ch in shorter if ch in longer)
    return hits / len(shorter)


def is_similar(title_a: str, title_b: str) -> bool:
    """Return True when two headlines look like the same story."""
    a = normalize_title(title_a)
    b = normalize_title(title_b)
    if not a or not b:
        return False
    if a == b:
        return True
    if b in a and len(b) > CONTAINMENT_MIN_LENGTH:
        return True
    if a in b and len(a) > CONTAINMENT_MIN_LENGTH:
        return True
    return _overlap_ratio(a, b) > OVERLAP_THRESHOLD


def group_similar_news(items: Iterable[NewsItem]) -> List[NewsGroup]:
    """
    Assign each item to the first group whose main title is similar.

    Items that match no existing group open a new group with themselves as
    main. Groups are never merged afterwards.
    """
    groups: List[NewsGroup] = []
    for item in items:
        for group in groups:
            if is_similar(group.main.title, item.title):
                group.all.append(item)
                break
        else:
            groups.append(NewsGroup(main=item, all=[item]))
    return groups


def dedupe_news(items: Iterable[NewsItem]) -> List[NewsItem]:
    """Return one representative item per story, in discovery order."""
    return [group.main for group in group_similar_news(items)]


def _local_day(moment: datetime, tz: pytz.BaseTzInfo) -> date:
    if moment.tzinfo is None:
        return tz.localize(moment).date()
    return moment.astimezone(tz).date()


def group_news_by_day(
    items: Iterable[NewsItem], timezone: str = "Asia/Seoul"
) -> List[DailyNewsGroups]:
    """
    Bucket items by local calendar day, then group each day independently.

    Days keep the order in which they first appear in the input; duplicates
    published on different days stay in separate groups.
    """
    tz = pytz.timezone(timezone)
    buckets: Dict[date, List[NewsItem]] = {}
    for item in items:
        buckets.setdefault(_local_day(item.pub_date, tz), []).append(item)

    timeline = [
        DailyNewsGroups(date=day, groups=group_similar_news(day_items))
        for day, day_items in buckets.items()
    ]
    logger.debug(
        "Grouped %d day bucket(s) into %d group(s)",
        len(timeline),
        sum(len(day.groups) for day in timeline),
    )
    return timeline
