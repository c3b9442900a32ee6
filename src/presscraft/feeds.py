"""RSS monitoring: fetch the watched feeds and merge them into one news stream.

Each entry becomes a NewsItem tagged with its feed's name, so the merged
stream can go straight into the similarity grouper.
"""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, List, Optional
from urllib.parse import urlparse

import feedparser

from .config import Settings, get_settings
from .models import FeedSource, NewsItem
from .news_search import coerce_item

logger = logging.getLogger(__name__)

DEFAULT_FEEDS = (
    FeedSource(name="TechCrunch", url="https://techcrunch.com/feed/"),
    FeedSource(name="Wired", url="https://www.wired.com/feed/rss"),
    FeedSource(name="The Verge", url="https://www.theverge.com/rss/index.xml"),
)
USER_AGENT = "PressCraft/0.1 (+feed monitor)"
MAX_WORKERS = 8
SUMMARY_LIMIT = 500

_TAG_PATTERN = re.compile(r"<[^>]+>")

ParseFn = Callable[..., Any]


def feed_from_text(value: str) -> FeedSource:
    """Build a source from `NAME=URL`, or a bare URL named after its host."""
    name, separator, url = value.partition("=")
    if separator and name.strip() and "://" not in name:
        return FeedSource(name=name.strip(), url=url.strip())
    url = value.strip()
    return FeedSource(name=urlparse(url).netloc or url, url=url)


def watched_feeds(
    extra: Iterable[FeedSource] = (),
    *,
    include_defaults: bool = True,
    settings: Optional[Settings] = None,
) -> List[FeedSource]:
    """Defaults, then feeds from settings, then the caller's; first URL wins."""
    settings = settings or get_settings()
    candidates: List[FeedSource] = list(DEFAULT_FEEDS) if include_defaults else []
    candidates.extend(settings.feed_sources)
    candidates.extend(extra)

    sources: List[FeedSource] = []
    seen = set()
    for source in candidates:
        if source.url in seen:
            continue
        seen.add(source.url)
        sources.append(source)
    return sources


def entry_to_item(entry: Any, source_name: str) -> Optional[NewsItem]:
    """Coerce one parsed feed entry; None when it lacks a title, link or date."""
    title = (entry.get("title") or "").strip()
    link = (entry.get("link") or "").strip()
    if not title or not link:
        return None
    summary = entry.get("summary") or entry.get("description") or ""
    return coerce_item(
        {
            "title": title,
            "link": link,
            "description": _TAG_PATTERN.sub("", summary).strip()[:SUMMARY_LIMIT],
            "pubDate": entry.get("published") or entry.get("updated"),
            "source": source_name,
        }
    )


def fetch_feed(source: FeedSource, parse_fn: Optional[ParseFn] = None) -> List[NewsItem]:
    parse_fn = parse_fn or feedparser.parse
    feed = parse_fn(source.url, agent=USER_AGENT)
    entries = feed.get("entries") or []
    if feed.get("bozo") and not entries:
        logger.warning("Feed %s could not be read: %s", source.name, feed.get("bozo_exception"))
        return []

    items: List[NewsItem] = []
    for entry in entries:
        item = entry_to_item(entry, source.name)
        if item is not None:
            items.append(item)
    logger.info("Feed %s: %d of %d entries usable", source.name, len(items), len(entries))
    return items


def _sort_key(item: NewsItem) -> datetime:
    moment = item.pub_date
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def collect_feeds(
    sources: Iterable[FeedSource],
    *,
    parse_fn: Optional[ParseFn] = None,
    max_workers: int = MAX_WORKERS,
) -> List[NewsItem]:
    """Fetch every feed in parallel and return the merged items, newest first."""
    sources = list(sources)
    if not sources:
        return []
    with ThreadPoolExecutor(max_workers=min(max_workers, len(sources))) as executor:
        batches = list(executor.map(lambda source: fetch_feed(source, parse_fn), sources))

    merged: List[NewsItem] = []
    seen = set()
    for batch in batches:
        for item in batch:
            if item.link in seen:
                continue
            seen.add(item.link)
            merged.append(item)
    merged.sort(key=_sort_key, reverse=True)
    return merged
