"""Client for the Naver news search API."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

import requests
from pydantic import ValidationError
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .config import Settings, get_settings
from .models import NewsItem

logger = logging.getLogger(__name__)

NAVER_NEWS_URL = "https://openapi.naver.com/v1/search/news.json"
PAGE_SIZE = 100
MAX_RESULTS = 1000
SORT_OPTIONS = ("date", "sim")


class NewsSearchNotConfigured(RuntimeError):
    """Raised when the Naver credentials are missing."""


class NaverNewsClient:
    """Fetches news items for a keyword, page by page."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        session: Optional[requests.Session] = None,
        timeout: int = 10,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.session = session or requests.Session()
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **kwargs: Any) -> "NaverNewsClient":
        settings = settings or get_settings()
        if not settings.naver_client_id or not settings.naver_client_secret:
            raise NewsSearchNotConfigured(
                "NAVER_CLIENT_ID and NAVER_CLIENT_SECRET must be set to search news."
            )
        return cls(settings.naver_client_id, settings.naver_client_secret, **kwargs)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "X-Naver-Client-Id": self.client_id,
            "X-Naver-Client-Secret": self.client_secret,
        }

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=8),
        retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
        reraise=True,
    )
    def _request(self, params: dict[str, Any]) -> dict[str, Any]:
        response = self.session.get(
            NAVER_NEWS_URL, headers=self.headers, params=params, timeout=self.timeout
        )
        response.raise_for_status()
        return response.json()

    def search_page(
        self, query: str, *, sort: str = "date", start: int = 1, display: int = PAGE_SIZE
    ) -> Tuple[List[NewsItem], int]:
        """Return one page of valid items and the number of raw items the API sent."""
        if sort not in SORT_OPTIONS:
            raise ValueError(f"sort must be one of {SORT_OPTIONS}, got {sort!r}")
        payload = self._request(
            {"query": query, "display": display, "start": start, "sort": sort}
        )
        raw_items = payload.get("items") or []
        items: List[NewsItem] = []
        for raw in raw_items:
            item = coerce_item(raw)
            if item is not None:
                items.append(item)
        skipped = len(raw_items) - len(items)
        if skipped:
            logger.warning(
                "Skipped %d malformed news items for %r at start=%d", skipped, query, start
            )
        return items, len(raw_items)

    def search(
        self, query: str, *, sort: str = "date", start: int = 1, display: int = PAGE_SIZE
    ) -> List[NewsItem]:
        """Return one page of results; malformed items are skipped."""
        items, _ = self.search_page(query, sort=sort, start=start, display=display)
        return items
    def search_all(
        self, query: str, *, sort: str = "date", max_pages: int = 10
    ) -> List[NewsItem]:
        """Walk result pages until a short page or the API's start-offset cap."""
        collected: List[NewsItem] = []
        for page in range(max_pages):
            start = 1 + page * PAGE_SIZE
            if start > MAX_RESULTS:
                break
            batch, received = self.search_page(query, sort=sort, start=start)
            collected.extend(batch)
            # A short page is decided by what the API sent, not by what survived coercion.
            if received < PAGE_SIZE:
                break
        logger.info("News search %r returned %d items", query, len(collected))
        return collected


def coerce_item(raw: Any) -> Optional[NewsItem]:
    """Validate one raw API item; None when it is malformed."""
    if not isinstance(raw, dict):
        return None
    try:
        return NewsItem.model_validate(raw)
    except (ValidationError, ValueError, OverflowError) as exc:
        logger.debug("Skipping malformed news item %r: %s", raw.get("link"), exc)
        return None
