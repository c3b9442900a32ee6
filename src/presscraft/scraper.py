"""Single-page fetch for product pages submitted as links."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from bs4 import BeautifulSoup
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; PressCraft/1.0; press-release drafting)",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "ko-KR,ko;q=0.9,en;q=0.5",
}
STRIP_SELECTORS = "nav, footer, script, style, noscript, .ad, .banner"


@dataclass
class ScrapedPage:
    url: str
    title: str
    text: str


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type((requests.ConnectionError, requests.Timeout)),
    reraise=True,
)
def _get(url: str, session: requests.Session, timeout: int) -> requests.Response:
    response = session.get(url, headers=DEFAULT_HEADERS, timeout=timeout)
    response.raise_for_status()
    return response


def parse_page(html: str, url: str = "") -> ScrapedPage:
    """Extract the page title and readable body text from HTML."""
    soup = BeautifulSoup(html, "html.parser")
    for element in soup.select(STRIP_SELECTORS):
        element.decompose()

    title = ""
    og_title = soup.find("meta", attrs={"property": "og:title"})
    if soup.title and soup.title.string:
        title = soup.title.string.strip()
    elif og_title and og_title.get("content"):
        title = og_title["content"].strip()

    body = soup.body or soup
    lines = [line.strip() for line in body.get_text("\n").splitlines()]
    text = "\n".join(line for line in lines if line)
    return ScrapedPage(url=url, title=title, text=text)


def fetch_page(
    url: str, session: Optional[requests.Session] = None, timeout: int = 30
) -> Optional[ScrapedPage]:
    """Fetch and parse a page; returns None when the page cannot be retrieved."""
    try:
        response = _get(url, session or requests.Session(), timeout)
    except requests.RequestException as exc:
        logger.error("Failed to fetch %s: %s", url, exc)
        return None
    response.encoding = response.encoding or response.apparent_encoding
    page = parse_page(response.text, url=url)
    logger.info("Fetched %s: %d characters, title=%r", url, len(page.text), page.title)
    return page
