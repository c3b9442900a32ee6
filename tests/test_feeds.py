from datetime import date

from presscraft.config import Settings
from presscraft.feeds import (
    DEFAULT_FEEDS,
    collect_feeds,
    entry_to_item,
    feed_from_text,
    fetch_feed,
    watched_feeds,
)
from presscraft.models import FeedSource
from presscraft.workflow import build_feed_timeline

TECH = FeedSource(name="TechCrunch", url="https://techcrunch.com/feed/")
DESK = FeedSource(name="데스크뉴스", url="https://desk.example.com/rss")


def entry(title, link, published, summary=""):
    return {"title": title, "link": link, "published": published, "summary": summary}


class FakeParser:
    def __init__(self, feeds):
        self.feeds = feeds
        self.calls = []

    def __call__(self, url, agent=None):
        self.calls.append((url, agent))
        return self.feeds.get(url, {"bozo": 1, "bozo_exception": "unreachable", "entries": []})


def test_entry_to_item_tags_source_and_strips_markup():
    item = entry_to_item(
        entry(" 데스커 신제품 ", "https://a/1", "Mon, 18 Mar 2024 09:00:00 +0900", "<p>본문 <b>요약</b></p>"),
        "데스크뉴스",
    )
    assert item.title == "데스커 신제품"
    assert item.source == "데스크뉴스"
    assert item.description == "본문 요약"
    assert item.pub_date.day == 18


def test_entry_to_item_uses_updated_and_rejects_incomplete_entries():
    updated = {"title": "제목", "link": "https://a/2", "updated": "2024-03-18T10:00:00+09:00"}
    assert entry_to_item(updated, "x").pub_date.hour == 10
    assert entry_to_item({"title": "", "link": "https://a/3", "published": "2024-03-18"}, "x") is None
    assert entry_to_item({"title": "날짜 없음", "link": "https://a/4"}, "x") is None


def test_fetch_feed_skips_unreadable_feed():
    parser = FakeParser({})
    assert fetch_feed(DESK, parse_fn=parser) == []
    assert parser.calls[0][0] == DESK.url


def test_collect_feeds_merges_newest_first_and_dedupes_links():
    parser = FakeParser(
        {
            TECH.url: {
                "entries": [
                    entry("Older", "https://t/1", "Sun, 17 Mar 2024 09:00:00 +0000"),
                    entry("Shared", "https://shared", "Mon, 18 Mar 2024 01:00:00 +0000"),
                ]
            },
            DESK.url: {
                "bozo": 1,
                "entries": [
                    entry("최신", "https://d/1", "Mon, 18 Mar 2024 12:00:00 +0900"),
                    entry("Shared", "https://shared", "Mon, 18 Mar 2024 01:00:00 +0000"),
                ],
            },
        }
    )

    items = collect_feeds([TECH, DESK], parse_fn=parser)

    assert [item.link for item in items] == ["https://d/1", "https://shared", "https://t/1"]
    assert [item.source for item in items] == ["데스크뉴스", "TechCrunch", "TechCrunch"]


def test_collect_feeds_orders_naive_dates_as_utc():
    parser = FakeParser(
        {
            DESK.url: {
                "entries": [
                    entry("naive", "https://d/1", "2024-03-18 05:00:00"),
                    entry("aware", "https://d/2", "2024-03-18T06:00:00+00:00"),
                ]
            }
        }
    )
    assert [item.link for item in collect_feeds([DESK], parse_fn=parser)] == ["https://d/2", "https://d/1"]


def test_collect_feeds_without_sources():
    assert collect_feeds([]) == []


def test_feed_from_text():
    assert feed_from_text("데스크뉴스=https://desk.example.com/rss") == DESK
    assert feed_from_text("https://news.example.com/feed") == FeedSource(
        name="news.example.com", url="https://news.example.com/feed"
    )


def test_watched_feeds_adds_settings_and_extra_feeds_once():
    settings = Settings(FEED_SOURCES=[{"name": "데스크뉴스", "url": DESK.url}])

    sources = watched_feeds([DESK, FeedSource(name="Dup", url=TECH.url)], settings=settings)

    assert sources == [*DEFAULT_FEEDS, DESK]
    assert watched_feeds([DESK], include_defaults=False, settings=Settings()) == [DESK]


def test_build_feed_timeline_groups_merged_items_by_day():
    parser = FakeParser(
        {
            DESK.url: {
                "entries": [
                    entry("데스커 모션데스크 출시", "https://d/1", "Mon, 18 Mar 2024 09:00:00 +0900"),
                    entry("[포토] 데스커 모션데스크 출시", "https://d/2", "Mon, 18 Mar 2024 11:00:00 +0900"),
                    entry("시디즈 신제품", "https://d/3", "Sun, 17 Mar 2024 11:00:00 +0900"),
                ]
            }
        }
    )

    items, timeline = build_feed_timeline([DESK], parse_fn=parser, timezone="Asia/Seoul")

    assert len(items) == 3
    assert [day.date for day in timeline] == [date(2024, 3, 18), date(2024, 3, 17)]
    assert timeline[0].groups[0].count == 2
