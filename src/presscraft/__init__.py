"""Press-release drafting and PR-operations toolkit."""

__all__ = [
    "config",
    "models",
    "similarity",
    "report_metadata",
    "spec_story",
    "templates",
    "press_release",
    "analysis",
    "news_search",
    "feeds",
    "event_store",
    "reporting",
    "workflow",
]
