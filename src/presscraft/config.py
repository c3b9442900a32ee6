"""Configuration helpers for the press-release service."""

import logging
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import FeedSource


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    analysis_models: List[str] = Field(
        default_factory=lambda: ["gpt-4.1-mini", "gpt-4o-mini"],
        description="Fact-sheet extraction models, tried in order until one answers.",
    )
    ocr_model: str = Field(
        "gpt-4.1-mini", description="Vision-capable model used to OCR uploaded images."
    )
    max_tokens: int = Field(
        1500,
        description="Max output tokens for fact-sheet extraction; 0 removes the cap.",
    )
    temperature: float = Field(0.2, description="Generation temperature.")
    max_retries: int = Field(
        3, description="Attempts per model when the API answers with a rate limit."
    )
    naver_client_id: str | None = Field(None, alias="NAVER_CLIENT_ID")
    naver_client_secret: str | None = Field(None, alias="NAVER_CLIENT_SECRET")
    news_max_pages: int = Field(
        10, description="Pages of 100 results fetched per news query (API cap is 10)."
    )
    feed_sources: List[FeedSource] = Field(
        default_factory=list,
        alias="FEED_SOURCES",
        description='Extra RSS feeds as JSON, e.g. [{"name": "...", "url": "..."}].',
    )
    timezone: str = Field(
        "Asia/Seoul", description="Timezone used to bucket news items by calendar day."
    )
    event_store_path: str | None = Field(
        None,
        alias="EVENT_STORE_PATH",
        description="JSON file backing the calendar; defaults to data/events.json.",
    )
    log_level: str = Field("INFO", alias="LOG_LEVEL")


def get_settings() -> Settings:
    """Return a settings instance built from the current environment."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for CLI and server entry points."""
    resolved = (level or get_settings().log_level or "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, resolved, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s  %(message)s",
    )
