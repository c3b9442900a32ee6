"""OpenAI client helpers shared by fact extraction and OCR."""

from __future__ import annotations

import logging
import re
from typing import Optional

from openai import OpenAI

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.MULTILINE)
_FENCE_CLOSE = re.compile(r"\s*```$", re.MULTILINE)


def build_client(api_key: Optional[str] = None) -> OpenAI:
    """Create an OpenAI client; separated for easier testing."""
    return OpenAI(api_key=api_key)


def client_from_settings(settings: Optional[Settings] = None) -> Optional[OpenAI]:
    """Return a client when an API key is configured, else None (heuristics only)."""
    settings = settings or get_settings()
    if not settings.openai_api_key:
        logger.info("OPENAI_API_KEY not set; LLM-backed steps will use fallbacks.")
        return None
    return build_client(settings.openai_api_key)


def response_text_or_raise(response: object, *, step: str) -> str:
    """Extract response text or raise a clear error when output is missing."""
    text = getattr(response, "output_text", None)
    if isinstance(text, str) and text.strip():
        return text

    status = getattr(response, "status", None)
    if status == "incomplete":
        details = getattr(response, "incomplete_details", None)
        reason = getattr(details, "reason", None) if details else None
        hint = ""
        if reason == "max_output_tokens":
            hint = " Increase MAX_TOKENS or set it to 0 to remove the cap."
        raise RuntimeError(f"{step} response incomplete (reason={reason}).{hint}")

    err = getattr(response, "error", None)
    if err:
        raise RuntimeError(f"{step} response error: {err}")

    raise RuntimeError(f"{step} response missing output text.")


def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences models like to wrap JSON in."""
    text = _FENCE_OPEN.sub("", text)
    text = _FENCE_CLOSE.sub("", text)
    return text.strip()
