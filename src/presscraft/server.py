"""FastAPI service for drafting, news grouping and coverage tracking."""

from __future__ import annotations

import os
from datetime import date as Date
from typing import Any, Dict, List, Optional

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile, status
from fastapi.middleware.cors import CORSMiddleware
from openai import OpenAI
from pydantic import BaseModel, ConfigDict, Field

from .analysis import AnalysisResult, analyze_file_content, analyze_link
from .config import configure_logging, get_settings
from .event_store import (
    EventNotFoundError,
    EventStore,
    JsonEventStore,
    add_event,
    attach_draft,
    attach_report_metadata,
)
from .llm import client_from_settings
from .feeds import ParseFn, watched_feeds
from .models import EventStatus, FactSheet, FeedSource, SpecItem
from .news_search import NaverNewsClient, NewsSearchNotConfigured, coerce_item
from .reporting import summarize_events
from .similarity import group_news_by_day, group_similar_news
from .text_extraction import UnsupportedFileTypeError, extract_text_from_bytes
from .workflow import (
    build_feed_timeline,
    build_news_timeline,
    draft_from_fact_sheet,
    process_report_upload,
)


app = FastAPI(title="PressCraft")


def _add_cors(app: FastAPI) -> None:
    """Allow the dashboard frontend to call the API during local development."""
    allow_all = os.getenv("CORS_ALLOW_ALL", "true").lower() == "true"
    origins_env = os.getenv("CORS_ALLOW_ORIGINS", "")
    origins = [o.strip() for o in origins_env.split(",") if o.strip()]
    allow_credentials = (
        os.getenv("CORS_ALLOW_CREDENTIALS", "true").lower() == "true"
    )
    if allow_all or not origins:
        origins = ["*"]
    if origins == ["*"] and allow_credentials:
        # Starlette/FastAPI disallow wildcard origins when credentials are enabled.
        allow_credentials = False
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )


_add_cors(app)


# --- Dependencies ----------------------------------------------------------

def get_event_store() -> EventStore:
    return JsonEventStore.from_settings()


def get_openai_client() -> Optional[OpenAI]:
    return client_from_settings()


def get_news_client() -> NaverNewsClient:
    try:
        return NaverNewsClient.from_settings()
    except NewsSearchNotConfigured as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc


def get_feed_parser() -> Optional[ParseFn]:
    """None selects feedparser."""
    return None


# --- Request bodies --------------------------------------------------------

class DraftRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    fact_sheet: FactSheet = Field(..., alias="factSheet")
    specs: List[SpecItem] = Field(default_factory=list)
    pr_type: Optional[str] = Field(None, alias="prType")


class LinkRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: str
    pr_type: Optional[str] = Field(None, alias="prType")


class NewsGroupRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[Any] = Field(default_factory=list)
    by_day: bool = Field(False, alias="byDay")
    timezone: Optional[str] = None


class FeedNewsRequest(BaseModel):
    """Feeds to add for this fetch on top of the watched list."""

    model_config = ConfigDict(populate_by_name=True)

    feeds: List[FeedSource] = Field(default_factory=list)
    include_defaults: bool = Field(True, alias="includeDefaults")
    timezone: Optional[str] = None


class EventCreateRequest(BaseModel):
    title: str
    date: Date
    status: EventStatus = EventStatus.SCHEDULED
    type: str = "Press Release"


class EventDraftRequest(BaseModel):
    """Either a ready draft or a fact sheet to render one from."""

    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = None
    fact_sheet: Optional[FactSheet] = Field(None, alias="factSheet")
    specs: List[SpecItem] = Field(default_factory=list)


# --- Helpers ---------------------------------------------------------------

def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def _analysis_body(result: AnalysisResult) -> Dict[str, Any]:
    return {
        "success": result.success,
        "data": _dump(result.data) if result.data else None,
        "message": result.message,
        "usedFallback": result.used_fallback,
        "specs": [_dump(spec) for spec in result.specs],
    }


def _read_upload(file: UploadFile) -> bytes:
    data = file.file.read()
    if not data:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Empty upload.")
    return data


def _not_found(event_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail=f"Event not found: {event_id}"
    )


# --- Routes ----------------------------------------------------------------

@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.post("/analyze/file")
def analyze_file(
    file: UploadFile = File(...),
    pr_type: Optional[str] = Form(None),
    client: Optional[OpenAI] = Depends(get_openai_client),
) -> Dict[str, Any]:
    data = _read_upload(file)
    file_name = file.filename or "upload"
    try:
        text = extract_text_from_bytes(data, file_name, client=client)
    except UnsupportedFileTypeError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    result = analyze_file_content(
        text, file_name, client, pr_type=pr_type, use_default_client=False
    )
    return _analysis_body(result)


@app.post("/analyze/link")
def analyze_link_route(
    payload: LinkRequest, client: Optional[OpenAI] = Depends(get_openai_client)
) -> Dict[str, Any]:
    if not payload.url.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="URL is required")
    return _analysis_body(analyze_link(payload.url, client, pr_type=payload.pr_type))


@app.post("/draft")
def draft(payload: DraftRequest) -> Dict[str, Any]:
    text = draft_from_fact_sheet(payload.fact_sheet, payload.specs, payload.pr_type)
    return {"draft": text}


@app.post("/news/group")
def group_news(payload: NewsGroupRequest) -> Dict[str, Any]:
    items = [item for item in (coerce_item(raw) for raw in payload.items) if item]
    if payload.by_day:
        timeline = group_news_by_day(items, timezone=payload.timezone or get_settings().timezone)
        return {"days": [_dump(day) for day in timeline]}
    groups = group_similar_news(items)
    return {"groups": [_dump(group) for group in groups]}


@app.get("/news/search")
def search_news(
    query: str,
    max_pages: int = 1,
    sort: str = "date",
    news_client: NaverNewsClient = Depends(get_news_client),
) -> Dict[str, Any]:
    try:
        timeline = build_news_timeline(query, news_client, max_pages=max_pages, sort=sort)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return {"query": query, "days": [_dump(day) for day in timeline]}


@app.get("/feeds")
def list_feeds() -> Dict[str, Any]:
    return {"feeds": [_dump(source) for source in watched_feeds()]}


@app.post("/feeds/news")
def feed_news(
    payload: FeedNewsRequest, parse_fn: Optional[ParseFn] = Depends(get_feed_parser)
) -> Dict[str, Any]:
    sources = watched_feeds(payload.feeds, include_defaults=payload.include_defaults)
    items, timeline = build_feed_timeline(
        sources, parse_fn=parse_fn, timezone=payload.timezone
    )
    return {
        "sources": [_dump(source) for source in sources],
        "items": [_dump(item) for item in items],
        "days": [_dump(day) for day in timeline],
    }


@app.post("/reports/metadata")
def report_metadata(
    file: UploadFile = File(...),
    client: Optional[OpenAI] = Depends(get_openai_client),
) -> Dict[str, Any]:
    metadata = process_report_upload(file.filename or "upload", _read_upload(file), client)
    return _dump(metadata)


@app.get("/events")
def list_events(store: EventStore = Depends(get_event_store)) -> Dict[str, Any]:
    events = sorted(store.load(), key=lambda event: event.date)
    return {"events": [_dump(event) for event in events]}


@app.post("/events", status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreateRequest, store: EventStore = Depends(get_event_store)
) -> Dict[str, Any]:
    event = add_event(
        store, payload.title, payload.date, status=payload.status, event_type=payload.type
    )
    return _dump(event)


@app.post("/events/{event_id}/draft")
def save_event_draft(
    event_id: str,
    payload: EventDraftRequest,
    store: EventStore = Depends(get_event_store),
) -> Dict[str, Any]:
    if payload.content:
        text = payload.content
    elif payload.fact_sheet is not None:
        text = draft_from_fact_sheet(payload.fact_sheet, payload.specs)
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Provide either content or factSheet.",
        )
    try:
        event = attach_draft(store, event_id, text)
    except EventNotFoundError as exc:
        raise _not_found(event_id) from exc
    return _dump(event)


@app.post("/events/{event_id}/performance")
def upload_performance(
    event_id: str,
    file: UploadFile = File(...),
    store: EventStore = Depends(get_event_store),
    client: Optional[OpenAI] = Depends(get_openai_client),
) -> Dict[str, Any]:
    file_name = file.filename or "upload"
    metadata = process_report_upload(file_name, _read_upload(file), client)
    try:
        event = attach_report_metadata(store, event_id, metadata, file_name)
    except EventNotFoundError as exc:
        raise _not_found(event_id) from exc
    return {"event": _dump(event), "metadata": _dump(metadata)}


@app.get("/reports/summary")
def reports_summary(store: EventStore = Depends(get_event_store)) -> Dict[str, Any]:
    return summarize_events(store.load()).model_dump(mode="json")


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run(
        "presscraft.server:app",
        host=os.getenv("PRESSCRAFT_HOST", "0.0.0.0"),
        port=int(os.getenv("PRESSCRAFT_PORT", "8000")),
        reload=os.getenv("PRESSCRAFT_RELOAD", "false").lower() == "true",
    )
