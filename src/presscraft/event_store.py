"""Persistence for calendar events (one record per press-release distribution)."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import date as Date
from pathlib import Path
from typing import Iterable, List, Optional, Protocol

from .config import Settings, get_settings
from .file_lock import locked_path
from .models import Event, EventStatus, ReportFileMetadata
from .schema import validate_events_payload

logger = logging.getLogger(__name__)

DEFAULT_STORE_PATH = Path("data") / "events.json"


class EventNotFoundError(KeyError):
    """Raised when an event id is not in the store."""


class EventStore(Protocol):
    def load(self) -> List[Event]: ...

    def save(self, events: Iterable[Event]) -> None: ...


def _serialize(events: Iterable[Event]) -> dict:
    return {"events": [event.model_dump(mode="json", by_alias=True) for event in events]}


class JsonEventStore:
    """Events kept in a single JSON document, validated on every read and write."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "JsonEventStore":
        settings = settings or get_settings()
        return cls(Path(settings.event_store_path) if settings.event_store_path else DEFAULT_STORE_PATH)

    def load(self) -> List[Event]:
        with locked_path(self.path):
            if not self.path.exists():
                return []
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        validate_events_payload(payload)
        return [Event.model_validate(record) for record in payload["events"]]

    def save(self, events: Iterable[Event]) -> None:
        payload = validate_events_payload(_serialize(events))
        with locked_path(self.path):
            self.path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
            tmp_path.write_text(
                json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8"
            )
            tmp_path.replace(self.path)
        logger.debug("Saved %d events to %s", len(payload["events"]), self.path)


class InMemoryEventStore:
    def __init__(self, events: Iterable[Event] = ()) -> None:
        self._events = [event.model_copy() for event in events]

    def load(self) -> List[Event]:
        return [event.model_copy() for event in self._events]

    def save(self, events: Iterable[Event]) -> None:
        self._events = [event.model_copy() for event in events]


def new_event_id() -> str:
    return uuid.uuid4().hex[:12]


def get_event(store: EventStore, event_id: str) -> Event:
    for event in store.load():
        if event.id == event_id:
            return event
    raise EventNotFoundError(event_id)


def add_event(
    store: EventStore,
    title: str,
    on: Date,
    *,
    status: EventStatus | str = EventStatus.SCHEDULED,
    event_type: str = "Press Release",
) -> Event:
    event = Event(id=new_event_id(), title=title, date=on, status=status, type=event_type)
    events = store.load()
    events.append(event)
    store.save(events)
    logger.info("Scheduled event %s (%s) on %s", event.id, title, on)
    return event


def _update(store: EventStore, event_id: str, **changes: object) -> Event:
    events = store.load()
    for index, event in enumerate(events):
        if event.id == event_id:
            updated = event.model_copy(update=changes)
            events[index] = Event.model_validate(updated.model_dump())
            store.save(events)
            return events[index]
    raise EventNotFoundError(event_id)


def attach_draft(store: EventStore, event_id: str, draft: str) -> Event:
    """Store a generated draft on the event and mark it as drafted."""
    status = EventStatus.DRAFT
    current = get_event(store, event_id)
    if current.status == EventStatus.PUBLISHED:
        status = EventStatus.PUBLISHED
    return _update(store, event_id, content=draft, status=status)


def attach_report_metadata(
    store: EventStore, event_id: str, metadata: ReportFileMetadata, file_name: str
) -> Event:
    """Record a coverage report against the event; the event counts as published."""
    return _update(
        store,
        event_id,
        article_count=metadata.article_count,
        performance_file=file_name,
        status=EventStatus.PUBLISHED,
    )
