"""Process-local locks so concurrent requests do not interleave event-store writes."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from threading import RLock
from typing import Iterator

_PATH_LOCKS: dict[Path, RLock] = {}
_REGISTRY_LOCK = RLock()


def lock_for(path: Path) -> RLock:
    """Return the lock shared by every writer of ``path``."""
    key = Path(path).resolve()
    with _REGISTRY_LOCK:
        return _PATH_LOCKS.setdefault(key, RLock())


@contextmanager
def locked_path(path: Path) -> Iterator[Path]:
    """Hold the path's lock for a read-modify-write cycle; re-entrant per thread."""
    with lock_for(path):
        yield Path(path)
