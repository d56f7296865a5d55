"""Shared work list for one backup cycle."""

from __future__ import annotations

import threading
from typing import Iterable


class WorkQueue:
    """Mutex-guarded list of datasets awaiting a backup cycle step.

    ``pop`` holds the lock only while removing one item. Callers run their
    storage commands after it returns, so a slow command never blocks
    other workers from dequeuing. Items are never re-enqueued.
    """

    def __init__(self, items: Iterable[str]) -> None:
        self._items = list(items)
        self._lock = threading.Lock()

    def pop(self) -> str | None:
        """Remove and return one dataset, or None once the queue is empty."""
        with self._lock:
            if not self._items:
                return None
            return self._items.pop()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
