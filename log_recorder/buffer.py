"""Bounded most-recent-first ring of captured records."""

from __future__ import annotations

import threading
from collections import deque

from log_recorder.models import CapturedRecord


class RecordRing:
    """Fixed-capacity ring that keeps the newest records at the front.

    Every access happens under ``lock``. The owner may pass its own lock so
    that other state (e.g. logger registrations) shares the same mutex.
    """

    def __init__(self, capacity: int, lock: threading.Lock | None = None):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self._capacity = capacity
        self._lock = lock or threading.Lock()
        self._records: deque[CapturedRecord] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._capacity

    def add(self, record: CapturedRecord):
        """Prepend a record, dropping the oldest if at capacity."""
        with self._lock:
            self.add_locked(record)

    def add_locked(self, record: CapturedRecord):
        """Prepend a record. Must be called with the lock held."""
        self._records.appendleft(record)

    def snapshot(self) -> list[CapturedRecord]:
        """Return a point-in-time copy, most recent first."""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
