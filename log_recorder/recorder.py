"""LogRecorder: captures records from named loggers into a bounded ring.

Typical use::

    with LogRecorder().record("Foo", logging.INFO).capture(10) as recorder:
        run_code_under_test()
        assert_that(recorder, LogRecorder.recorded(logging.INFO, "done"))

One mutex guards both the logger registrations and the ring, so a handler
is attached exactly while the recorder is capturing. After ``close`` the
captured records stay readable but nothing new is appended.
"""

import types
import logging
import weakref
import threading
from typing import Iterator

from log_recorder.buffer import RecordRing
from log_recorder.config import Config
from log_recorder.criteria import recorded
from log_recorder.levels import level_name, resolve_level
from log_recorder.models import CapturedRecord

logger = logging.getLogger(__name__)


class _RecordingHandler(logging.Handler):
    """Forwards records at or above its level to the owning recorder."""

    def __init__(self, recorder: "LogRecorder", level: int):
        super().__init__(level)
        self._recorder = recorder

    def emit(self, record: logging.LogRecord):
        try:
            self._recorder._append(record)
        except Exception:
            self.handleError(record)


def _source_name(source) -> str:
    """Logger name for a name, Logger, module or class (its defining module)."""
    if isinstance(source, str):
        return source
    if isinstance(source, logging.Logger):
        return source.name
    if isinstance(source, types.ModuleType):
        return source.__name__
    if isinstance(source, type):
        return source.__module__
    raise TypeError(f"Cannot derive a logger name from {source!r}")


class LogRecorder:
    recorded = staticmethod(recorded)

    def __init__(self, config: Config | None = None):
        self._config = config or Config()
        self._lock = threading.Lock()
        self._thresholds: dict[str, int] = {}
        # (logger, handler, level to restore or None)
        self._attached: list[tuple[logging.Logger, logging.Handler, int | None]] = []
        self._ring: RecordRing | None = None
        self._closed = False
        self._last_seen = threading.local()

    @classmethod
    def from_config(cls, config: Config) -> "LogRecorder":
        """Create a recorder with every configured source pre-registered."""
        recorder = cls(config)
        for rule in config.sources:
            recorder.record(rule.name, rule.level)
        return recorder

    # Configuration

    def record(self, source, level=None) -> "LogRecorder":
        """Register a logger to capture at ``level`` and above.

        ``level`` defaults to the configured level (INFO).

        Registering the same logger again replaces its threshold. Calls made
        once capture has started are ignored.
        """
        name = _source_name(source)
        threshold = resolve_level(self._config.level if level is None else level)

        with self._lock:
            active = self._ring is not None or self._closed
            if not active:
                self._thresholds[name] = threshold

        if active:
            logger.warning("Ignoring record(%r, %s): recorder already started",
                           name, level_name(threshold))
        return self

    def capture(self, capacity: int | None = None) -> "LogRecorder":
        """Attach to every registered logger and keep the last ``capacity`` records."""
        if capacity is None:
            capacity = self._config.capacity
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")

        # Logged before any handler is attached so it never lands in the ring.
        logger.debug("Capturing up to %d record(s) from %d logger(s)",
                     capacity, len(self._thresholds))

        with self._lock:
            if self._closed:
                raise RuntimeError("LogRecorder is closed")
            if self._ring is not None:
                raise RuntimeError("LogRecorder is already capturing")

            self._ring = RecordRing(capacity, self._lock)
            for name, threshold in self._thresholds.items():
                target = logging.getLogger(name)
                handler = _RecordingHandler(self, threshold)
                saved_level = None
                if target.getEffectiveLevel() > threshold:
                    saved_level = target.level
                    target.setLevel(threshold)
                target.addHandler(handler)
                self._attached.append((target, handler, saved_level))
        return self

    # Capture path

    def _append(self, record: logging.LogRecord):
        # A record propagating through several registered loggers reaches
        # us once per logger, back to back on the emitting thread. Only a weak
        # reference is kept so the record and its traceback can be freed.
        last = getattr(self._last_seen, "ref", None)
        if last is not None and last() is record:
            return
        self._last_seen.ref = weakref.ref(record)

        captured = CapturedRecord.from_log_record(record)
        with self._lock:
            if self._closed or self._ring is None:
                return
            self._ring.add_locked(captured)

    # Queries

    @property
    def capacity(self) -> int | None:
        ring = self._ring
        return ring.capacity if ring is not None else None

    @property
    def is_capturing(self) -> bool:
        with self._lock:
            return self._ring is not None and not self._closed

    def get_records(self) -> list[CapturedRecord]:
        """Snapshot of captured records, most recent first."""
        ring = self._ring
        if ring is None:
            return []
        return ring.snapshot()

    def get_messages(self) -> Iterator[str]:
        """Messages of a fresh snapshot, most recent first."""
        return (r.message for r in self.get_records())

    def __len__(self) -> int:
        ring = self._ring
        return len(ring) if ring is not None else 0

    # Release

    def close(self):
        """Detach from all loggers and restore their levels. Safe to repeat."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            attached, self._attached = self._attached, []
            for target, handler, saved_level in attached:
                target.removeHandler(handler)
                if saved_level is not None:
                    target.setLevel(saved_level)

        for _, handler, _ in attached:
            handler.close()
        if attached:
            logger.debug("Released %d logger(s), %d record(s) retained",
                         len(attached), len(self))

    def __enter__(self) -> "LogRecorder":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def __repr__(self) -> str:
        state = "closed" if self._closed else ("capturing" if self._ring is not None else "idle")
        return f"<LogRecorder {state} sources={sorted(self._thresholds)} records={len(self)}>"
