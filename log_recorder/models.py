"""Immutable snapshot of a single captured log event."""

import logging
from dataclasses import dataclass


@dataclass(frozen=True)
class CapturedRecord:
    source_name: str     # logger the event was emitted on
    level: int           # numeric severity, e.g. logging.INFO
    level_name: str      # "INFO", "WARNING", ...
    message: str         # fully formatted, args substituted
    cause: BaseException | None = None
    created: float = 0.0
    thread_name: str = ""

    @classmethod
    def from_log_record(cls, record: logging.LogRecord) -> "CapturedRecord":
        """Snapshot a LogRecord. Never drops the event.

        A message whose args do not fit its format string falls back to
        the unformatted msg; a missing msg becomes "".
        """
        return cls(
            source_name=record.name,
            level=record.levelno,
            level_name=record.levelname,
            message=_format_message(record),
            cause=_extract_cause(record),
            created=record.created,
            thread_name=record.threadName or "",
        )

    def __str__(self) -> str:
        return f"{self.level_name}->{self.message}"


def _format_message(record: logging.LogRecord) -> str:
    if record.msg is None:
        return ""
    try:
        return record.getMessage()
    except (TypeError, ValueError, KeyError):
        return str(record.msg)


def _extract_cause(record: logging.LogRecord) -> BaseException | None:
    # Logger._log has already normalised exc_info to a sys.exc_info() tuple
    if not record.exc_info:
        return None
    return record.exc_info[1]
