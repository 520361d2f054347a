"""Log level resolution: names and ints to stdlib severities."""

import logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Names other logging stacks use for the same severities.
_ALIASES = {
    "WARN": logging.WARNING,
    "FATAL": logging.CRITICAL,
    "SEVERE": logging.ERROR,
    "FINE": logging.DEBUG,
}


def resolve_level(level) -> int:
    """Return the numeric severity for an int or a level name.

    Raises ValueError for unknown names and negative numbers.
    """
    if isinstance(level, bool):
        raise ValueError(f"Invalid log level: {level!r}")
    if isinstance(level, int):
        if level < 0:
            raise ValueError(f"Invalid log level: {level}")
        return level
    if not isinstance(level, str):
        raise ValueError(f"Invalid log level: {level!r}")

    normalized = level.strip().upper()
    if normalized in LOG_LEVELS:
        return getattr(logging, normalized)
    if normalized in _ALIASES:
        return _ALIASES[normalized]
    raise ValueError(f"Unknown log level: {level!r}")


def level_name(levelno: int) -> str:
    return logging.getLevelName(levelno)
