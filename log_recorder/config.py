"""Configuration loading from env vars and an optional YAML file."""

import os
import logging
from dataclasses import dataclass, field

import yaml

from log_recorder.levels import resolve_level

logger = logging.getLogger(__name__)

DEFAULT_CAPACITY = 1000
DEFAULT_LEVEL = "INFO"


@dataclass(frozen=True)
class SourceRule:
    name: str      # logger name, "" for the root logger
    level: str     # minimum level to capture, e.g. "INFO"


@dataclass(frozen=True)
class Config:
    capacity: int = DEFAULT_CAPACITY
    level: str = DEFAULT_LEVEL
    sources: list[SourceRule] = field(default_factory=list)


def load_yaml_config(path: str | None) -> dict:
    """Load recorder settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded YAML config from %s", path)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(yaml_data: dict | None = None) -> Config:
    """Build Config from env vars and parsed YAML data.

    Env vars win over YAML values. Sources without their own level use the
    resolved default level.
    """
    yaml_data = yaml_data or {}

    capacity = int(os.environ.get(
        "LOG_RECORDER_CAPACITY", yaml_data.get("capacity", DEFAULT_CAPACITY)
    ))
    if capacity <= 0:
        raise ValueError(f"capacity must be positive, got {capacity}")

    level = str(os.environ.get(
        "LOG_RECORDER_LEVEL", yaml_data.get("level", DEFAULT_LEVEL)
    )).strip().upper()
    resolve_level(level)

    sources = []
    for rule in yaml_data.get("sources", []) or []:
        if isinstance(rule, str):
            rule = {"name": rule}
        source_level = str(rule.get("level", level)).strip().upper()
        resolve_level(source_level)
        sources.append(SourceRule(name=rule.get("name") or "", level=source_level))

    return Config(capacity=capacity, level=level, sources=sources)
