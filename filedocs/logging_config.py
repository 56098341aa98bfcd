"""Logging configuration for filedocs.

Provides a JSON formatted logger named ``filedocs`` (the parent of every
module logger in the package) and simple cache statistics.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

LOG_NAME = "filedocs"
LOG_FILE = Path(os.getenv("FILEDOCS_LOG_FILE", "logs/filedocs.log"))
MAX_BYTES = 5 * 1024 * 1024
BACKUP_COUNT = 5

# Attributes present on every LogRecord. Anything else is considered an extra field.
DEFAULT_LOG_RECORD_ATTRS = {
    "name",
    "msg",
    "args",
    "levelname",
    "levelno",
    "pathname",
    "filename",
    "module",
    "exc_info",
    "exc_text",
    "stack_info",
    "lineno",
    "funcName",
    "created",
    "msecs",
    "relativeCreated",
    "thread",
    "threadName",
    "processName",
    "process",
    "taskName",
    "message",
    "asctime",
}


class JsonLogFormatter(logging.Formatter):
    """Formatter returning log records as JSON strings."""

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401 - short description
        base: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="seconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in DEFAULT_LOG_RECORD_ATTRS
        }
        repository = extras.pop("repository", None)
        if repository is not None:
            base["repository"] = repository
        if extras:
            base["extra"] = extras
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


def get_logger(level: int = logging.INFO) -> logging.Logger:
    """Return the configured package logger."""
    logger = logging.getLogger(LOG_NAME)
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)

    formatter = JsonLogFormatter()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(formatter)

    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=MAX_BYTES,
        backupCount=BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)

    logger.addHandler(stream_handler)
    logger.addHandler(file_handler)
    logger.propagate = False
    return logger


class CacheStats:
    """Simple cache hit/miss statistics collector."""

    def __init__(self) -> None:
        self._hits = 0
        self._misses = 0
        self._logger = logging.getLogger(f"{LOG_NAME}.cache")

    def record_hit(self) -> None:
        """Record a cache hit."""
        self._hits += 1

    def record_miss(self) -> None:
        """Record a cache miss."""
        self._misses += 1

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def hit_rate(self) -> float:
        """Return the cache hit rate as a percentage."""
        total = self._hits + self._misses
        return (self._hits / total * 100) if total else 0.0

    def log_hit_rate(self, repository: Optional[str] = None) -> None:
        """Log the current cache hit rate, tagged with ``repository`` if given."""
        extra: dict[str, object] = {"hit_rate": round(self.hit_rate, 2)}
        if repository is not None:
            extra["repository"] = repository
        self._logger.info("Cache hit-rate", extra=extra)
