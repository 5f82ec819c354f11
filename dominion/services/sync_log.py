"""
dominion.services.sync_log — Recent Sync Activity for the Admin API
====================================================================

A bounded in-memory tail of the ``dominion.*`` log records, so an admin
who just pressed "force sync" (or wants to know what last night's run
did) can read the pipeline's own log lines over HTTP.

Only the ``dominion`` logger tree is captured; uvicorn and SQLAlchemy
chatter stays out.  Nothing is persisted: the tail is per process and
starts empty on every boot.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

DEFAULT_CAPACITY = 500
CAPTURED_LOGGER = "dominion"
VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class SyncLogEntry:
    timestamp: datetime
    level: str
    logger: str
    message: str

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data


class SyncLogHandler(logging.Handler):
    """Keep the last *capacity* formatted records, newest last."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, level: int = logging.INFO) -> None:
        super().__init__(level)
        self._entries: deque[SyncLogEntry] = deque(maxlen=capacity)
        self._entries_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = record.getMessage()
            if record.exc_info and record.exc_info[1] is not None:
                exc = record.exc_info[1]
                message = f"{message} [{type(exc).__name__}: {exc}]"
            entry = SyncLogEntry(
                timestamp=datetime.fromtimestamp(record.created, tz=UTC),
                level=record.levelname,
                logger=record.name,
                message=message,
            )
            with self._entries_lock:
                self._entries.append(entry)
        except Exception:
            self.handleError(record)

    def tail(self, limit: int = 100, *, min_level: str | None = None) -> list[SyncLogEntry]:
        threshold = logging.getLevelName(min_level.upper()) if min_level else 0
        with self._entries_lock:
            snapshot = list(self._entries)
        if threshold:
            snapshot = [e for e in snapshot if logging.getLevelName(e.level) >= threshold]
        return snapshot[-limit:] if limit else snapshot

    def clear(self) -> None:
        with self._entries_lock:
            self._entries.clear()


_handler: SyncLogHandler | None = None
_install_lock = threading.Lock()


def install_sync_log(level: int = logging.INFO, capacity: int = DEFAULT_CAPACITY) -> SyncLogHandler:
    """Attach the capture handler to the ``dominion`` logger (once per process)."""
    global _handler
    with _install_lock:
        if _handler is None:
            _handler = SyncLogHandler(capacity=capacity, level=level)
            log = logging.getLogger(CAPTURED_LOGGER)
            log.addHandler(_handler)
            if log.getEffectiveLevel() > level:
                log.setLevel(level)
        else:
            _handler.setLevel(level)
    return _handler


def recent_sync_logs(limit: int = 100, *, min_level: str | None = None) -> list[dict[str, str]]:
    """Most recent captured entries as dicts; empty if capture isn't installed."""
    if min_level is not None and min_level.upper() not in VALID_LEVELS:
        raise ValueError(f"Invalid level: {min_level}. Must be one of {VALID_LEVELS}")
    if _handler is None:
        return []
    return [e.to_dict() for e in _handler.tail(limit, min_level=min_level)]
