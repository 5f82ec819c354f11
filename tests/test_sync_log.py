"""
tests/test_sync_log.py — Sync Activity Capture
===============================================
"""

from __future__ import annotations

import logging

import pytest

from dominion.services.sync_log import SyncLogHandler, install_sync_log, recent_sync_logs


def _record(name: str, level: int, msg: str, *args, exc: Exception | None = None):
    exc_info = (type(exc), exc, None) if exc else None
    return logging.LogRecord(name, level, __file__, 1, msg, args, exc_info)


class TestSyncLogHandler:
    def test_keeps_newest_within_capacity(self):
        handler = SyncLogHandler(capacity=3)
        for i in range(5):
            handler.emit(_record("dominion.services.content_sync", logging.INFO, "batch %d", i))
        messages = [e.message for e in handler.tail(10)]
        assert messages == ["batch 2", "batch 3", "batch 4"]

    def test_tail_limit(self):
        handler = SyncLogHandler()
        for i in range(5):
            handler.emit(_record("dominion", logging.INFO, "line %d", i))
        assert [e.message for e in handler.tail(2)] == ["line 3", "line 4"]

    def test_min_level_filter(self):
        handler = SyncLogHandler()
        handler.emit(_record("dominion", logging.INFO, "fine"))
        handler.emit(_record("dominion", logging.WARNING, "count mismatch"))
        handler.emit(_record("dominion", logging.ERROR, "sync failed"))
        assert [e.level for e in handler.tail(10, min_level="warning")] == ["WARNING", "ERROR"]

    def test_exception_summary_appended(self):
        handler = SyncLogHandler()
        handler.emit(_record("dominion", logging.ERROR, "sync failed", exc=RuntimeError("db down")))
        (entry,) = handler.tail(1)
        assert entry.message == "sync failed [RuntimeError: db down]"

    def test_entry_dict(self):
        handler = SyncLogHandler()
        handler.emit(_record("dominion.x", logging.INFO, "hello"))
        data = handler.tail(1)[0].to_dict()
        assert set(data) == {"timestamp", "level", "logger", "message"}
        assert data["timestamp"].endswith("+00:00")

    def test_clear(self):
        handler = SyncLogHandler()
        handler.emit(_record("dominion", logging.INFO, "x"))
        handler.clear()
        assert handler.tail(10) == []


class TestInstall:
    def test_captures_dominion_loggers_only(self):
        handler = install_sync_log()
        handler.clear()
        logging.getLogger("dominion.services.scheduler").info("Next sync scheduled")
        logging.getLogger("uvicorn.access").info("GET /api/health")

        messages = [e["message"] for e in recent_sync_logs(50)]
        assert "Next sync scheduled" in messages
        assert "GET /api/health" not in messages

    def test_install_is_idempotent(self):
        assert install_sync_log() is install_sync_log()
        handlers = logging.getLogger("dominion").handlers
        assert sum(isinstance(h, SyncLogHandler) for h in handlers) == 1

    def test_rejects_unknown_level(self):
        with pytest.raises(ValueError, match="Invalid level"):
            recent_sync_logs(10, min_level="LOUD")
