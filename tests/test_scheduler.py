"""
tests/test_scheduler.py — Nightly Sync Scheduler
=================================================

Drives :class:`NightlySyncScheduler` with an injected clock so the first
timer fires within milliseconds and the re-armed one lands a day later.
"""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pytest

from dominion.services.content_sync import SyncResult
from dominion.services.scheduler import NightlySyncScheduler, start_nightly_content_sync

LONDON = ZoneInfo("Europe/London")

# London is on GMT in January, so these are also 22:59:59.98 / 23:00:01 local.
JUST_BEFORE = datetime(2026, 1, 10, 22, 59, 59, 980000, tzinfo=UTC)
JUST_AFTER = datetime(2026, 1, 10, 23, 0, 1, tzinfo=UTC)
MIDDAY = datetime(2026, 1, 10, 12, 0, tzinfo=UTC)


def run_async(coro):
    """Run an async coroutine without pytest-asyncio."""
    return asyncio.run(coro)


class FakeClock:
    """Return each queued instant once, then repeat the last one."""

    def __init__(self, *instants: datetime) -> None:
        self._instants = list(instants)

    def __call__(self) -> datetime:
        if len(self._instants) > 1:
            return self._instants.pop(0)
        return self._instants[0]


def _result() -> SyncResult:
    return SyncResult(sparks=180, reflections=180, finished_at=datetime.now(UTC))


class TestFiring:
    def test_fires_once_and_rearms_for_tomorrow(self):
        async def _inner():
            sync = AsyncMock(return_value=_result())
            engine = MagicMock()
            sched = NightlySyncScheduler(
                engine,
                sync=sync,
                sync_kwargs={"batch_size": 10},
                clock=FakeClock(JUST_BEFORE, JUST_AFTER),
            )
            sched.start()
            await asyncio.sleep(0.2)

            sync.assert_awaited_once_with(engine, batch_size=10)
            assert sched.runs == 1
            assert sched.failures == 0
            assert sched.last_result.sparks == 180
            assert sched.running
            assert sched.next_run_at == datetime(2026, 1, 11, 23, 0, tzinfo=LONDON)
            sched.stop()

        run_async(_inner())

    def test_failure_is_logged_and_rearmed(self):
        async def _inner():
            sync = AsyncMock(side_effect=RuntimeError("db down"))
            sched = NightlySyncScheduler(
                MagicMock(), sync=sync, clock=FakeClock(JUST_BEFORE, JUST_AFTER),
            )
            sched.start()
            await asyncio.sleep(0.2)

            assert sync.await_count == 1
            assert sched.failures == 1
            assert sched.runs == 0
            assert "db down" in sched.last_error
            assert sched.running
            assert sched.next_run_at == datetime(2026, 1, 11, 23, 0, tzinfo=LONDON)
            sched.stop()

        run_async(_inner())

    def test_lagging_wall_clock_does_not_refire_same_slot(self):
        async def _inner():
            # Timer wakes on the monotonic clock while the wall clock still
            # reads a hair before 23:00.
            lagging = datetime(2026, 1, 10, 22, 59, 59, 990000, tzinfo=UTC)
            sync = AsyncMock(return_value=_result())
            sched = NightlySyncScheduler(
                MagicMock(), sync=sync, clock=FakeClock(JUST_BEFORE, lagging, lagging),
            )
            sched.start()
            await asyncio.sleep(0.3)

            assert sync.await_count == 1
            assert sched.runs == 1
            assert sched.next_run_at == datetime(2026, 1, 11, 23, 0, tzinfo=LONDON)
            sched.stop()

        run_async(_inner())

    def test_schedule_next_after_slot_skips_it(self):
        async def _inner():
            sched = NightlySyncScheduler(
                MagicMock(), sync=AsyncMock(), clock=FakeClock(JUST_BEFORE),
            )
            sched.start()
            slot = datetime(2026, 1, 10, 23, 0, tzinfo=LONDON)
            assert sched.next_run_at == slot
            assert sched.schedule_next(after=slot) == datetime(2026, 1, 11, 23, 0, tzinfo=LONDON)
            sched.stop()

        run_async(_inner())

    def test_success_clears_previous_error(self):
        async def _inner():
            sync = AsyncMock(side_effect=[RuntimeError("boom"), _result()])
            sched = NightlySyncScheduler(MagicMock(), sync=sync, clock=FakeClock(MIDDAY))
            sched.start()
            assert await sched.run_once() is None
            assert sched.last_error is not None
            assert (await sched.run_once()).sparks == 180
            assert sched.last_error is None
            sched.stop()

        run_async(_inner())


class TestLifecycle:
    def test_no_fire_before_target(self):
        async def _inner():
            sync = AsyncMock(return_value=_result())
            sched = NightlySyncScheduler(MagicMock(), sync=sync, clock=FakeClock(MIDDAY))
            sched.start()
            await asyncio.sleep(0.05)
            sync.assert_not_awaited()
            assert sched.next_run_at == datetime(2026, 1, 10, 23, 0, tzinfo=LONDON)
            sched.stop()

        run_async(_inner())

    def test_second_start_cancels_first_timer(self):
        async def _inner():
            sched = NightlySyncScheduler(
                MagicMock(), sync=AsyncMock(), clock=FakeClock(MIDDAY),
            )
            sched.start()
            first = sched._timer
            sched.start()
            second = sched._timer
            await asyncio.sleep(0.01)

            assert first is not second
            assert first.cancelled()
            assert not second.done()
            sched.stop()

        run_async(_inner())

    def test_stop_cancels_pending_timer(self):
        async def _inner():
            sched = NightlySyncScheduler(
                MagicMock(), sync=AsyncMock(), clock=FakeClock(MIDDAY),
            )
            sched.start()
            timer = sched._timer
            sched.stop()
            await asyncio.sleep(0.01)

            assert timer.cancelled()
            assert not sched.running
            assert sched.next_run_at is None

        run_async(_inner())

    def test_schedule_before_start_raises(self):
        sched = NightlySyncScheduler(MagicMock(), sync=AsyncMock(), clock=FakeClock(MIDDAY))
        with pytest.raises(RuntimeError, match="not been started"):
            sched.schedule_next()

    def test_unknown_timezone_rejected(self):
        with pytest.raises(ZoneInfoNotFoundError):
            NightlySyncScheduler(MagicMock(), timezone="Mars/Olympus_Mons")

    def test_factory_starts_scheduler(self):
        async def _inner():
            sched = start_nightly_content_sync(
                MagicMock(), sync=AsyncMock(), clock=FakeClock(MIDDAY),
                timezone="America/New_York", hour=2, minute=30,
            )
            assert sched.running
            assert sched.next_run_at == datetime(
                2026, 1, 11, 2, 30, tzinfo=ZoneInfo("America/New_York"),
            )
            sched.stop()

        run_async(_inner())


class TestStatus:
    def test_status_payload(self):
        async def _inner():
            sched = NightlySyncScheduler(
                MagicMock(), sync=AsyncMock(return_value=_result()), clock=FakeClock(MIDDAY),
            )
            sched.start()
            await sched.run_once()
            status = sched.status()
            sched.stop()
            return status

        status = run_async(_inner())
        assert status["running"] is True
        assert status["timezone"] == "Europe/London"
        assert status["target_time"] == "23:00"
        assert status["next_run_at"].startswith("2026-01-10T23:00:00")
        assert status["last_result"]["sparks"] == 180
        assert status["runs"] == 1
        assert status["failures"] == 0
