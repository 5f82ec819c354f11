"""
dominion.services.scheduler — Nightly Content Sync Timer
=========================================================

Fires the content sync once a day at a fixed wall-clock time in a named
zone (23:00 Europe/London by default), then re-arms itself for the next
day.

A self-rescheduling single-shot timer is used instead of a fixed 24 h
interval: the next fire point is recomputed from the current wall clock
after every run, so DST transitions and clock skew never shift it.  A
re-armed timer never targets the slot that just fired, so a wall clock
that lags the loop's monotonic clock cannot run one night twice.

The scheduler owns exactly one pending timer (an ``asyncio.Task`` that
sleeps until the target).  ``start()`` may be called again safely: the
previous timer is cancelled before a new one is armed.  ``stop()``
cancels the pending timer for clean shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
from typing import Any
from zoneinfo import ZoneInfo

from sqlalchemy import Engine

from dominion.engine.schedule import delay_until, format_delay, next_run_after
from dominion.services.content_sync import SyncResult, run_content_sync

logger = logging.getLogger(__name__)

SyncCallable = Callable[..., Awaitable[SyncResult]]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class NightlySyncScheduler:
    """Owned handle for the nightly sync timer.

    Parameters
    ----------
    engine:
        Engine handed to the sync callable.
    timezone:
        IANA zone the target time is expressed in.
    hour, minute:
        Local target time.
    sync:
        Coroutine function called as ``await sync(engine, **sync_kwargs)``.
    clock:
        Returns the current aware datetime; injectable for tests.
    """

    def __init__(
        self,
        engine: Engine,
        *,
        timezone: str = "Europe/London",
        hour: int = 23,
        minute: int = 0,
        sync: SyncCallable = run_content_sync,
        sync_kwargs: dict[str, Any] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.engine = engine
        self.zone = ZoneInfo(timezone)
        self.hour = hour
        self.minute = minute
        self._sync = sync
        self._sync_kwargs = sync_kwargs or {}
        self._clock = clock
        self._loop: asyncio.AbstractEventLoop | None = None
        self._timer: asyncio.Task | None = None

        self.next_run_at: datetime | None = None
        self.last_run_at: datetime | None = None
        self.last_result: SyncResult | None = None
        self.last_error: str | None = None
        self.runs = 0
        self.failures = 0

    # -------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------
    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def start(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        """Arm the first timer.  Must be called from (or given) a running loop."""
        self._loop = loop or asyncio.get_running_loop()
        logger.info("Starting nightly content sync scheduler…")
        self.schedule_next()
        logger.info("Nightly sync scheduler initialized")

    def stop(self) -> None:
        """Cancel the pending timer, if any."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
            logger.info("Nightly sync scheduler stopped")
        self.next_run_at = None

    # -------------------------------------------------------------------
    # Scheduling
    # -------------------------------------------------------------------
    def schedule_next(self, after: datetime | None = None) -> datetime:
        """Compute the next target, cancel any armed timer, arm a new one.

        *after* is the slot that just fired.  The new target is strictly
        later than it even if the wall clock still reads before it.
        """
        if self._loop is None:
            raise RuntimeError("Scheduler has not been started")

        now = self._clock()
        reference = now if after is None else max(now, after)
        target = next_run_after(reference, self.zone, hour=self.hour, minute=self.minute)
        delay = delay_until(now, target)
        logger.info(
            "Next sync scheduled for %02d:%02d %s (in %s)",
            self.hour, self.minute, self.zone.key, format_delay(delay),
        )

        # The firing timer re-arms from inside itself; don't cancel that one.
        previous = self._timer
        if previous is not None and not previous.done() and previous is not _current_task():
            previous.cancel()

        self.next_run_at = target
        self._timer = self._loop.create_task(
            self._fire_after(delay.total_seconds(), target), name="nightly-content-sync",
        )
        return target

    async def _fire_after(self, seconds: float, target: datetime) -> None:
        # asyncio.sleep runs on the monotonic clock; the wall clock may lag.
        await asyncio.sleep(seconds)
        await self.run_once()
        self.schedule_next(after=target)

    async def run_once(self) -> SyncResult | None:
        """Run the sync, recording the outcome.  Failures are logged, not raised.

        A failed night is not retried; the following slot is the retry.
        """
        self.last_run_at = self._clock()
        try:
            result = await self._sync(self.engine, **self._sync_kwargs)
        except Exception as exc:
            self.failures += 1
            self.last_error = f"{type(exc).__name__}: {exc}"
            logger.exception("Nightly content sync failed; will retry at the next slot")
            return None

        self.runs += 1
        self.last_result = result
        self.last_error = None
        return result

    # -------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------
    def status(self) -> dict[str, Any]:
        return {
            "running": self.running,
            "timezone": self.zone.key,
            "target_time": f"{self.hour:02d}:{self.minute:02d}",
            "next_run_at": self.next_run_at.isoformat() if self.next_run_at else None,
            "last_run_at": self.last_run_at.isoformat() if self.last_run_at else None,
            "last_result": self.last_result.to_dict() if self.last_result else None,
            "last_error": self.last_error,
            "runs": self.runs,
            "failures": self.failures,
        }


def _current_task() -> asyncio.Task | None:
    try:
        return asyncio.current_task()
    except RuntimeError:
        return None


def start_nightly_content_sync(engine: Engine, **kwargs: Any) -> NightlySyncScheduler:
    """Build a :class:`NightlySyncScheduler` and start it on the running loop."""
    scheduler = NightlySyncScheduler(engine, **kwargs)
    scheduler.start()
    return scheduler
