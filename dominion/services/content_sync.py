"""
dominion.services.content_sync — Campaign Content Sync Executor
================================================================

The unit of work behind both the nightly timer and the admin
"force sync now" action: regenerate the campaign content **at call
time** and upsert every spark and reflection card.

Records are written in batches.  Each batch is one transaction shipped
to a worker thread via :func:`run_db` and bounded by ``batch_timeout``
seconds, so a hung database stalls one night's cycle for a bounded time
instead of forever.  A timeout raises :class:`ContentSyncTimeout`; the
next scheduled cycle is the retry.

Errors propagate to the caller.  Deciding whether a failure is fatal is
the caller's job (the scheduler logs and re-arms; the admin route
returns 502).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy import Engine

from dominion.database.engine import run_db
from dominion.engine.generator import build_campaign_content
from dominion.services.storage import upsert_reflection_cards, upsert_sparks

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 20
DEFAULT_BATCH_TIMEOUT = 30.0


class ContentSyncTimeout(TimeoutError):
    """An upsert batch did not finish within its time budget."""


@dataclass
class SyncResult:
    """Counts and timing for one sync run."""

    sparks: int = 0
    reflections: int = 0
    started_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    finished_at: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def to_dict(self) -> dict[str, Any]:
        return {
            "sparks": self.sparks,
            "reflections": self.reflections,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "duration_seconds": round(self.duration_seconds, 3),
        }


# ---------------------------------------------------------------------------
# Batch driver
# ---------------------------------------------------------------------------
async def upsert_in_batches(
    engine: Engine,
    func: Callable[[Engine, Sequence[Any]], int],
    records: Sequence[Any],
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    batch_timeout: float = DEFAULT_BATCH_TIMEOUT,
    label: str = "records",
) -> int:
    """Feed *records* to the sync upsert *func* in bounded batches.

    Returns the number of records upserted.

    Raises
    ------
    ContentSyncTimeout
        If a batch exceeds *batch_timeout* seconds.  Batches already
        committed stay committed; every record is independently
        idempotent, so a later run converges.
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    written = 0
    for offset in range(0, len(records), batch_size):
        batch = records[offset:offset + batch_size]
        try:
            written += await asyncio.wait_for(
                run_db(func, engine, batch), timeout=batch_timeout,
            )
        except TimeoutError as exc:
            raise ContentSyncTimeout(
                f"Upserting {label} {offset}-{offset + len(batch) - 1} "
                f"exceeded {batch_timeout:g}s"
            ) from exc
    return written


# ---------------------------------------------------------------------------
# Executor
# ---------------------------------------------------------------------------
async def run_content_sync(
    engine: Engine,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    batch_timeout: float = DEFAULT_BATCH_TIMEOUT,
) -> SyncResult:
    """Regenerate campaign content and upsert every spark and reflection card.

    Content is rebuilt on every call, never reused from process start.
    """
    logger.info("Running automated content sync…")
    result = SyncResult()

    try:
        content = build_campaign_content()

        result.sparks = await upsert_in_batches(
            engine, upsert_sparks, content.sparks,
            batch_size=batch_size, batch_timeout=batch_timeout, label="sparks",
        )
        result.reflections = await upsert_in_batches(
            engine, upsert_reflection_cards, content.reflection_cards,
            batch_size=batch_size, batch_timeout=batch_timeout,
            label="reflection cards",
        )
    except Exception as exc:
        logger.error(
            "Content sync failed after %d sparks, %d reflection cards: %s",
            result.sparks, result.reflections, exc,
        )
        raise

    result.finished_at = datetime.now(UTC)
    logger.info(
        "Content sync complete: %d sparks, %d reflection cards synced in %.1fs",
        result.sparks, result.reflections, result.duration_seconds,
    )
    return result
