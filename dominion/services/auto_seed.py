"""
dominion.services.auto_seed — Startup Content Backfill
=======================================================

Runs once per boot, in the background, so a fresh or stale database
catches up with the campaign without delaying the port bind.

Steps:
    1. Generate campaign sparks + reflection cards, plus the fixed blog
       posts and events.
    2. Upsert each set in batches (see :func:`upsert_in_batches`).
    3. Seed starter journeys if the table is still empty.
    4. Validation read: count sparks inside the campaign window and log
       it against the expected total.  Observational only.

Any failure is logged and swallowed: "content sync failed this boot"
must never become "server failed to start".  The nightly sync is the
retry.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from sqlalchemy import Engine

from dominion.database.engine import run_db
from dominion.engine.campaign import (
    AUDIENCE_SEGMENTS,
    CAMPAIGN_DAYS,
    CAMPAIGN_START,
    campaign_end,
)
from dominion.engine.generator import build_campaign_content
from dominion.engine.library import blog_post_records, event_records, journey_records
from dominion.services.content_sync import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_BATCH_TIMEOUT,
    upsert_in_batches,
)
from dominion.services.storage import (
    count_sparks_between,
    seed_journeys,
    upsert_blog_posts,
    upsert_events,
    upsert_reflection_cards,
    upsert_sparks,
)

logger = logging.getLogger(__name__)

EXPECTED_CAMPAIGN_SPARKS = CAMPAIGN_DAYS * len(AUDIENCE_SEGMENTS)


@dataclass
class SeedReport:
    """Counters from one auto-seed run."""

    sparks: int = 0
    reflections: int = 0
    blog_posts: int = 0
    events: int = 0
    journeys: int = 0
    campaign_sparks_found: int = 0
    campaign_sparks_expected: int = EXPECTED_CAMPAIGN_SPARKS

    @property
    def ok(self) -> bool:
        return self.campaign_sparks_found == self.campaign_sparks_expected


async def auto_seed_dominion_content(
    engine: Engine,
    *,
    batch_size: int = DEFAULT_BATCH_SIZE,
    batch_timeout: float = DEFAULT_BATCH_TIMEOUT,
) -> SeedReport | None:
    """Backfill all seed content.  Never raises; returns ``None`` on failure."""
    started = time.monotonic()
    report = SeedReport()
    batching = {"batch_size": batch_size, "batch_timeout": batch_timeout}

    try:
        logger.info("Starting background content sync…")

        content = build_campaign_content()
        report.sparks = await upsert_in_batches(
            engine, upsert_sparks, content.sparks, label="sparks", **batching,
        )
        logger.info("Synced %d sparks", report.sparks)

        report.reflections = await upsert_in_batches(
            engine, upsert_reflection_cards, content.reflection_cards,
            label="reflection cards", **batching,
        )
        logger.info("Synced %d reflection cards", report.reflections)

        report.blog_posts = await upsert_in_batches(
            engine, upsert_blog_posts, blog_post_records(),
            label="blog posts", **batching,
        )
        logger.info("Synced %d blog posts", report.blog_posts)

        report.events = await upsert_in_batches(
            engine, upsert_events, event_records(), label="events", **batching,
        )
        logger.info("Synced %d events", report.events)

        report.journeys = await run_db(seed_journeys, engine, journey_records())

        # --- Validation -----------------------------------------------------
        first, last = CAMPAIGN_START, campaign_end()
        report.campaign_sparks_found = await run_db(
            count_sparks_between, engine, first, last,
        )
    except Exception:
        logger.exception("Error during startup content sync — continuing without it")
        return None

    elapsed = time.monotonic() - started
    if report.ok:
        logger.info(
            "Auto-seed complete in %.1fs: %d/%d campaign sparks in database "
            "(%s → %s)",
            elapsed, report.campaign_sparks_found, report.campaign_sparks_expected,
            first, last,
        )
    else:
        logger.warning(
            "Auto-seed complete in %.1fs but found %d campaign sparks, expected %d "
            "(%s → %s)",
            elapsed, report.campaign_sparks_found, report.campaign_sparks_expected,
            first, last,
        )
    return report


# ---------------------------------------------------------------------------
# Background spawn with an error boundary
# ---------------------------------------------------------------------------
def _log_task_outcome(task: asyncio.Task) -> None:
    if task.cancelled():
        logger.warning("Auto-seed task cancelled before completion")
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Auto-seed task crashed", exc_info=exc)


def spawn_auto_seed(
    engine: Engine,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
    **kwargs,
) -> asyncio.Task:
    """Start :func:`auto_seed_dominion_content` as a supervised background task.

    The caller keeps the handle (to cancel on shutdown) but never awaits it
    during startup.
    """
    loop = loop or asyncio.get_running_loop()
    task = loop.create_task(
        auto_seed_dominion_content(engine, **kwargs), name="auto-seed",
    )
    task.add_done_callback(_log_task_outcome)
    return task
