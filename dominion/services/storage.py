"""
dominion.services.storage — Content Upserts & Reads
====================================================

The storage contract the sync pipeline depends on.  Every ``upsert_*``
call is **one** ``INSERT … ON CONFLICT (natural key) DO UPDATE``
statement per record, never a read followed by a write, so two syncs
racing on the same boot (startup backfill + first nightly run) resolve
as last-write-wins instead of duplicating rows.

All functions are synchronous and open their own session; async callers
go through :func:`dominion.database.engine.run_db`.

Natural keys:
    sparks            natural_key  (daily_date | segment | title)
    reflection_cards  natural_key  (daily_date | segment)
    blog_posts        slug
    events            title
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from sqlalchemy import Engine, func, select
from sqlalchemy.orm import Session

from dominion.database.engine import get_session
from dominion.database.models import (
    BlogPost,
    Event,
    Journey,
    ReflectionCard,
    Spark,
)
from dominion.engine.generator import ReflectionCardRecord, SparkRecord
from dominion.engine.library import BlogPostRecord, EventRecord, JourneyRecord

logger = logging.getLogger(__name__)

# Columns that are never overwritten on conflict
_PRESERVED_ON_UPDATE = frozenset({"id", "created_at"})


# ---------------------------------------------------------------------------
# Dialect-aware single-statement upsert
# ---------------------------------------------------------------------------
def _insert_for(session: Session):
    dialect = session.get_bind().dialect.name
    if dialect == "postgresql":
        from sqlalchemy.dialects.postgresql import insert
    elif dialect == "sqlite":
        from sqlalchemy.dialects.sqlite import insert
    else:
        raise RuntimeError(
            f"Upsert is not supported on the {dialect!r} dialect "
            "(expected postgresql or sqlite)."
        )
    return insert


def _upsert_row(session: Session, model: type, row: dict[str, Any], key: str) -> None:
    insert = _insert_for(session)
    stmt = insert(model).values(**row)
    updates = {
        col: stmt.excluded[col]
        for col in row
        if col != key and col not in _PRESERVED_ON_UPDATE
    }
    if "updated_at" in model.__table__.c:
        updates["updated_at"] = func.now()
    stmt = stmt.on_conflict_do_update(index_elements=[key], set_=updates)
    session.execute(stmt)


def _upsert_many(engine: Engine, model: type, rows: Iterable[dict], key: str) -> int:
    count = 0
    with get_session(engine) as session:
        for row in rows:
            _upsert_row(session, model, row, key)
            count += 1
    return count


# ---------------------------------------------------------------------------
# Upserts
# ---------------------------------------------------------------------------
def upsert_sparks(engine: Engine, records: Iterable[SparkRecord]) -> int:
    """Create-or-update sparks by (title, daily date, segment).  Returns count."""
    return _upsert_many(engine, Spark, (r.to_row() for r in records), "natural_key")


def upsert_spark(engine: Engine, record: SparkRecord) -> None:
    upsert_sparks(engine, [record])


def upsert_reflection_cards(engine: Engine, records: Iterable[ReflectionCardRecord]) -> int:
    """Create-or-update reflection cards by (daily date, segment).  Returns count."""
    return _upsert_many(
        engine, ReflectionCard, (r.to_row() for r in records), "natural_key"
    )


def upsert_reflection_card(engine: Engine, record: ReflectionCardRecord) -> None:
    upsert_reflection_cards(engine, [record])


def upsert_blog_posts(engine: Engine, records: Iterable[BlogPostRecord]) -> int:
    """Create-or-update blog posts by slug.  Returns count."""
    return _upsert_many(engine, BlogPost, (r.to_row() for r in records), "slug")


def upsert_blog_post(engine: Engine, record: BlogPostRecord) -> None:
    upsert_blog_posts(engine, [record])


def upsert_events(engine: Engine, records: Iterable[EventRecord]) -> int:
    """Create-or-update events by title.  Returns count."""
    return _upsert_many(engine, Event, (r.to_row() for r in records), "title")


def upsert_event(engine: Engine, record: EventRecord) -> None:
    upsert_events(engine, [record])


# ---------------------------------------------------------------------------
# Reads
# ---------------------------------------------------------------------------
def get_sparks(engine: Engine, *, category: str | None = None) -> list[Spark]:
    """Return all persisted sparks (optionally one category), detached."""
    with get_session(engine) as session:
        stmt = select(Spark).order_by(Spark.daily_date, Spark.id)
        if category is not None:
            stmt = stmt.where(Spark.category == category)
        sparks = list(session.scalars(stmt).all())
        session.expunge_all()
        return sparks


def count_sparks_between(engine: Engine, first: date, last: date) -> int:
    """Count sparks whose daily date lies in the closed interval [first, last]."""
    with get_session(engine) as session:
        return session.scalar(
            select(func.count())
            .select_from(Spark)
            .where(Spark.daily_date >= first, Spark.daily_date <= last)
        ) or 0


def count_rows(engine: Engine, model: type) -> int:
    with get_session(engine) as session:
        return session.scalar(select(func.count()).select_from(model)) or 0


def get_events(engine: Engine) -> list[Event]:
    with get_session(engine) as session:
        events = list(session.scalars(select(Event).order_by(Event.start_at)).all())
        session.expunge_all()
        return events


def get_journeys(engine: Engine) -> list[Journey]:
    with get_session(engine) as session:
        journeys = list(session.scalars(select(Journey).order_by(Journey.id)).all())
        session.expunge_all()
        return journeys


# ---------------------------------------------------------------------------
# Journeys — insert-if-empty, never overwritten
# ---------------------------------------------------------------------------
def seed_journeys(engine: Engine, records: Iterable[JourneyRecord]) -> int:
    """Insert *records* only if the journeys table is empty.

    Journeys are curated by admins after the first seed, so existing rows
    are never touched.  Returns the number of journeys created.
    """
    with get_session(engine) as session:
        existing = session.scalar(select(Journey.id).limit(1))
        if existing is not None:
            logger.info("Journeys already seeded — skipping.")
            return 0

        created = 0
        for record in records:
            session.add(Journey(**record.to_row()))
            created += 1

    logger.info("Seeded %d journeys.", created)
    return created
