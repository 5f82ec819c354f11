"""
dominion.database.models — SQLAlchemy 2.0 Content Models
=========================================================

Only the tables the content sync pipeline writes to.  Users, posts,
coaching, trips and the rest of the platform schema live elsewhere.

Tables:
- sparks            — Daily devotional media, one row per (title, day, segment)
- reflection_cards  — Companion reflection per (day, segment)
- blog_posts        — Long-form articles keyed by slug
- events            — Calendar gatherings keyed by title
- journeys          — Guided multi-day reading plans keyed by slug

Every upserted table carries a unique natural key so the sync can use a
single ``INSERT … ON CONFLICT DO UPDATE``.  For sparks and reflection
cards the key is materialized into ``natural_key`` because a ``NULL``
audience segment (the global audience) would otherwise never collide in
a unique index.
"""

from __future__ import annotations

import enum
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Index,
    Integer,
    JSON,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------
class Base(DeclarativeBase):
    """Shared base for all Dominion ORM models."""


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class ContentStatus(enum.StrEnum):
    """Publication lifecycle of dated content."""
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class SparkCategory(enum.StrEnum):
    DAILY_DEVOTIONAL = "daily-devotional"
    TESTIMONY = "testimony"
    WORSHIP = "worship"


GLOBAL_SEGMENT_KEY = "global"


def spark_natural_key(title: str, daily_date: date, audience_segment: str | None) -> str:
    """Key sparks by (title, daily date, audience segment)."""
    return f"{daily_date.isoformat()}|{audience_segment or GLOBAL_SEGMENT_KEY}|{title}"


def reflection_natural_key(daily_date: date, audience_segment: str | None) -> str:
    """Key reflection cards by (daily date, audience segment)."""
    return f"{daily_date.isoformat()}|{audience_segment or GLOBAL_SEGMENT_KEY}"


# ---------------------------------------------------------------------------
# Sparks — one devotional per day per audience segment
# ---------------------------------------------------------------------------
class Spark(Base):
    __tablename__ = "sparks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    natural_key: Mapped[str] = mapped_column(String(400), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(40), nullable=False)
    media_type: Mapped[str] = mapped_column(String(20), nullable=False, default="video")
    duration: Mapped[int | None] = mapped_column(Integer, default=None)  # seconds
    scripture_ref: Mapped[str | None] = mapped_column(String(100), default=None)
    full_passage: Mapped[str | None] = mapped_column(Text, default=None)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ContentStatus.DRAFT.value
    )
    publish_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    daily_date: Mapped[date | None] = mapped_column(Date)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    prayer_line: Mapped[str | None] = mapped_column(Text, default=None)
    cta_primary: Mapped[str | None] = mapped_column(String(40), default=None)
    thumbnail_text: Mapped[str | None] = mapped_column(String(40), default=None)
    week_theme: Mapped[str | None] = mapped_column(String(100), default=None)
    audience_segment: Mapped[str | None] = mapped_column(String(40), default=None)
    full_teaching: Mapped[str | None] = mapped_column(Text, default=None)
    context_background: Mapped[str | None] = mapped_column(Text, default=None)
    application_points: Mapped[list | None] = mapped_column(
        JSON().with_variant(JSONB(), "postgresql"), nullable=True
    )
    today_action: Mapped[str | None] = mapped_column(Text, default=None)
    reflection_question: Mapped[str | None] = mapped_column(Text, default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("ix_sparks_daily_date_segment", "daily_date", "audience_segment"),
        Index("ix_sparks_status_publish_at", "status", "publish_at"),
    )

    def __repr__(self) -> str:
        return (
            f"<Spark id={self.id} date={self.daily_date} "
            f"segment={self.audience_segment!r} title={self.title!r}>"
        )


# ---------------------------------------------------------------------------
# ReflectionCards — short companion to each day/segment
# ---------------------------------------------------------------------------
class ReflectionCard(Base):
    __tablename__ = "reflection_cards"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    natural_key: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    base_quote: Mapped[str] = mapped_column(Text, nullable=False)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    action: Mapped[str] = mapped_column(Text, nullable=False)
    faith_overlay_scripture: Mapped[str | None] = mapped_column(String(100), default=None)
    publish_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    daily_date: Mapped[date | None] = mapped_column(Date)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=ContentStatus.DRAFT.value
    )
    week_theme: Mapped[str | None] = mapped_column(String(100), default=None)
    audience_segment: Mapped[str | None] = mapped_column(String(40), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_reflection_cards_daily_date_segment", "daily_date", "audience_segment"),
    )

    def __repr__(self) -> str:
        return (
            f"<ReflectionCard id={self.id} date={self.daily_date} "
            f"segment={self.audience_segment!r}>"
        )


# ---------------------------------------------------------------------------
# BlogPosts — long-form articles
# ---------------------------------------------------------------------------
class BlogPost(Base):
    __tablename__ = "blog_posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    excerpt: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    cover_image_url: Mapped[str | None] = mapped_column(String(500), default=None)
    author_id: Mapped[str] = mapped_column(String(100), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    published_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<BlogPost id={self.id} slug={self.slug!r}>"


# ---------------------------------------------------------------------------
# Events — calendar gatherings
# ---------------------------------------------------------------------------
class Event(Base):
    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(String(40), nullable=False)  # outreach, prayer-night, tech-hub, ...
    location: Mapped[str | None] = mapped_column(String(200), default=None)
    start_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    image_url: Mapped[str | None] = mapped_column(String(500), default=None)
    registration_url: Mapped[str | None] = mapped_column(String(500), default=None)
    created_by: Mapped[str | None] = mapped_column(String(100), default=None)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_events_start_at", "start_at"),
    )

    def __repr__(self) -> str:
        return f"<Event id={self.id} title={self.title!r} start={self.start_at}>"


# ---------------------------------------------------------------------------
# Journeys — guided multi-day reading plans
# ---------------------------------------------------------------------------
class Journey(Base):
    __tablename__ = "journeys"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(300), default=None)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(60), nullable=False)
    duration_days: Mapped[int] = mapped_column(Integer, nullable=False)
    level: Mapped[str] = mapped_column(String(30), nullable=False, default="beginner")
    hero_image_url: Mapped[str | None] = mapped_column(String(500), default=None)
    is_published: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    def __repr__(self) -> str:
        return f"<Journey id={self.id} slug={self.slug!r} days={self.duration_days}>"
