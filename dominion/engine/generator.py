"""
dominion.engine.generator — Campaign Content Generator
========================================================

Pure derivation of the campaign's sparks and reflection cards from the
catalogue in :mod:`dominion.engine.campaign`.  No DB I/O, no clock reads:
the output depends only on the catalogue, the start date and the segment
list, so every call returns the same records.

Pipeline per day offset ``d`` (0-based)::

    DayTheme → daily_date / publish_at / status → × segments → SparkRecord
                                                           → ReflectionCardRecord
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta

from dominion.database.models import (
    ContentStatus,
    SparkCategory,
    reflection_natural_key,
    spark_natural_key,
)
from dominion.engine.campaign import (
    AUDIENCE_SEGMENTS,
    CAMPAIGN_START,
    DAY_THEMES,
    GENERIC_PRAYER_LINE,
    GENERIC_TEACHING,
    DayTheme,
    validate_catalogue,
)

__all__ = [
    "CampaignContent",
    "ReflectionCardRecord",
    "SparkRecord",
    "build_campaign_content",
    "first_sentence",
    "publish_instant",
    "spark_category",
]

PUBLISH_HOUR_UTC = 5
SPARK_MEDIA_TYPE = "video"
SPARK_DURATION_SECONDS = 120
SPARK_CTA = "Pray"
THUMBNAIL_TEXT_MAX = 20


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class SparkRecord:
    """One spark ready to hand to the storage layer."""

    title: str
    description: str
    category: SparkCategory
    scripture_ref: str
    full_passage: str | None
    status: ContentStatus
    publish_at: datetime
    daily_date: date
    featured: bool
    prayer_line: str
    thumbnail_text: str
    week_theme: str
    audience_segment: str | None
    full_teaching: str
    context_background: str
    application_points: tuple[str, ...]
    today_action: str
    reflection_question: str
    media_type: str = SPARK_MEDIA_TYPE
    duration: int = SPARK_DURATION_SECONDS
    cta_primary: str = SPARK_CTA

    @property
    def natural_key(self) -> str:
        return spark_natural_key(self.title, self.daily_date, self.audience_segment)

    def to_row(self) -> dict:
        """Column values for the ``sparks`` table."""
        return {
            "natural_key": self.natural_key,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "media_type": self.media_type,
            "duration": self.duration,
            "scripture_ref": self.scripture_ref,
            "full_passage": self.full_passage,
            "status": self.status.value,
            "publish_at": self.publish_at,
            "daily_date": self.daily_date,
            "featured": self.featured,
            "prayer_line": self.prayer_line,
            "cta_primary": self.cta_primary,
            "thumbnail_text": self.thumbnail_text,
            "week_theme": self.week_theme,
            "audience_segment": self.audience_segment,
            "full_teaching": self.full_teaching,
            "context_background": self.context_background,
            "application_points": list(self.application_points),
            "today_action": self.today_action,
            "reflection_question": self.reflection_question,
        }


@dataclass(frozen=True, slots=True)
class ReflectionCardRecord:
    """One reflection card ready to hand to the storage layer."""

    base_quote: str
    question: str
    action: str
    faith_overlay_scripture: str
    publish_at: datetime
    daily_date: date
    status: ContentStatus
    week_theme: str
    audience_segment: str | None

    @property
    def natural_key(self) -> str:
        return reflection_natural_key(self.daily_date, self.audience_segment)

    def to_row(self) -> dict:
        """Column values for the ``reflection_cards`` table."""
        return {
            "natural_key": self.natural_key,
            "base_quote": self.base_quote,
            "question": self.question,
            "action": self.action,
            "faith_overlay_scripture": self.faith_overlay_scripture,
            "publish_at": self.publish_at,
            "daily_date": self.daily_date,
            "status": self.status.value,
            "week_theme": self.week_theme,
            "audience_segment": self.audience_segment,
        }


@dataclass
class CampaignContent:
    """Everything the generator produced for one call."""

    sparks: list[SparkRecord] = field(default_factory=list)
    reflection_cards: list[ReflectionCardRecord] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Small derivations
# ---------------------------------------------------------------------------
def spark_category(title: str) -> SparkCategory:
    """Testimony days are tagged by their title."""
    if "Testimony" in title:
        return SparkCategory.TESTIMONY
    return SparkCategory.DAILY_DEVOTIONAL


def publish_instant(day: date) -> datetime:
    """Publish time for *day*: a fixed UTC hour, the same for every segment."""
    return datetime.combine(day, time(hour=PUBLISH_HOUR_UTC), tzinfo=UTC)


def first_sentence(text: str) -> str:
    """Text up to the first full stop, always ending in ``.``."""
    head = text.split(".", 1)[0].strip()
    return f"{head}."


def _thumbnail_text(title: str) -> str:
    return title.split(":", 1)[0][:THUMBNAIL_TEXT_MAX]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def build_campaign_content(
    themes: Sequence[DayTheme] = DAY_THEMES,
    *,
    start: date = CAMPAIGN_START,
    segments: Sequence[str | None] = AUDIENCE_SEGMENTS,
) -> CampaignContent:
    """Derive every spark and reflection card of the campaign.

    One spark and one card per (day offset × audience segment), returned
    as two flat lists in day order.  Day 0 is ``published``; every later
    day is ``scheduled`` and goes live at its ``publish_at``.

    Raises
    ------
    ValueError
        If the catalogue is malformed (see :func:`validate_catalogue`).
    """
    validate_catalogue(themes, segments)

    content = CampaignContent()
    for offset, theme in enumerate(themes):
        daily_date = start + timedelta(days=offset)
        publish_at = publish_instant(daily_date)
        status = ContentStatus.PUBLISHED if offset == 0 else ContentStatus.SCHEDULED

        description = theme.description or theme.title
        prayer = theme.prayer_line or GENERIC_PRAYER_LINE
        teaching = theme.teaching or GENERIC_TEACHING
        category = spark_category(theme.title)

        for segment in segments:
            content.sparks.append(SparkRecord(
                title=theme.title,
                description=description,
                category=category,
                scripture_ref=theme.scripture_ref,
                full_passage=theme.passage,
                status=status,
                publish_at=publish_at,
                daily_date=daily_date,
                featured=theme.featured,
                prayer_line=prayer,
                thumbnail_text=_thumbnail_text(theme.title),
                week_theme=theme.week,
                audience_segment=segment,
                full_teaching=teaching.full_teaching,
                context_background=teaching.context_background,
                application_points=teaching.application_points,
                today_action=teaching.today_action,
                reflection_question=teaching.reflection_question,
            ))

        for segment in segments:
            content.reflection_cards.append(ReflectionCardRecord(
                base_quote=first_sentence(description),
                question=teaching.reflection_question,
                action=first_sentence(teaching.today_action),
                faith_overlay_scripture=theme.scripture_ref,
                publish_at=publish_at,
                daily_date=daily_date,
                status=status,
                week_theme=theme.week,
                audience_segment=segment,
            ))

    return content
