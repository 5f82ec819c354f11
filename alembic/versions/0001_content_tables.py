"""Create content tables: sparks, reflection_cards, blog_posts, events, journeys

Revision ID: 0001_content_tables
Revises:
Create Date: 2026-01-02 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "0001_content_tables"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(*, updated: bool = False) -> list[sa.Column]:
    cols = [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(),
        ),
    ]
    if updated:
        cols.append(
            sa.Column(
                "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(),
            )
        )
    return cols


def upgrade() -> None:
    op.create_table(
        "sparks",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("natural_key", sa.String(400), nullable=False, unique=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(40), nullable=False),
        sa.Column("media_type", sa.String(20), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("scripture_ref", sa.String(100), nullable=True),
        sa.Column("full_passage", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("publish_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("daily_date", sa.Date(), nullable=True),
        sa.Column("featured", sa.Boolean(), nullable=True),
        sa.Column("prayer_line", sa.Text(), nullable=True),
        sa.Column("cta_primary", sa.String(40), nullable=True),
        sa.Column("thumbnail_text", sa.String(40), nullable=True),
        sa.Column("week_theme", sa.String(100), nullable=True),
        sa.Column("audience_segment", sa.String(40), nullable=True),
        sa.Column("full_teaching", sa.Text(), nullable=True),
        sa.Column("context_background", sa.Text(), nullable=True),
        sa.Column(
            "application_points",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=True,
        ),
        sa.Column("today_action", sa.Text(), nullable=True),
        sa.Column("reflection_question", sa.Text(), nullable=True),
        *_timestamps(updated=True),
    )
    op.create_index(
        "ix_sparks_daily_date_segment", "sparks", ["daily_date", "audience_segment"],
    )
    op.create_index("ix_sparks_status_publish_at", "sparks", ["status", "publish_at"])

    op.create_table(
        "reflection_cards",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("natural_key", sa.String(100), nullable=False, unique=True),
        sa.Column("base_quote", sa.Text(), nullable=False),
        sa.Column("question", sa.Text(), nullable=False),
        sa.Column("action", sa.Text(), nullable=False),
        sa.Column("faith_overlay_scripture", sa.String(100), nullable=True),
        sa.Column("publish_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("daily_date", sa.Date(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("week_theme", sa.String(100), nullable=True),
        sa.Column("audience_segment", sa.String(40), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_reflection_cards_daily_date_segment",
        "reflection_cards",
        ["daily_date", "audience_segment"],
    )

    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("slug", sa.String(200), nullable=False, unique=True),
        sa.Column("title", sa.String(300), nullable=False),
        sa.Column("excerpt", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("cover_image_url", sa.String(500), nullable=True),
        sa.Column("author_id", sa.String(100), nullable=False),
        sa.Column("category", sa.String(100), nullable=False),
        sa.Column(
            "published_at", sa.DateTime(timezone=True), server_default=sa.func.now(),
        ),
        *_timestamps(),
    )

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("title", sa.String(200), nullable=False, unique=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("type", sa.String(40), nullable=False),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("start_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("registration_url", sa.String(500), nullable=True),
        sa.Column("created_by", sa.String(100), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_events_start_at", "events", ["start_at"])

    op.create_table(
        "journeys",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("slug", sa.String(200), nullable=False, unique=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("subtitle", sa.String(300), nullable=True),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(60), nullable=False),
        sa.Column("duration_days", sa.Integer(), nullable=False),
        sa.Column("level", sa.String(30), nullable=False),
        sa.Column("hero_image_url", sa.String(500), nullable=True),
        sa.Column("is_published", sa.Boolean(), nullable=True),
        *_timestamps(),
    )


def downgrade() -> None:
    op.drop_table("journeys")
    op.drop_index("ix_events_start_at", table_name="events")
    op.drop_table("events")
    op.drop_table("blog_posts")
    op.drop_index("ix_reflection_cards_daily_date_segment", table_name="reflection_cards")
    op.drop_table("reflection_cards")
    op.drop_index("ix_sparks_status_publish_at", table_name="sparks")
    op.drop_index("ix_sparks_daily_date_segment", table_name="sparks")
    op.drop_table("sparks")
