"""
dominion.engine.library — Fixed Content Library
================================================

Content that is not derived from the campaign calendar: the Psalm 23
blog series, the season's calendar events, and the guided journeys.
These sets are small and hand-written; the sync only has to make sure
they exist and match what is written here.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime

__all__ = [
    "BlogPostRecord",
    "EventRecord",
    "JourneyRecord",
    "blog_post_records",
    "event_records",
    "journey_records",
]

SYSTEM_AUTHOR_ID = "system"
EVENT_ORGANISER_ID = "49038710"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class BlogPostRecord:
    slug: str
    title: str
    excerpt: str
    content: str
    cover_image_url: str | None = None
    author_id: str = SYSTEM_AUTHOR_ID
    category: str = "Faith & Culture"

    def to_row(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class EventRecord:
    title: str
    description: str
    type: str
    location: str
    start_at: datetime
    end_at: datetime | None = None
    image_url: str | None = None
    created_by: str = EVENT_ORGANISER_ID

    def to_row(self) -> dict:
        return asdict(self)


@dataclass(frozen=True, slots=True)
class JourneyRecord:
    slug: str
    title: str
    subtitle: str
    description: str
    category: str
    duration_days: int
    level: str = "beginner"
    hero_image_url: str | None = None
    is_published: bool = True

    def to_row(self) -> dict:
        return asdict(self)


def _utc(text: str) -> datetime:
    return datetime.fromisoformat(text).replace(tzinfo=UTC)


# ---------------------------------------------------------------------------
# Blog posts — a four-part walk through Psalm 23
# ---------------------------------------------------------------------------
def _psalm_post(heading: str, verse: str, reflection: str, prayer: str, action: str) -> str:
    return (
        f"## {heading}\n\n"
        f"**Scripture:** {verse}\n\n"
        f"### Reflection\n\n{reflection}\n\n"
        f"### Prayer\n\n{prayer}\n\n"
        f"### Take Action\n\n{action}"
    )


def blog_post_records() -> list[BlogPostRecord]:
    """The Psalm 23 series, keyed by slug."""
    return [
        BlogPostRecord(
            slug="psalm-23-the-lord-is-my-shepherd",
            title="The Lord is My Shepherd - A Psalm 23 Journey (Part 1)",
            excerpt=(
                "Begin a transformative journey through Psalm 23. Discover the "
                "profound comfort of knowing the Lord as your personal Shepherd."
            ),
            content=_psalm_post(
                "The Lord is My Shepherd",
                "\"The Lord is my shepherd; I shall not want.\" - Psalm 23:1",
                "In ancient Israel a shepherd was everything to the flock: "
                "protection, guidance, provision and constant company. David "
                "wrote these words as someone who had kept sheep himself.\n\n"
                "Notice the word *my*. Not a distant God, but a personal guide "
                "who walks with you through every season. When you trust Him as "
                "your Shepherd, the anxiety of provision begins to fade.",
                "Lord, thank You for being my Shepherd. Teach me to follow Your "
                "voice and to trust that I have what I need in You. Amen.",
                "Write down three ways God has provided for you this year.",
            ),
            cover_image_url="/attached_assets/psalm_23_shepherd.png",
        ),
        BlogPostRecord(
            slug="psalm-23-rest-in-meadow-grass",
            title="Finding Rest in God - A Psalm 23 Journey (Part 2)",
            excerpt=(
                "Experience the peace that comes when you allow God to lead you "
                "to places of rest and restoration."
            ),
            content=_psalm_post(
                "He Makes Me Lie Down in Green Pastures",
                "\"He makes me lie down in green pastures. He leads me beside "
                "still waters. He restores my soul.\" - Psalm 23:2-3",
                "Sheep will not lie down while they are hungry, afraid or "
                "restless. The shepherd has to create the conditions for rest.\n\n"
                "God does the same for us. Rest is not laziness; it is trust "
                "made visible. Restoration happens in the places He leads us to, "
                "not the places we drive ourselves toward.",
                "Father, lead me to Your still waters. Restore what is worn out "
                "in me, and teach me to rest without guilt. Amen.",
                "Plan one unhurried hour this week with no screen and no agenda.",
            ),
            cover_image_url="/attached_assets/psalm_23_meadow.png",
        ),
        BlogPostRecord(
            slug="psalm-23-valley-of-death",
            title="Fearless Through the Valley - A Psalm 23 Journey (Part 3)",
            excerpt=(
                "Learn to walk through life's darkest valleys without fear, "
                "knowing your Shepherd is with you."
            ),
            content=_psalm_post(
                "Through the Valley",
                "\"Even though I walk through the valley of the shadow of death, "
                "I will fear no evil, for you are with me.\" - Psalm 23:4",
                "The psalm never promises there will be no valley. It promises "
                "company in it. The path to the next pasture often runs through "
                "the shadows.\n\n"
                "A shadow needs light to exist. The darkness you walk through is "
                "not the end of the story; the One who walks beside you is.",
                "Lord, when I walk through dark places, remind me that You are "
                "with me. Let Your presence be stronger than my fear. Amen.",
                "Reach out to someone walking through a valley and simply be "
                "present with them.",
            ),
            cover_image_url="/attached_assets/psalm_23_valley.png",
        ),
        BlogPostRecord(
            slug="psalm-23-goodness-kindness",
            title="Goodness and Kindness Forever - A Psalm 23 Journey (Part 4)",
            excerpt=(
                "Discover the promise that God's goodness and unfailing love will "
                "follow you all the days of your life."
            ),
            content=_psalm_post(
                "Goodness and Mercy Shall Follow Me",
                "\"Surely goodness and loving kindness shall follow me all the "
                "days of my life, and I will dwell in the Lord's house forever.\" "
                "- Psalm 23:6",
                "The word translated *follow* carries the sense of pursuit. God's "
                "goodness is not passively waiting for you to find it; it is "
                "running after you.\n\n"
                "And the promise reaches past this life. Every valley, every "
                "green pasture and every shadow leads to an eternal home with "
                "the Shepherd.",
                "Thank You, Lord, for Your goodness that pursues me. Help me "
                "share this hope with others. Amen.",
                "Share this devotional series with someone who needs "
                "encouragement today.",
            ),
            cover_image_url="/attached_assets/psalm_23_goodness.png",
        ),
    ]


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------
def event_records() -> list[EventRecord]:
    """The season's calendar gatherings, keyed by title."""
    return [
        EventRecord(
            title="Fresh Start: Creative & Fun Evening",
            description=(
                "Feeling the winter slump or just ready for a reset? Come through "
                "for a cosy, creative evening with friends old and new."
            ),
            type="community",
            location="Buckingham",
            start_at=_utc("2026-01-31T16:00:00"),
            end_at=_utc("2026-01-31T20:00:00"),
            image_url="/attached_assets/generated_images/group_discussion_in_a_living_room.png",
        ),
        EventRecord(
            title="Campus Spark Night",
            description=(
                "A night of unified prayer and worship for campuses across the "
                "UK, US and beyond. Join us as we lift up student leaders and "
                "pray for revival on university campuses."
            ),
            type="prayer-night",
            location="Online",
            start_at=_utc("2026-02-07T19:00:00"),
            end_at=_utc("2026-02-07T21:00:00"),
        ),
        EventRecord(
            title="Tech Hub Launch",
            description=(
                "Explore how technology can be leveraged for kingdom impact. "
                "Network with Christian tech professionals and learn about "
                "digital missions opportunities."
            ),
            type="tech-hub",
            location="Online",
            start_at=_utc("2026-02-21T18:00:00"),
            end_at=_utc("2026-02-21T20:00:00"),
        ),
        EventRecord(
            title="Mission Training Weekend",
            description=(
                "Join our online training sessions to equip yourself for global "
                "mission. Two evenings of teaching, Q&A and commissioning."
            ),
            type="training",
            location="Online",
            start_at=_utc("2026-03-07T19:00:00"),
            end_at=_utc("2026-03-08T21:00:00"),
        ),
        EventRecord(
            title="Global Outreach Conference",
            description=(
                "Our annual missions conference bringing together young people "
                "passionate about reaching the nations. Hear from field workers, "
                "worship together and get equipped for your calling."
            ),
            type="outreach",
            location="London, UK",
            start_at=_utc("2026-09-01T09:00:00"),
            end_at=_utc("2026-10-31T17:00:00"),
        ),
    ]


# ---------------------------------------------------------------------------
# Journeys
# ---------------------------------------------------------------------------
def journey_records() -> list[JourneyRecord]:
    """Starter reading journeys, seeded once into an empty table."""
    return [
        JourneyRecord(
            slug="foundations-of-faith",
            title="Foundations of Faith",
            subtitle="Build your faith on solid ground",
            description=(
                "A 7-day journey through the core beliefs of Christianity, for new "
                "believers or anyone strengthening their foundations."
            ),
            category="faith-basics",
            duration_days=7,
        ),
        JourneyRecord(
            slug="discovering-your-purpose",
            title="Discovering Your Purpose",
            subtitle="Find clarity for your calling",
            description=(
                "A 14-day journey to understand your gifts, passions and how God "
                "wants to use you, through scripture and practical exercises."
            ),
            category="purpose",
            duration_days=14,
            level="intermediate",
        ),
        JourneyRecord(
            slug="overcoming-anxiety",
            title="Overcoming Anxiety",
            subtitle="Find peace in God's presence",
            description=(
                "A 21-day journey for anyone struggling with worry or stress: "
                "biblical strategies for peace and rest in God's care."
            ),
            category="anxiety",
            duration_days=21,
        ),
        JourneyRecord(
            slug="healthy-relationships",
            title="Building Healthy Relationships",
            subtitle="Love God, love others well",
            description=(
                "A 10-day journey through what the Bible says about friendship, "
                "dating and community."
            ),
            category="relationships",
            duration_days=10,
            level="intermediate",
        ),
        JourneyRecord(
            slug="prayer-life",
            title="Deepening Your Prayer Life",
            subtitle="Grow in intimacy with God",
            description=(
                "A 7-day journey exploring different ways to pray and how to move "
                "past common obstacles."
            ),
            category="faith-basics",
            duration_days=7,
        ),
        JourneyRecord(
            slug="identity-in-christ",
            title="Your Identity in Christ",
            subtitle="Know who you truly are",
            description=(
                "A 14-day journey through what scripture says about who you are "
                "in Christ."
            ),
            category="purpose",
            duration_days=14,
            level="intermediate",
        ),
    ]
