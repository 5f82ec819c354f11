"""
dominion.engine.campaign — 30-Day Campaign Catalogue
=====================================================

The fixed calendar the devotional generator walks: one :class:`DayTheme`
per day offset from :data:`CAMPAIGN_START`, and the audience segments
every day is expanded across.

Each theme carries its own copy (description, prayer line, teaching).
Copy that is missing is filled from the generic fallbacks at generation
time, so an incomplete entry degrades to plain-but-valid content rather
than blocking the sync.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

__all__ = [
    "AUDIENCE_SEGMENTS",
    "CAMPAIGN_DAYS",
    "CAMPAIGN_START",
    "DAY_THEMES",
    "DayTheme",
    "GENERIC_PRAYER_LINE",
    "GENERIC_TEACHING",
    "TeachingBundle",
    "campaign_end",
    "validate_catalogue",
]

CAMPAIGN_START = date(2026, 1, 3)
CAMPAIGN_DAYS = 30

# ``None`` is the global audience; the rest are the named segments.
AUDIENCE_SEGMENTS: tuple[str | None, ...] = (
    None,
    "schools",
    "universities",
    "early-career",
    "builders",
    "couples",
)

WEEK_1 = "Week 1: Identity & Belonging"
WEEK_2 = "Week 2: Prayer & Presence"
WEEK_3 = "Week 3: Peace & Anxiety"
WEEK_4 = "Week 4: Bold Witness"
WEEK_5 = "Week 5: Commission"


# ---------------------------------------------------------------------------
# Catalogue records
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class TeachingBundle:
    """Extended teaching attached to a spark."""

    full_teaching: str
    context_background: str
    application_points: tuple[str, ...]
    today_action: str
    reflection_question: str


@dataclass(frozen=True, slots=True)
class DayTheme:
    """One campaign day.  Copy fields left as ``None`` use the fallbacks."""

    title: str
    scripture_ref: str
    week: str
    featured: bool = False
    passage: str | None = None
    description: str | None = None
    prayer_line: str | None = None
    teaching: TeachingBundle | None = None


GENERIC_PRAYER_LINE = "Lord, guide me today."

GENERIC_TEACHING = TeachingBundle(
    full_teaching=(
        "Every day in this campaign is an invitation to take one honest step "
        "toward God. Read the passage slowly. Notice the word or phrase that "
        "catches your attention, and ask what it reveals about who God is and "
        "who you are becoming.\n\n"
        "Dominion is not built in a day. It grows through small, repeated "
        "choices to trust, to pray, and to act on what you read."
    ),
    context_background=(
        "Read the verses around today's passage to see who was speaking, who "
        "was listening, and what was happening at the time. Context keeps "
        "application honest."
    ),
    application_points=(
        "Read today's scripture twice, once quickly and once slowly.",
        "Write down one sentence that stands out to you.",
        "Share that sentence with one person today.",
    ),
    today_action="Take one step in faith based on what you've reflected on.",
    reflection_question="What would it look like to live this truth today?",
)


# ---------------------------------------------------------------------------
# The 30 day themes
# ---------------------------------------------------------------------------
DAY_THEMES: tuple[DayTheme, ...] = (
    # --- Week 1: Identity & Belonging ------------------------------------
    DayTheme(
        title="Dominion Begins with Belonging",
        scripture_ref="Romans 8:15-17",
        week=WEEK_1,
        featured=True,
        passage=(
            "For you didn't receive the spirit of bondage again to fear, but you "
            "received the Spirit of adoption, by whom we cry, \"Abba! Father!\" "
            "The Spirit himself testifies with our spirit that we are children "
            "of God; and if children, then heirs."
        ),
        description=(
            "Real authority starts with security, not striving. When you know you "
            "belong, you stop performing and start living steady under pressure. "
            "Today, let your identity be your anchor."
        ),
        prayer_line=(
            "Father, anchor me in belonging and teach me to live from Your love, "
            "not from pressure."
        ),
        teaching=TeachingBundle(
            full_teaching=(
                "Before Paul ever talks about victory in Romans 8, he talks about "
                "adoption. The order matters. Authority that flows from insecurity "
                "turns into control; authority that flows from belonging turns into "
                "service.\n\n"
                "An orphan has to fight for every scrap. A child sits at the table. "
                "When you know you are a son or daughter, pressure loses its grip, "
                "because your worth is no longer on the line in every conversation."
            ),
            context_background=(
                "Roman adoption gave a child a new name, cancelled old debts and "
                "granted full inheritance rights. Paul's readers in Rome would have "
                "heard \"Spirit of adoption\" as a legal and family status, not a "
                "feeling."
            ),
            application_points=(
                "Notice one moment today where you feel the urge to prove yourself.",
                "In that moment, quietly say: \"I already belong.\"",
                "Serve someone without needing them to notice.",
            ),
            today_action=(
                "Write \"I am a child of God\" somewhere you will see it. Read it "
                "aloud before your hardest conversation today."
            ),
            reflection_question="Where are you still striving to earn what God has already given?",
        ),
    ),
    DayTheme(
        title="Seated, Not Shaken",
        scripture_ref="Ephesians 2:4-6",
        week=WEEK_1,
        passage=(
            "But God, being rich in mercy, for his great love with which he loved "
            "us, even when we were dead through our trespasses, made us alive "
            "together with Christ, and raised us up with him, and made us to sit "
            "with him in the heavenly places in Christ Jesus."
        ),
        description=(
            "Dominion is perspective before it is performance. When life feels "
            "loud, remember you're not beneath fear—you're invited into a higher "
            "view. Calm begins when you stop fighting from the ground."
        ),
        prayer_line="Jesus, lift my perspective and settle my heart in Your victory today.",
        teaching=TeachingBundle(
            full_teaching=(
                "Paul says we are seated with Christ. Seated is the posture of "
                "finished work. You don't sit down in the middle of a battle you "
                "are losing.\n\n"
                "That does not mean life stops being hard. It means the hard things "
                "no longer get the final word on your identity or your future."
            ),
            context_background=(
                "Ephesus was a city full of spiritual anxiety: temples, charms and "
                "rituals to keep unseen powers happy. Paul tells believers there "
                "that they are raised above those powers, not at their mercy."
            ),
            application_points=(
                "Name the loudest worry in your life right now.",
                "Picture it from the seat Paul describes: below, not above.",
                "Pray about it once, then put it down for the rest of the day.",
            ),
            today_action=(
                "Take five minutes of silence. Sit still on purpose and thank God "
                "that the outcome of your life is held by Him."
            ),
            reflection_question="What would change if you faced today from a seat of rest?",
        ),
    ),
    DayTheme(
        title="Chosen for Influence",
        scripture_ref="1 Peter 2:9",
        week=WEEK_1,
        passage=(
            "But you are a chosen race, a royal priesthood, a holy nation, a "
            "people for God's own possession, that you may proclaim the "
            "excellence of him who called you out of darkness into his "
            "marvelous light."
        ),
        description=(
            "You were made to bring light, not just survive the day. Dominion "
            "looks like quiet confidence, integrity, and courage that changes "
            "atmospheres."
        ),
        prayer_line="Lord, let my life bring light and hope to the people around me.",
    ),
    DayTheme(
        title="Testimony: From Pressure to Peace",
        scripture_ref="John 14:27",
        week=WEEK_1,
        passage=(
            "Peace I leave with you. My peace I give to you; not as the world "
            "gives, I give to you. Don't let your heart be troubled, neither let "
            "it be fearful."
        ),
        description=(
            "This is a real story of calm arriving in the middle of pressure. If "
            "you've been carrying stress, let this remind you that peace is "
            "possible."
        ),
        prayer_line="Jesus, meet me in my pressure and give me peace that holds.",
        teaching=TeachingBundle(
            full_teaching=(
                "Exams, deadlines, a job that would not let up. The pressure did "
                "not disappear, but something underneath it changed. Jesus never "
                "promised a life without trouble; He promised a peace the world "
                "cannot manufacture.\n\n"
                "Testimonies are not trophies. They are signposts: if God met "
                "someone else in the middle of pressure, He can meet you there too."
            ),
            context_background=(
                "Jesus spoke these words on the night before the cross, to friends "
                "who were about to watch everything fall apart. His peace was "
                "offered in the worst moment, not after it."
            ),
            application_points=(
                "Name the pressure you are carrying today.",
                "Ask Jesus for His peace in that exact place.",
                "Tell one friend how they can pray for you this week.",
            ),
            today_action=(
                "Before you open your messages tomorrow morning, read John 14:27 "
                "aloud and breathe slowly for one minute."
            ),
            reflection_question="Where do you most need peace that does not depend on circumstances?",
        ),
    ),
    DayTheme(
        title="Dominion Through Love",
        scripture_ref="1 John 4:18-19",
        week=WEEK_1,
        description=(
            "Fear shrinks you; love strengthens you. Dominion is not control—it's "
            "being steady enough to choose love in real situations."
        ),
        prayer_line="Father, fill me with Your love until fear loses its voice in my life.",
    ),
    DayTheme(
        title="Living Light in Darkness",
        scripture_ref="Matthew 5:14-16",
        week=WEEK_1,
        description=(
            "The world around you is looking for something real. Your life can "
            "be that light—not by being perfect, but by being present."
        ),
        prayer_line="Lord, help me shine Your light wherever darkness needs to be pierced.",
    ),
    # --- Week 2: Prayer & Presence ---------------------------------------
    DayTheme(
        title="Power to Stand",
        scripture_ref="Ephesians 6:10-13",
        week=WEEK_2,
        description=(
            "You don't have to fight every battle alone. God has already equipped "
            "you with everything you need to stand firm."
        ),
        prayer_line="Father, strengthen me to stand firm in every battle I face.",
    ),
    DayTheme(
        title="When Stillness Speaks",
        scripture_ref="Psalm 46:10",
        week=WEEK_2,
        passage="Be still, and know that I am God. I will be exalted among the nations.",
        description=(
            "In the noise of life, stillness is where God meets you. Today, "
            "pause and listen for His voice."
        ),
        prayer_line="Lord, quiet my soul and help me hear Your voice in the stillness.",
        teaching=TeachingBundle(
            full_teaching=(
                "\"Be still\" in Psalm 46 is not a gentle suggestion to relax. The "
                "word carries the sense of letting go, dropping your hands, ceasing "
                "the struggle. It is spoken in the middle of nations raging and "
                "mountains shaking.\n\n"
                "Stillness is not the absence of noise around you. It is the "
                "decision to stop adding your own noise to it long enough to hear "
                "God."
            ),
            context_background=(
                "Psalm 46 was likely sung after Jerusalem was delivered from a "
                "military threat. It celebrates God as a refuge when everything "
                "that should be stable is moving."
            ),
            application_points=(
                "Put your phone in another room for ten minutes.",
                "Read Psalm 46 slowly, pausing after verse 10.",
                "Write down anything you sense God bringing to mind.",
            ),
            today_action=(
                "Schedule ten minutes of silence today and protect it like a "
                "meeting you cannot miss."
            ),
            reflection_question="What noise do you reach for when silence feels uncomfortable?",
        ),
    ),
    DayTheme(
        title="Prayer That Moves Mountains",
        scripture_ref="Mark 11:22-24",
        week=WEEK_2,
        description=(
            "Prayer is not about getting what you want—it's about aligning with "
            "what God wants. That's where power lives."
        ),
        prayer_line="Jesus, align my prayers with Your will and move mountains for Your glory.",
    ),
    DayTheme(
        title="Testimony: Breakthrough Came",
        scripture_ref="James 5:16",
        week=WEEK_2,
        description=(
            "Sometimes the breakthrough comes suddenly after a long wait. This "
            "story will encourage your faith today."
        ),
        prayer_line="Father, increase my faith as I wait for Your breakthrough.",
    ),
    DayTheme(
        title="In His Presence",
        scripture_ref="Psalm 16:11",
        week=WEEK_2,
        description=(
            "The fullness of joy is found in His presence. Today, make time to "
            "simply be with God."
        ),
        prayer_line="Lord, draw me deeper into Your presence where fullness of joy is found.",
    ),
    DayTheme(
        title="The Secret Place",
        scripture_ref="Matthew 6:6",
        week=WEEK_2,
        description=(
            "What happens in private shapes who you are in public. Your secret "
            "time with God matters more than you know."
        ),
        prayer_line="Father, meet me in the secret place and transform me from the inside out.",
    ),
    # --- Week 3: Peace & Anxiety -----------------------------------------
    DayTheme(
        title="Peace That Guards",
        scripture_ref="Philippians 4:6-7",
        week=WEEK_3,
        passage=(
            "In nothing be anxious, but in everything, by prayer and petition "
            "with thanksgiving, let your requests be made known to God. And the "
            "peace of God, which surpasses all understanding, will guard your "
            "hearts and your thoughts in Christ Jesus."
        ),
        description=(
            "Anxiety tells you to carry everything. God says cast it all on Him. "
            "Peace comes when you let go."
        ),
        prayer_line="Lord, guard my heart and mind with Your supernatural peace.",
        teaching=TeachingBundle(
            full_teaching=(
                "Paul wrote \"in nothing be anxious\" from a prison cell. He was not "
                "writing from comfort; he was writing from experience.\n\n"
                "The promise is not that every request gets the answer you want. "
                "It is that God's peace will stand guard over your heart and mind, "
                "like a soldier posted at a gate, while you wait."
            ),
            context_background=(
                "Philippi was a Roman colony with soldiers stationed in it. "
                "\"Guard\" is a military word the Philippians saw acted out daily "
                "at their city gates."
            ),
            application_points=(
                "List three things you are anxious about.",
                "Turn each into a specific request to God.",
                "Add one thing you are thankful for next to each request.",
            ),
            today_action=(
                "Write your worries on paper, pray over them one by one, then fold "
                "the paper and put it away."
            ),
            reflection_question="Which worry have you been carrying that God is asking you to hand over?",
        ),
    ),
    DayTheme(
        title="Cast Your Cares",
        scripture_ref="1 Peter 5:7",
        week=WEEK_3,
        description=(
            "You weren't designed to carry the weight of worry. Today, release "
            "what's been pressing on your heart."
        ),
        prayer_line="Jesus, I release my worries to You. Carry what I cannot.",
    ),
    DayTheme(
        title="Anxiety to Trust",
        scripture_ref="Proverbs 3:5-6",
        week=WEEK_3,
        description=(
            "Trust is a muscle. The more you practice it, the stronger it "
            "becomes. Today, choose trust over anxiety."
        ),
        prayer_line="Father, help me choose trust over anxiety in every situation.",
    ),
    DayTheme(
        title="Testimony: From Overwhelm to Overflow",
        scripture_ref="Isaiah 26:3",
        week=WEEK_3,
        description=(
            "When everything felt like too much, God stepped in. This testimony "
            "will remind you He's still working."
        ),
        prayer_line="Lord, turn my overwhelm into overflow by Your power.",
    ),
    DayTheme(
        title="Mind Renewed",
        scripture_ref="Romans 12:2",
        week=WEEK_3,
        description=(
            "Your thoughts shape your reality. Today, invite God to transform "
            "how you think."
        ),
        prayer_line="Father, transform my thinking and renew my mind today.",
    ),
    DayTheme(
        title="Rest for the Weary",
        scripture_ref="Matthew 11:28-30",
        week=WEEK_3,
        description=(
            "Rest isn't weakness—it's wisdom. Jesus invites the weary to come and "
            "find rest in Him."
        ),
        prayer_line="Jesus, I come to You weary. Give me Your rest.",
    ),
    # --- Week 4: Bold Witness --------------------------------------------
    DayTheme(
        title="Speak Up",
        scripture_ref="Acts 1:8",
        week=WEEK_4,
        description=(
            "Your voice matters. The world needs to hear what God has put in "
            "your heart. Today, be bold."
        ),
        prayer_line="Lord, give me boldness to speak and wisdom to know when.",
    ),
    DayTheme(
        title="Your Story Matters",
        scripture_ref="Revelation 12:11",
        week=WEEK_4,
        description=(
            "You have a testimony. Don't underestimate the power of your story "
            "to change someone's life."
        ),
        prayer_line="Father, use my story to reach someone who needs hope.",
    ),
    DayTheme(
        title="Love in Action",
        scripture_ref="1 John 3:18",
        week=WEEK_4,
        description=(
            "Faith without works is incomplete. Today, let your love show up in "
            "tangible ways."
        ),
        prayer_line="Lord, help me love not just in words but in real action.",
    ),
    DayTheme(
        title="Testimony: One Conversation Changed Everything",
        scripture_ref="Romans 10:14-15",
        week=WEEK_4,
        description=(
            "It only takes one conversation to shift someone's eternity. This "
            "story will inspire you to speak."
        ),
        prayer_line="Father, open doors for conversations that matter eternally.",
    ),
    DayTheme(
        title="Courage Over Comfort",
        scripture_ref="Joshua 1:9",
        week=WEEK_4,
        passage=(
            "Haven't I commanded you? Be strong and courageous. Don't be afraid. "
            "Don't be dismayed, for Yahweh your God is with you wherever you go."
        ),
        description=(
            "Comfort zones are nice, but nothing grows there. Today, step out in "
            "courage."
        ),
        prayer_line="Lord, give me courage to step beyond my comfort zone today.",
        teaching=TeachingBundle(
            full_teaching=(
                "Joshua was stepping into Moses' shoes with a nation watching. God "
                "did not tell him the task would be easy. He told him three times "
                "to be strong and courageous, and once why: \"I am with you.\"\n\n"
                "Courage is not the absence of fear. It is obedience that keeps "
                "walking while fear is still talking."
            ),
            context_background=(
                "Joshua 1 opens right after Moses' death, on the edge of the Jordan. "
                "The promised land was ahead, occupied, and unfamiliar."
            ),
            application_points=(
                "Identify one conversation or step you have been avoiding.",
                "Pray Joshua 1:9 over it by name.",
                "Take the first small step before the end of the day.",
            ),
            today_action=(
                "Do one thing today that your comfort would rather postpone, and "
                "tell God you're doing it because He is with you."
            ),
            reflection_question="Where is comfort keeping you from what God has put in front of you?",
        ),
    ),
    DayTheme(
        title="Salt and Light",
        scripture_ref="Matthew 5:13-16",
        week=WEEK_4,
        description=(
            "You're called to preserve and illuminate. Your presence changes the "
            "atmosphere around you."
        ),
        prayer_line="Jesus, help me preserve what's good and illuminate what's true.",
    ),
    # --- Week 5: Commission ----------------------------------------------
    DayTheme(
        title="The Commission",
        scripture_ref="Matthew 28:18-20",
        week=WEEK_5,
        description=(
            "The Great Commission isn't just for missionaries—it's for you, "
            "wherever you are."
        ),
        prayer_line="Lord, I accept Your commission. Send me where You need me.",
    ),
    DayTheme(
        title="Go Where You Are",
        scripture_ref="Acts 17:26-27",
        week=WEEK_5,
        description=(
            "Mission starts right where you're standing. Your workplace, school, "
            "and neighborhood are your mission field."
        ),
        prayer_line="Father, open my eyes to the mission field where I already stand.",
    ),
    DayTheme(
        title="Faithful in Little",
        scripture_ref="Luke 16:10",
        week=WEEK_5,
        description=(
            "Faithfulness in small things opens doors to greater things. Today, "
            "honor what's in your hand."
        ),
        prayer_line="Lord, help me be faithful in the small things today.",
    ),
    DayTheme(
        title="Testimony: Sent Out",
        scripture_ref="Isaiah 6:8",
        week=WEEK_5,
        description=(
            "When God sends you, He equips you. This testimony will encourage you "
            "to say yes."
        ),
        prayer_line="Father, equip me for everywhere You're sending me.",
    ),
    DayTheme(
        title="The Harvest is Ready",
        scripture_ref="John 4:35",
        week=WEEK_5,
        description=(
            "The harvest is plentiful. Open your eyes to the opportunities "
            "around you today."
        ),
        prayer_line="Lord, give me eyes to see the harvest all around me.",
    ),
    DayTheme(
        title="Until He Returns",
        scripture_ref="Matthew 24:14",
        week=WEEK_5,
        description=(
            "We work with urgency because He's coming back. Let this reality "
            "fuel your purpose."
        ),
        prayer_line="Jesus, fuel my urgency with hope as I wait for Your return.",
    ),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def campaign_end(start: date = CAMPAIGN_START, days: int = CAMPAIGN_DAYS) -> date:
    """Last day (inclusive) of a campaign of *days* days starting at *start*."""
    return start + timedelta(days=days - 1)


def validate_catalogue(
    themes: Sequence[DayTheme],
    segments: Sequence[str | None],
    expected_days: int = CAMPAIGN_DAYS,
) -> None:
    """Fail fast on a malformed catalogue.

    Raises
    ------
    ValueError
        If the theme table doesn't hold exactly *expected_days* entries,
        the segment list is empty, or a segment appears twice.
    """
    if len(themes) != expected_days:
        raise ValueError(
            f"Campaign catalogue must define exactly {expected_days} day themes, "
            f"got {len(themes)}"
        )
    if not segments:
        raise ValueError("Campaign catalogue must define at least one audience segment")
    if len(set(segments)) != len(segments):
        raise ValueError(f"Duplicate audience segments: {list(segments)}")
