"""
Dominion — Campaign Content Sync for a Faith-Community Platform
================================================================
Keeps the devotional campaign (sparks, reflection cards, blog posts,
events, journeys) present and current in the platform database.  Content
is derived from a fixed campaign calendar, upserted idempotently at
startup, and re-synced every night at 23:00 London time.

Package layout::

    dominion/
    ├── config.py            # YAML → typed Python config
    ├── database/
    │   ├── engine.py        # SQLAlchemy engine + async helper
    │   └── models.py        # Content tables with natural keys
    ├── engine/
    │   ├── campaign.py      # 30-day theme catalogue + segments
    │   ├── generator.py     # Pure spark / reflection card generation
    │   ├── library.py       # Fixed blog posts, events, journeys
    │   └── schedule.py      # Next-run computation in a named zone
    ├── services/
    │   ├── storage.py       # Single-statement upserts + reads
    │   ├── content_sync.py  # Batched sync executor
    │   ├── auto_seed.py     # Startup backfill + validation
    │   ├── scheduler.py     # Self-rescheduling nightly timer
    │   └── sync_log.py      # In-memory tail of pipeline log lines
    ├── api/
    │   ├── main.py          # FastAPI app (lifespan wires seed + scheduler)
    │   ├── deps.py          # Engine / config / admin JWT dependencies
    │   └── routes/sync.py   # Force-sync, scheduler status, logs
    └── __main__.py          # Headless worker (python -m dominion)
"""

__version__ = "0.1.0"
