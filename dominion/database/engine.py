"""
dominion.database.engine — Database Connection & Async Helper
==============================================================

The sync pipeline runs on an ``asyncio`` event loop (inside the FastAPI
process or the headless worker), but SQLAlchemy + psycopg2 is
**synchronous**.  Every DB call is therefore shipped to a worker thread
with :func:`run_db`, so a slow upsert never stalls the loop that also
serves HTTP requests and arms the nightly timer.

PostgreSQL is the production target.  A ``sqlite:///`` URL is accepted
for local runs: the upserts speak both dialects.

Usage::

    from dominion.database.engine import create_db_engine, init_db, run_db

    engine = create_db_engine()          # reads DATABASE_URL from .env
    init_db(engine)

    # Inside a coroutine:
    count = await run_db(upsert_sparks, engine, batch)
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from contextlib import contextmanager
from typing import Any, ParamSpec, TypeVar

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session

from dominion.database.models import Base

logger = logging.getLogger(__name__)

P = ParamSpec("P")
T = TypeVar("T")


# ---------------------------------------------------------------------------
# Engine creation
# ---------------------------------------------------------------------------
def _pool_options(url: str) -> dict[str, Any]:
    """Pool settings per backend.

    The pipeline writes one batch at a time and the admin API adds the
    occasional force-sync, so a small pool is plenty.  SQLite connections
    are handed across threads by ``run_db``.
    """
    if make_url(url).get_backend_name() == "sqlite":
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": 5,
        "max_overflow": 5,
        "pool_pre_ping": True,
        "pool_timeout": 10,
        "pool_recycle": 3600,
    }


def create_db_engine(url: str | None = None, *, echo: bool = False) -> Engine:
    """Build an :class:`Engine` from *url*, falling back to ``DATABASE_URL``.

    Raises
    ------
    RuntimeError
        If neither *url* nor ``DATABASE_URL`` is set.
    """
    url = url or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not set.  "
            "Copy .env.example → .env and point it at the content database."
        )

    engine = create_engine(url, echo=echo, **_pool_options(url))
    logger.info(
        "Database engine created → %s (%s)",
        engine.url.host or engine.url.database, engine.dialect.name,
    )
    return engine


# ---------------------------------------------------------------------------
# Schema initialization
# ---------------------------------------------------------------------------
def init_db(engine: Engine) -> None:
    """Create the content tables that don't exist yet.

    Alembic owns the production schema; this keeps fresh dev databases and
    test engines usable without a migration step.
    """
    Base.metadata.create_all(engine)
    logger.info("Content tables verified / created.")


# ---------------------------------------------------------------------------
# Session helper
# ---------------------------------------------------------------------------
@contextmanager
def get_session(engine: Engine):
    """One transaction: commit when the block exits cleanly, else roll back."""
    session = Session(engine)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# ---------------------------------------------------------------------------
# Async bridge
# ---------------------------------------------------------------------------
async def run_db(func: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Await a **synchronous** storage call without blocking the loop.

    *func* runs on the default executor via :func:`asyncio.to_thread`.
    Cancelling the awaiting coroutine (e.g. a batch timeout) does not stop
    the thread; the transaction it holds still commits or rolls back on
    its own.
    """
    return await asyncio.to_thread(func, *args, **kwargs)
