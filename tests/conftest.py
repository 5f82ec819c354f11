"""
tests/conftest.py — Shared Test Fixtures
=========================================
"""

from __future__ import annotations

import os

# dominion.api.deps rejects a missing or short JWT_SECRET at import time.
_TEST_JWT_SECRET = "pytest-content-sync-signing-key-" + "k" * 32
os.environ.setdefault("JWT_SECRET", _TEST_JWT_SECRET)

import pytest  # noqa: E402
from sqlalchemy import Engine, create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from dominion.database.models import Base  # noqa: E402


@pytest.fixture
def db_engine() -> Engine:
    """Create an in-memory SQLite engine with all content tables.

    Uses StaticPool so all threads share the same in-memory database
    (required by ``asyncio.to_thread`` used in ``run_db``).
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def db_session(db_engine: Engine):
    """Bare session on the test engine; uncommitted work is discarded."""
    with Session(db_engine) as session:
        yield session
        session.rollback()


@pytest.fixture
def admin_token():
    """Bearer token accepted by the sync admin routes."""
    return make_admin_token()


def make_admin_token(sub: str = "content-admin", username: str = "ContentAdmin") -> str:
    import jwt

    from dominion.api.deps import JWT_ALGORITHM, JWT_SECRET

    return jwt.encode(
        {"sub": sub, "username": username, "is_admin": True},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )


@pytest.fixture
def client():
    """Create a FastAPI TestClient with raise_server_exceptions=False.

    The client is not entered as a context manager, so the lifespan
    (backfill + nightly timer) does not run.
    """
    from fastapi.testclient import TestClient

    from dominion.api.main import app

    return TestClient(app, raise_server_exceptions=False)
