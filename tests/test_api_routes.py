"""
tests/test_api_routes.py — FastAPI Route Integration Tests
============================================================

These tests verify:
- Health endpoint availability
- Auth guards on the sync admin endpoints
- Force-sync and scheduler status responses
- JWT_SECRET validation
"""

from __future__ import annotations

import os
from unittest.mock import AsyncMock, MagicMock, patch

import jwt
import pytest

from dominion.api import deps
from dominion.api.deps import JWT_ALGORITHM, JWT_SECRET, get_config, get_engine
from dominion.api.main import _cors_origins, app
from dominion.config import DominionConfig
from dominion.database.models import Spark
from dominion.services.content_sync import SyncResult
from dominion.services.storage import count_rows


@pytest.fixture
def non_admin_token():
    return jwt.encode(
        {"sub": "67890", "username": "RegularUser", "is_admin": False},
        JWT_SECRET,
        algorithm=JWT_ALGORITHM,
    )


@pytest.fixture
def engine_override(db_engine):
    cfg = DominionConfig(
        community_name="Dominion", upsert_batch_size=25, upsert_batch_timeout_seconds=12.0,
    )
    app.dependency_overrides[get_engine] = lambda: db_engine
    app.dependency_overrides[get_config] = lambda: cfg
    yield db_engine
    app.dependency_overrides.pop(get_engine, None)
    app.dependency_overrides.pop(get_config, None)


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ===========================================================================
# Health endpoint
# ===========================================================================
class TestHealthEndpoint:
    def test_health_returns_ok(self, client):
        resp = client.get("/api/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}


# ===========================================================================
# Auth guards
# ===========================================================================
class TestAdminAuthGuards:
    ENDPOINTS = [
        ("post", "/api/admin/sync"),
        ("get", "/api/admin/sync/status"),
    ]

    @pytest.mark.parametrize("method, endpoint", ENDPOINTS)
    def test_no_token_returns_401(self, client, method, endpoint):
        resp = getattr(client, method)(endpoint)
        assert resp.status_code == 401

    @pytest.mark.parametrize("method, endpoint", ENDPOINTS)
    def test_invalid_token_returns_401(self, client, method, endpoint):
        resp = getattr(client, method)(endpoint, headers=_auth("not-a-jwt"))
        assert resp.status_code == 401

    @pytest.mark.parametrize("method, endpoint", ENDPOINTS)
    def test_wrong_secret_returns_401(self, client, method, endpoint):
        forged = jwt.encode({"sub": "1", "is_admin": True}, "z" * 64, algorithm=JWT_ALGORITHM)
        resp = getattr(client, method)(endpoint, headers=_auth(forged))
        assert resp.status_code == 401

    def test_sync_scope_grants_access(self, client):
        token = jwt.encode(
            {"sub": "worker", "is_admin": False, "scope": "content:read content:sync"},
            JWT_SECRET,
            algorithm=JWT_ALGORITHM,
        )
        app.state.scheduler = None
        resp = client.get("/api/admin/sync/status", headers=_auth(token))
        assert resp.status_code == 200

    @pytest.mark.parametrize("method, endpoint", ENDPOINTS)
    def test_non_admin_returns_403(self, client, non_admin_token, method, endpoint):
        resp = getattr(client, method)(endpoint, headers=_auth(non_admin_token))
        assert resp.status_code == 403


# ===========================================================================
# Force sync
# ===========================================================================
class TestForceSync:
    def test_runs_sync_and_returns_counts(self, client, admin_token, engine_override):
        resp = client.post("/api/admin/sync", headers=_auth(admin_token))
        assert resp.status_code == 200
        body = resp.json()
        assert body["sparks"] == 180
        assert body["reflections"] == 180
        assert count_rows(engine_override, Spark) == 180

    def test_repeated_force_sync_is_idempotent(self, client, admin_token, engine_override):
        client.post("/api/admin/sync", headers=_auth(admin_token))
        client.post("/api/admin/sync", headers=_auth(admin_token))
        assert count_rows(engine_override, Spark) == 180

    def test_failure_returns_502(self, client, admin_token, engine_override):
        with patch(
            "dominion.api.routes.sync.run_content_sync",
            AsyncMock(side_effect=RuntimeError("db down")),
        ):
            resp = client.post("/api/admin/sync", headers=_auth(admin_token))
        assert resp.status_code == 502
        assert "db down" in resp.json()["detail"]

    def test_uses_configured_batch_settings(self, client, admin_token, engine_override):
        sync = AsyncMock(return_value=SyncResult(sparks=180, reflections=180))
        with patch("dominion.api.routes.sync.run_content_sync", sync):
            resp = client.post("/api/admin/sync", headers=_auth(admin_token))
        assert resp.status_code == 200
        sync.assert_awaited_once_with(engine_override, batch_size=25, batch_timeout=12.0)

    def test_missing_config_is_an_error_not_defaults(self, client, admin_token, db_engine):
        def _no_config():
            raise FileNotFoundError("config.yaml")

        sync = AsyncMock(return_value=SyncResult(sparks=180, reflections=180))
        app.dependency_overrides[get_engine] = lambda: db_engine
        app.dependency_overrides[get_config] = _no_config
        try:
            with patch("dominion.api.routes.sync.run_content_sync", sync):
                resp = client.post("/api/admin/sync", headers=_auth(admin_token))
        finally:
            app.dependency_overrides.pop(get_engine, None)
            app.dependency_overrides.pop(get_config, None)
        assert resp.status_code == 500
        sync.assert_not_awaited()


# ===========================================================================
# Scheduler status
# ===========================================================================
class TestSyncStatus:
    def test_no_scheduler(self, client, admin_token):
        app.state.scheduler = None
        resp = client.get("/api/admin/sync/status", headers=_auth(admin_token))
        assert resp.status_code == 200
        assert resp.json()["running"] is False

    def test_reports_scheduler_state(self, client, admin_token):
        scheduler = MagicMock()
        scheduler.status.return_value = {
            "running": True,
            "timezone": "Europe/London",
            "target_time": "23:00",
            "next_run_at": "2026-01-10T23:00:00+00:00",
            "last_run_at": None,
            "last_result": None,
            "last_error": None,
            "runs": 0,
            "failures": 0,
        }
        app.state.scheduler = scheduler
        try:
            resp = client.get("/api/admin/sync/status", headers=_auth(admin_token))
        finally:
            app.state.scheduler = None
        assert resp.status_code == 200
        body = resp.json()
        assert body["running"] is True
        assert body["target_time"] == "23:00"
        assert body["next_run_at"].startswith("2026-01-10T23:00")


# ===========================================================================
# JWT_SECRET validation
# ===========================================================================
class TestJWTSecretValidation:
    def test_rejects_missing_secret(self):
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("JWT_SECRET", None)
            with pytest.raises(RuntimeError, match="not set"):
                deps._load_jwt_secret()

    def test_rejects_known_weak_default(self):
        with patch.dict(os.environ, {"JWT_SECRET": "dominion-dev-secret-change-me"}):
            with pytest.raises(RuntimeError, match="known weak default"):
                deps._load_jwt_secret()

    def test_rejects_short_secret(self):
        with patch.dict(os.environ, {"JWT_SECRET": "tooshort"}):
            with pytest.raises(RuntimeError, match="too short"):
                deps._load_jwt_secret()

    def test_accepts_strong_secret(self):
        with patch.dict(os.environ, {"JWT_SECRET": "a" * 64}):
            assert deps._load_jwt_secret() == "a" * 64


# ===========================================================================
# CORS origins
# ===========================================================================
class TestCorsOrigins:
    def test_empty_by_default(self):
        with patch.dict(os.environ, {"CORS_ALLOW_ORIGINS": ""}):
            assert _cors_origins() == []

    def test_splits_and_strips(self):
        with patch.dict(
            os.environ, {"CORS_ALLOW_ORIGINS": "https://a.example/, https://b.example"},
        ):
            assert _cors_origins() == ["https://a.example", "https://b.example"]


# ===========================================================================
# Lifespan wiring
# ===========================================================================
class TestLifespan:
    def test_starts_and_stops_background_jobs(self, db_engine):
        from fastapi.testclient import TestClient

        from dominion.config import DominionConfig

        cfg = DominionConfig(community_name="Dominion", seed_on_startup=True)
        with (
            patch("dominion.api.main.get_config", return_value=cfg),
            patch("dominion.api.main.get_engine", return_value=db_engine),
        ):
            with TestClient(app) as live:
                assert live.get("/api/health").status_code == 200
                scheduler = app.state.scheduler
                assert scheduler is not None
                assert scheduler.running
                assert app.state.seed_task is not None
            assert not scheduler.running
        app.state.scheduler = None
        app.state.seed_task = None

    def test_disabled_jobs_are_not_started(self, db_engine):
        from fastapi.testclient import TestClient

        from dominion.config import DominionConfig

        cfg = DominionConfig(
            community_name="Dominion", seed_on_startup=False, nightly_sync_enabled=False,
        )
        with (
            patch("dominion.api.main.get_config", return_value=cfg),
            patch("dominion.api.main.get_engine", return_value=db_engine),
        ):
            with TestClient(app) as live:
                live.get("/api/health")
                assert app.state.scheduler is None
                assert app.state.seed_task is None


# ===========================================================================
# Sync logs
# ===========================================================================
class TestSyncLogs:
    def test_requires_admin(self, client):
        assert client.get("/api/admin/sync/logs").status_code == 401

    def test_returns_recent_entries(self, client, admin_token):
        import logging

        from dominion.services.sync_log import install_sync_log

        install_sync_log().clear()
        logging.getLogger("dominion.services.content_sync").info("Content sync complete")
        resp = client.get("/api/admin/sync/logs?tail=5", headers=_auth(admin_token))
        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == len(body["entries"]) >= 1
        assert body["entries"][-1]["message"] == "Content sync complete"

    def test_bad_level_returns_400(self, client, admin_token):
        resp = client.get("/api/admin/sync/logs?level=LOUD", headers=_auth(admin_token))
        assert resp.status_code == 400
