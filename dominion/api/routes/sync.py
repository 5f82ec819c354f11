"""
dominion.api.routes.sync — Content sync admin endpoints (JWT‑protected)
========================================================================
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Query, Request, status
from pydantic import BaseModel

from dominion.api.deps import AdminDep, ConfigDep, EngineDep
from dominion.config import DominionConfig
from dominion.services.content_sync import run_content_sync
from dominion.services.sync_log import VALID_LEVELS, recent_sync_logs

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin/sync", tags=["sync"])


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class SyncResponse(BaseModel):
    sparks: int
    reflections: int
    started_at: str
    finished_at: str | None = None
    duration_seconds: float


class SchedulerStatus(BaseModel):
    running: bool
    timezone: str | None = None
    target_time: str | None = None
    next_run_at: str | None = None
    last_run_at: str | None = None
    last_result: SyncResponse | None = None
    last_error: str | None = None
    runs: int = 0
    failures: int = 0


def batch_settings(cfg: DominionConfig) -> dict:
    """Upsert batching knobs shared by the force-sync route and the lifespan jobs."""
    return {
        "batch_size": cfg.upsert_batch_size,
        "batch_timeout": cfg.upsert_batch_timeout_seconds,
    }


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@router.post("", response_model=SyncResponse)
async def force_sync(admin: AdminDep, engine: EngineDep, cfg: ConfigDep):
    """Run the content sync now and wait for it to finish."""
    logger.info("Manual content sync requested by %s", admin.get("username", admin.get("sub")))
    try:
        result = await run_content_sync(engine, **batch_settings(cfg))
    except Exception as exc:
        raise HTTPException(
            status.HTTP_502_BAD_GATEWAY, f"Content sync failed: {exc}",
        ) from exc
    return result.to_dict()


@router.get("/status", response_model=SchedulerStatus)
def sync_status(admin: AdminDep, request: Request):
    """Report the nightly scheduler's state for this process."""
    scheduler = getattr(request.app.state, "scheduler", None)
    if scheduler is None:
        return {"running": False}
    return scheduler.status()


@router.get("/logs")
def sync_logs(
    admin: AdminDep,
    tail: int = Query(100, ge=1, le=500),
    level: str | None = Query(None),
):
    """Recent log lines from the sync pipeline in this process."""
    try:
        entries = recent_sync_logs(tail, min_level=level)
    except ValueError:
        raise HTTPException(
            status.HTTP_400_BAD_REQUEST,
            f"Invalid level. Must be one of: {', '.join(VALID_LEVELS)}",
        )
    return {"entries": entries, "total": len(entries)}
