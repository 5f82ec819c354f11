"""
dominion.api.main — FastAPI application entry point
=====================================================

The lifespan wires the background content pipeline into the web process:
startup backfill (spawned, never awaited) and the nightly sync timer.

Run with::

    uvicorn dominion.api.main:app --reload --port 8000
"""

from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

load_dotenv()

from dominion.api.deps import get_config, get_engine  # noqa: E402
from dominion.api.routes.sync import batch_settings  # noqa: E402
from dominion.api.routes.sync import router as sync_router  # noqa: E402
from dominion.database.engine import init_db  # noqa: E402
from dominion.services.auto_seed import spawn_auto_seed  # noqa: E402
from dominion.services.scheduler import NightlySyncScheduler  # noqa: E402
from dominion.services.sync_log import install_sync_log  # noqa: E402

logger = logging.getLogger(__name__)


def _cors_origins() -> list[str]:
    """Comma-separated ``CORS_ALLOW_ORIGINS``; empty means no cross-origin access."""
    raw = os.getenv("CORS_ALLOW_ORIGINS", "").strip()
    return [origin.strip().rstrip("/") for origin in raw.split(",") if origin.strip()]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle — schema, backfill task, nightly timer."""
    install_sync_log()

    cfg = get_config()
    engine = get_engine()
    init_db(engine)

    batching = batch_settings(cfg)

    app.state.seed_task = None
    if cfg.seed_on_startup:
        app.state.seed_task = spawn_auto_seed(engine, **batching)

    app.state.scheduler = None
    if cfg.nightly_sync_enabled:
        scheduler = NightlySyncScheduler(
            engine,
            timezone=cfg.sync_timezone,
            hour=cfg.sync_hour,
            minute=cfg.sync_minute,
            sync_kwargs=batching,
        )
        scheduler.start()
        app.state.scheduler = scheduler

    logger.info("%s content API started — engine ready (%s)", cfg.community_name, engine.url.database)
    yield

    logger.info("Content API shutting down")
    if app.state.scheduler is not None:
        app.state.scheduler.stop()
    seed_task: asyncio.Task | None = app.state.seed_task
    if seed_task is not None and not seed_task.done():
        seed_task.cancel()


app = FastAPI(
    title="Dominion Content API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(sync_router, prefix="/api")


@app.get("/api/health")
def health():
    return {"status": "ok"}
