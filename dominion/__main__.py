"""
dominion.__main__ — Entry point for ``python -m dominion``
==========================================================

Headless content worker, for deployments that keep the sync jobs out of
the web process.

Wiring:
1. Load .env (DATABASE_URL).
2. Load config.yaml (soft settings).
3. Create the SQLAlchemy engine and ensure tables exist.
4. ``--once``: run one content sync and exit (non-zero on failure).
5. Otherwise: spawn the startup backfill, start the nightly scheduler,
   and run the event loop until Ctrl+C or SIGTERM.

Run with::

    uv run python -m dominion
    uv run python -m dominion --once
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import signal
import sys

from dotenv import load_dotenv

from dominion.config import DominionConfig, load_config
from dominion.database.engine import create_db_engine, init_db
from dominion.services.auto_seed import spawn_auto_seed
from dominion.services.content_sync import run_content_sync
from dominion.services.scheduler import NightlySyncScheduler

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)-8s │ %(name)s │ %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("dominion")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="dominion", description="Dominion content worker")
    parser.add_argument(
        "--config", default="config.yaml", help="Path to config.yaml",
    )
    parser.add_argument(
        "--once", action="store_true",
        help="Run a single content sync and exit",
    )
    return parser.parse_args(argv)


async def _serve(cfg: DominionConfig, engine) -> None:
    batching = {
        "batch_size": cfg.upsert_batch_size,
        "batch_timeout": cfg.upsert_batch_timeout_seconds,
    }

    seed_task = spawn_auto_seed(engine, **batching) if cfg.seed_on_startup else None

    scheduler = None
    if cfg.nightly_sync_enabled:
        scheduler = NightlySyncScheduler(
            engine,
            timezone=cfg.sync_timezone,
            hour=cfg.sync_hour,
            minute=cfg.sync_minute,
            sync_kwargs=batching,
        )
        scheduler.start()

    stop = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except NotImplementedError:
            # Windows: fall back to KeyboardInterrupt
            pass

    try:
        await stop.wait()
    finally:
        logger.info("Shutting down content worker")
        if scheduler is not None:
            scheduler.stop()
        if seed_task is not None and not seed_task.done():
            seed_task.cancel()


def main(argv: list[str] | None = None) -> int:
    """Bootstrap and run the Dominion content worker."""
    args = _parse_args(argv)

    # 1. Environment variables.
    load_dotenv()

    # 2. Soft configuration.
    cfg = load_config(args.config)
    logger.info("Config loaded — Community: %s", cfg.community_name)

    # 3. Database.
    engine = create_db_engine()
    init_db(engine)

    # 4. One-shot sync.
    if args.once:
        try:
            result = asyncio.run(
                run_content_sync(
                    engine,
                    batch_size=cfg.upsert_batch_size,
                    batch_timeout=cfg.upsert_batch_timeout_seconds,
                )
            )
        except Exception:
            logger.critical("Content sync failed", exc_info=True)
            return 1
        logger.info(
            "Content sync finished: %d sparks, %d reflection cards",
            result.sparks, result.reflections,
        )
        return 0

    # 5. Long-running worker.
    try:
        asyncio.run(_serve(cfg, engine))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
