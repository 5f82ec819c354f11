"""
dominion.config — YAML Configuration Loader
============================================

Reads ``config.yaml`` for the soft settings of the sync pipeline: where
the nightly run lands on the clock, how large each upsert batch is, and
whether the startup backfill runs at all.  Secrets (``DATABASE_URL``,
``JWT_SECRET``) stay in the environment / ``.env``.

Usage::

    from dominion.config import load_config

    cfg = load_config()          # reads ./config.yaml by default
    print(cfg.sync_timezone)     # "Europe/London"
    print(cfg.sync_hour)         # 23
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml


# ---------------------------------------------------------------------------
# Typed settings object
# ---------------------------------------------------------------------------
@dataclass(frozen=True, slots=True)
class DominionConfig:
    """Immutable configuration loaded from ``config.yaml``."""

    # Identity
    community_name: str

    # Nightly sync
    sync_timezone: str = "Europe/London"
    sync_hour: int = 23
    sync_minute: int = 0
    nightly_sync_enabled: bool = True

    # Startup backfill
    seed_on_startup: bool = True

    # Upsert batching
    upsert_batch_size: int = 20
    upsert_batch_timeout_seconds: float = 30.0

    # API
    api_port: int = 8000

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.sync_timezone)


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def _validate(cfg: DominionConfig) -> DominionConfig:
    try:
        ZoneInfo(cfg.sync_timezone)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown sync_timezone: {cfg.sync_timezone!r}") from exc
    if not 0 <= cfg.sync_hour <= 23:
        raise ValueError(f"sync_hour must be 0-23, got {cfg.sync_hour}")
    if not 0 <= cfg.sync_minute <= 59:
        raise ValueError(f"sync_minute must be 0-59, got {cfg.sync_minute}")
    if cfg.upsert_batch_size < 1:
        raise ValueError(f"upsert_batch_size must be >= 1, got {cfg.upsert_batch_size}")
    if cfg.upsert_batch_timeout_seconds <= 0:
        raise ValueError(
            "upsert_batch_timeout_seconds must be positive, "
            f"got {cfg.upsert_batch_timeout_seconds}"
        )
    return cfg


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def parse_config(raw: dict) -> DominionConfig:
    """Build a :class:`DominionConfig` from an already-parsed mapping.

    Only ``community_name`` is required; everything else has a default.

    Raises
    ------
    KeyError
        If ``community_name`` is missing.
    ValueError
        If a value is out of range or the time zone is unknown.
    """
    defaults = DominionConfig(community_name="")
    cfg = DominionConfig(
        community_name=raw["community_name"],
        sync_timezone=str(raw.get("sync_timezone", defaults.sync_timezone)),
        sync_hour=int(raw.get("sync_hour", defaults.sync_hour)),
        sync_minute=int(raw.get("sync_minute", defaults.sync_minute)),
        nightly_sync_enabled=bool(
            raw.get("nightly_sync_enabled", defaults.nightly_sync_enabled)
        ),
        seed_on_startup=bool(raw.get("seed_on_startup", defaults.seed_on_startup)),
        upsert_batch_size=int(raw.get("upsert_batch_size", defaults.upsert_batch_size)),
        upsert_batch_timeout_seconds=float(
            raw.get(
                "upsert_batch_timeout_seconds",
                defaults.upsert_batch_timeout_seconds,
            )
        ),
        api_port=int(raw.get("api_port", defaults.api_port)),
    )
    return _validate(cfg)


def load_config(path: str | Path = "config.yaml") -> DominionConfig:
    """Read *path* and return a :class:`DominionConfig` instance.

    Parameters
    ----------
    path:
        Filesystem path to the YAML configuration file.
        Defaults to ``config.yaml`` in the current working directory.

    Raises
    ------
    FileNotFoundError
        If the YAML file doesn't exist.
    KeyError
        If a required key is missing from the YAML file.
    ValueError
        If a value fails validation.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path.resolve()}\n"
            "Hint: copy config.yaml.example → config.yaml and edit it."
        )

    with open(config_path, encoding="utf-8") as fh:
        raw: dict = yaml.safe_load(fh) or {}

    return parse_config(raw)
