"""
tests/test_config.py — YAML Configuration Loader
=================================================
"""

from __future__ import annotations

import pytest

from dominion.config import DominionConfig, load_config, parse_config


class TestParseConfig:
    def test_defaults(self):
        cfg = parse_config({"community_name": "Dominion"})
        assert cfg == DominionConfig(community_name="Dominion")
        assert cfg.sync_timezone == "Europe/London"
        assert (cfg.sync_hour, cfg.sync_minute) == (23, 0)
        assert cfg.nightly_sync_enabled is True
        assert cfg.seed_on_startup is True
        assert cfg.upsert_batch_size == 20
        assert cfg.upsert_batch_timeout_seconds == 30.0
        assert cfg.zone.key == "Europe/London"

    def test_overrides(self):
        cfg = parse_config({
            "community_name": "Dominion",
            "sync_timezone": "America/Chicago",
            "sync_hour": 2,
            "sync_minute": 45,
            "nightly_sync_enabled": False,
            "upsert_batch_size": 50,
            "upsert_batch_timeout_seconds": 5,
        })
        assert cfg.sync_timezone == "America/Chicago"
        assert (cfg.sync_hour, cfg.sync_minute) == (2, 45)
        assert cfg.nightly_sync_enabled is False
        assert cfg.upsert_batch_size == 50
        assert cfg.upsert_batch_timeout_seconds == 5.0

    def test_frozen(self):
        cfg = parse_config({"community_name": "Dominion"})
        with pytest.raises(AttributeError):
            cfg.sync_hour = 1

    def test_community_name_required(self):
        with pytest.raises(KeyError):
            parse_config({})

    @pytest.mark.parametrize(
        "override, message",
        [
            ({"sync_timezone": "Nowhere/Special"}, "Unknown sync_timezone"),
            ({"sync_hour": 24}, "sync_hour"),
            ({"sync_minute": -1}, "sync_minute"),
            ({"upsert_batch_size": 0}, "upsert_batch_size"),
            ({"upsert_batch_timeout_seconds": 0}, "upsert_batch_timeout_seconds"),
        ],
    )
    def test_invalid_values(self, override, message):
        with pytest.raises(ValueError, match=message):
            parse_config({"community_name": "Dominion", **override})


class TestLoadConfig:
    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "community_name: Dominion\nsync_hour: 22\nseed_on_startup: false\n",
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg.sync_hour == 22
        assert cfg.seed_on_startup is False

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="config.yaml.example"):
            load_config(tmp_path / "absent.yaml")

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")
        with pytest.raises(KeyError):
            load_config(path)
