"""Unit tests for configuration loading."""

from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from piclock.__main__ import build_config, main
from piclock.config import Config
from piclock.scheduler import RefreshScheduler

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove any PICLOCK_* variables inherited from the host."""
    import os

    for key in list(os.environ):
        if key.startswith("PICLOCK_"):
            monkeypatch.delenv(key)


class TestConfigFromEnv:
    """Tests for Config.from_env()."""

    def test_defaults(self):
        config = Config.from_env()

        assert config.workdir == Path("/home/pi/calendar")
        assert config.fetch_command == "python clock.py"
        assert config.events_path == Path("/home/pi/calendar/events.txt")
        assert config.response_path == Path("/home/pi/calendar/response.edc")
        assert config.test_mode is False
        assert config.long_interval == 3600

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("PICLOCK_WORKDIR", str(tmp_path))
        monkeypatch.setenv("PICLOCK_FETCH_COMMAND", "python3 fetch.py --days 7")
        monkeypatch.setenv("PICLOCK_REFRESH_INTERVAL", "1800")
        monkeypatch.setenv("PICLOCK_RETRY_LIMIT", "2")
        monkeypatch.setenv("PICLOCK_TEST_MODE", "yes")
        monkeypatch.setenv("PICLOCK_LOG_LEVEL", "debug")

        config = Config.from_env()

        assert config.events_path == tmp_path / "events.txt"
        assert config.fetch_command == "python3 fetch.py --days 7"
        assert config.refresh_interval == 1800
        assert config.retry_limit == 2
        assert config.test_mode is True
        assert config.long_interval == config.test_refresh_interval
        assert config.log_level == "DEBUG"

    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("PICLOCK_RETRY_INTERVAL", "two minutes")

        assert Config.from_env().retry_interval == 120

    def test_non_positive_int_is_coerced(self, monkeypatch):
        monkeypatch.setenv("PICLOCK_RETRY_LIMIT", "0")

        assert Config.from_env().retry_limit == 1

    def test_startup_delay_kept_distinct_from_pre_fire_offset(self, monkeypatch):
        monkeypatch.setenv("PICLOCK_STARTUP_DELAY", "10")

        config = Config.from_env()

        assert config.startup_delay == 11
        assert config.startup_delay != config.pre_fire_offset

    @pytest.mark.parametrize(
        "name, attribute",
        [
            ("PICLOCK_STARTUP_DELAY", "startup_delay"),
            ("PICLOCK_RETRY_INTERVAL", "retry_interval"),
            ("PICLOCK_REFRESH_INTERVAL", "refresh_interval"),
        ],
    )
    def test_countdowns_raised_above_pre_fire_offset(self, monkeypatch, caplog, name, attribute):
        monkeypatch.setenv(name, "3")

        with caplog.at_level("WARNING", logger="piclock.config"):
            config = Config.from_env()

        assert getattr(config, attribute) == config.pre_fire_offset + 1
        assert name in caplog.text

    def test_defaults_raised_when_pre_fire_offset_is_large(self, monkeypatch):
        monkeypatch.setenv("PICLOCK_PRE_FIRE_OFFSET", "150")

        config = Config.from_env()

        assert config.startup_delay == 151
        assert config.retry_interval == 151
        assert config.refresh_interval == 3600

    def test_every_cycle_launches_with_short_retry_interval(self, monkeypatch, tmp_path, fake_display, fake_launcher):
        monkeypatch.setenv("PICLOCK_WORKDIR", str(tmp_path))
        monkeypatch.setenv("PICLOCK_RETRY_INTERVAL", "5")
        monkeypatch.setenv("PICLOCK_STARTUP_DELAY", "3")
        scheduler = RefreshScheduler(Config.from_env(), fake_display, launcher=fake_launcher)
        now = datetime(2024, 5, 1, 9, 30, 15)

        for _ in range(80):
            scheduler.tick(now)

        # Files never appear, so every cycle is a fast retry
        assert len(fake_display.entry_calls) >= 2
        assert fake_launcher.launch_count == len(fake_display.entry_calls)


class TestBuildConfig:
    """Tests for command-line overrides."""

    def test_test_flag(self):
        assert build_config(["-t"]).test_mode is True
        assert build_config([]).test_mode is False

    def test_workdir_and_log_level(self, tmp_path):
        config = build_config(["--workdir", str(tmp_path), "--log-level", "warning"])

        assert config.workdir == tmp_path
        assert config.log_level == "WARNING"

    def test_invalid_log_level_exits(self):
        with pytest.raises(SystemExit):
            build_config(["--log-level", "LOUD"])


class TestMain:
    """Tests for the CLI entry point."""

    def test_keyboard_interrupt_exits_cleanly(self):
        with patch("piclock.__main__.run_clock") as mock_run_clock, patch(
            "piclock.__main__.asyncio.run", side_effect=KeyboardInterrupt
        ):
            assert main(["-t"]) == 0

        assert mock_run_clock.call_args[0][0].test_mode is True
