"""Shared fixtures for piclock tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

import pytest

from piclock.config import Config
from piclock.models import Tag


class FakeDisplay:
    """Display sink that records what it was asked to show."""

    def __init__(self) -> None:
        self.clock_calls: list[tuple[str, str, str]] = []
        self.entry_calls: list[list[tuple[str, Tag]]] = []
        self.render_count = 0
        self.cleaned_up = False
        self.button_hits: dict[tuple[int, int], str] = {}

    def show_clock(self, time: str, day: str, date: str) -> None:
        self.clock_calls.append((time, day, date))

    def show_entries(self, entries: list[tuple[str, Tag]]) -> None:
        self.entry_calls.append(list(entries))

    def render(self) -> None:
        self.render_count += 1

    def button_at(self, pos: tuple[int, int]) -> Any:
        return self.button_hits.get(pos)

    def cleanup(self) -> None:
        self.cleaned_up = True

    @property
    def last_entries(self) -> list[tuple[str, Tag]]:
        return self.entry_calls[-1]


class FakeLauncher:
    """Launcher that counts launches instead of spawning a process."""

    def __init__(self) -> None:
        self.launch_count = 0

    def launch(self) -> None:
        self.launch_count += 1


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config rooted in a temporary working directory with short timings."""
    return Config(
        workdir=tmp_path,
        fetch_command="true",
        refresh_interval=3600,
        retry_interval=120,
        retry_limit=4,
        pre_fire_offset=10,
        startup_delay=25,
    )


@pytest.fixture
def fake_display() -> FakeDisplay:
    return FakeDisplay()


@pytest.fixture
def fake_launcher() -> FakeLauncher:
    return FakeLauncher()


@pytest.fixture
def fixed_now() -> datetime:
    """Wednesday 1 May 2024, mid-morning local time."""
    return datetime(2024, 5, 1, 9, 30, 15)


def pytest_configure(config: Any) -> None:
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "smoke: Basic smoke tests")
