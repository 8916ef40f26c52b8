"""Unit tests for the application shell."""

import asyncio
from types import SimpleNamespace
from unittest.mock import patch

import pygame
import pytest

from piclock.main import ClockApp
from piclock.renderer import CLOSE, REFRESH

pytestmark = pytest.mark.unit


@pytest.fixture
def app(config, fake_display) -> ClockApp:
    return ClockApp(config, renderer=fake_display)


def key_event(key: int) -> SimpleNamespace:
    return SimpleNamespace(type=pygame.KEYDOWN, key=key)


def click_event(pos: tuple) -> SimpleNamespace:
    return SimpleNamespace(type=pygame.MOUSEBUTTONDOWN, pos=pos)


class TestClockApp:
    """Tests for ClockApp tick and input handling."""

    def test_tick_advances_scheduler_and_renders(self, app, fake_display):
        app.tick()

        assert app.scheduler.countdown == app.config.startup_delay - 1
        assert fake_display.render_count == 1
        assert len(fake_display.clock_calls) == 1

    def test_tick_survives_render_error(self, app, fake_display):
        with patch.object(fake_display, "render", side_effect=RuntimeError("display gone")):
            app.tick()

        assert app.scheduler.countdown == app.config.startup_delay - 1

    def test_quit_event_stops_loop(self, app):
        app.running = True

        app.handle_events([SimpleNamespace(type=pygame.QUIT)])

        assert app.running is False

    def test_escape_and_q_stop_loop(self, app):
        for key in (pygame.K_ESCAPE, pygame.K_q):
            app.running = True
            app.handle_events([key_event(key)])
            assert app.running is False

    def test_r_key_requests_refresh(self, app):
        app.scheduler.countdown = 2000

        app.handle_events([key_event(pygame.K_r)])

        assert app.scheduler.countdown == app.config.pre_fire_offset + 1

    def test_refresh_button_requests_refresh(self, app, fake_display):
        fake_display.button_hits[(1200, 40)] = REFRESH
        app.scheduler.countdown = 2000

        app.handle_events([click_event((1200, 40)), click_event((1200, 40))])

        assert app.scheduler.countdown == app.config.pre_fire_offset + 1

    def test_close_button_stops_loop(self, app, fake_display):
        fake_display.button_hits[(30, 20)] = CLOSE
        app.running = True

        app.handle_events([click_event((500, 500)), click_event((30, 20))])

        assert app.running is False

    def test_shutdown_cleans_up_renderer(self, app, fake_display):
        app.shutdown()

        assert fake_display.cleaned_up is True
        assert app.running is False

    @pytest.mark.asyncio
    async def test_run_ticks_until_stopped(self, app, fake_display):
        def stop_after_two(events):
            if fake_display.render_count >= 2:
                app.running = False

        with patch("piclock.main.pygame.event.get", return_value=[]), patch(
            "piclock.main.TICK_SECONDS", 0.01
        ), patch.object(app, "handle_events", side_effect=stop_after_two):
            await asyncio.wait_for(app.run(), timeout=5)

        assert fake_display.render_count == 2
        assert app.scheduler.countdown == app.config.startup_delay - 2
