"""Main entry point for the Pi clock.

This module wires the refresh scheduler to the pygame renderer and drives
both from a one-second asyncio ticker.
"""

from __future__ import annotations

import asyncio
import logging
import signal
import sys
from typing import Any, Optional

import pygame

from piclock.config import Config
from piclock.renderer import CLOSE, REFRESH, ClockRenderer
from piclock.scheduler import RefreshScheduler

logger = logging.getLogger(__name__)

TICK_SECONDS = 1.0


class ClockApp:
    """Main application coordinator.

    Owns the renderer and the single scheduler instance, calls
    ``scheduler.tick()`` once a second and turns pygame input into
    "close" and "refresh now" requests.
    """

    def __init__(self, config: Config, renderer: Optional[Any] = None):
        """Initialize the application.

        Args:
            config: Configuration instance
            renderer: Display sink; a ``ClockRenderer`` is created if omitted
        """
        self.config = config
        self.running = False

        self.renderer = renderer if renderer is not None else ClockRenderer(config)
        self.scheduler = RefreshScheduler(config, self.renderer)

        logger.info("Pi clock initialized")
        logger.info("Working directory: %s", config.workdir)
        logger.info("Fetch command: %s", config.fetch_command)
        logger.info("Refresh interval: %ds", config.long_interval)
        if config.test_mode:
            logger.info("Test mode: calendar fetch disabled")

    async def run(self) -> None:
        """Tick once per second until stopped."""
        self.running = True
        logger.info("Starting clock loop")

        loop = asyncio.get_running_loop()
        next_tick = loop.time()

        while self.running:
            self.tick()
            self.handle_events(pygame.event.get())

            next_tick += TICK_SECONDS
            delay = next_tick - loop.time()
            if delay < 0:
                # Fell behind (suspend, slow frame); resynchronize
                next_tick = loop.time()
                delay = 0
            await asyncio.sleep(delay)

        logger.info("Clock loop stopped")

    def tick(self) -> None:
        """Run one scheduler tick and redraw; never raises."""
        try:
            self.scheduler.tick()
            self.renderer.render()
        except Exception:
            logger.exception("Error during tick")

    def handle_events(self, events: list[Any]) -> None:
        """Handle quit, close-button and refresh input."""
        for event in events:
            if event.type == pygame.QUIT:
                logger.info("Received QUIT event")
                self.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_ESCAPE, pygame.K_q):
                    logger.info("Received quit key")
                    self.running = False
                elif event.key == pygame.K_r:
                    self.scheduler.request_refresh()
            elif event.type == pygame.MOUSEBUTTONDOWN:
                button = self.renderer.button_at(event.pos)
                if button == CLOSE:
                    logger.info("Close button pressed")
                    self.running = False
                elif button == REFRESH:
                    self.scheduler.request_refresh()

    def shutdown(self) -> None:
        """Stop the loop and release the display."""
        logger.info("Shutting down...")
        self.running = False
        self.renderer.cleanup()
        logger.info("Shutdown complete")


def setup_logging(config: Config) -> None:
    """Set up logging configuration.

    Args:
        config: Configuration instance
    """
    log_level = getattr(logging, config.log_level, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )

    logger.info("Logging configured: level=%s", config.log_level)


async def main(config: Optional[Config] = None) -> None:
    """Main entry point."""
    if config is None:
        config = Config.from_env()

    setup_logging(config)

    app = ClockApp(config)

    loop = asyncio.get_running_loop()

    def signal_handler(sig: Any) -> None:
        logger.info("Received signal: %s", sig)
        app.running = False

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))  # type: ignore[misc]

    try:
        await app.run()
    except KeyboardInterrupt:
        logger.info("Received KeyboardInterrupt")
    finally:
        app.shutdown()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except Exception:
        logger.exception("Fatal error")
        sys.exit(1)
