"""Configuration management for the Pi clock.

Loads configuration from environment variables, using the same
dataclass-with-defaults pattern as the rest of the project.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_WORKDIR = Path("/home/pi/calendar")


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    """Read an integer environment variable, falling back on bad input."""
    raw = os.getenv(name)
    value = default
    if raw is not None and raw != "":
        try:
            value = int(raw)
        except ValueError:
            logger.warning("%s=%r is not an int; using default %d", name, raw, default)
    if value < minimum:
        logger.warning("%s=%d below minimum; coercing to %d", name, value, minimum)
        return minimum
    return value


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    """Clock and refresh-engine configuration.

    Timings are in seconds (one tick per second). ``pre_fire_offset`` is the
    countdown value at which the fetch is launched, so it is also the time
    the fetch is given to finish before its output is read.
    """

    # Fetch settings
    workdir: Path = field(default_factory=lambda: DEFAULT_WORKDIR)
    fetch_command: str = "python clock.py"
    events_file: str = "events.txt"
    response_file: str = "response.edc"

    # Refresh settings
    refresh_interval: int = 60 * 60  # normal cadence after a parse
    retry_interval: int = 2 * 60  # fast retry after a failed fetch
    retry_limit: int = 4  # failures before falling back to refresh_interval
    pre_fire_offset: int = 10
    startup_delay: int = 25  # first launch 15s after start
    test_refresh_interval: int = 60

    # Test mode: never launch the fetch, refresh once a minute
    test_mode: bool = False

    # Display settings
    display_width: int = 1440
    display_height: int = 900
    font_dir: Path | None = None

    # Logging
    log_level: str = "INFO"

    @property
    def events_path(self) -> Path:
        return self.workdir / self.events_file

    @property
    def response_path(self) -> Path:
        return self.workdir / self.response_file

    @property
    def long_interval(self) -> int:
        """Countdown used after a successful parse or when retries run out."""
        return self.test_refresh_interval if self.test_mode else self.refresh_interval

    @classmethod
    def from_env(cls) -> Config:
        """Load configuration from environment variables.

        Environment Variables:
            PICLOCK_WORKDIR - Directory holding the fetch script and its output
            PICLOCK_FETCH_COMMAND - Shell command that runs the fetch
            PICLOCK_EVENTS_FILE - Event file name (relative to workdir)
            PICLOCK_RESPONSE_FILE - Response file name (relative to workdir)
            PICLOCK_REFRESH_INTERVAL - Seconds between normal refreshes
            PICLOCK_RETRY_INTERVAL - Seconds between fast retries
            PICLOCK_RETRY_LIMIT - Failures before reverting to the normal cadence
            PICLOCK_PRE_FIRE_OFFSET - Seconds between launch and parse
            PICLOCK_STARTUP_DELAY - Seconds before the first parse
            PICLOCK_DISPLAY_WIDTH - Display width in pixels
            PICLOCK_DISPLAY_HEIGHT - Display height in pixels
            PICLOCK_FONT_DIR - Directory holding DejaVuSans.ttf
            PICLOCK_LOG_LEVEL - Logging level (DEBUG, INFO, WARNING, ERROR)
            PICLOCK_TEST_MODE - Set to 1/true/yes to disable fetching

        Returns:
            Config instance with values from environment
        """
        defaults = cls()

        workdir = Path(os.getenv("PICLOCK_WORKDIR", str(defaults.workdir)))
        font_dir_str = os.getenv("PICLOCK_FONT_DIR")

        pre_fire_offset = _env_int("PICLOCK_PRE_FIRE_OFFSET", defaults.pre_fire_offset, minimum=1)
        # Every countdown must start above the offset or its cycle never launches
        cycle_minimum = pre_fire_offset + 1
        startup_delay = _env_int("PICLOCK_STARTUP_DELAY", defaults.startup_delay, minimum=cycle_minimum)
        refresh_interval = _env_int("PICLOCK_REFRESH_INTERVAL", defaults.refresh_interval, minimum=cycle_minimum)
        retry_interval = _env_int("PICLOCK_RETRY_INTERVAL", defaults.retry_interval, minimum=cycle_minimum)

        return cls(
            workdir=workdir,
            fetch_command=os.getenv("PICLOCK_FETCH_COMMAND", defaults.fetch_command),
            events_file=os.getenv("PICLOCK_EVENTS_FILE", defaults.events_file),
            response_file=os.getenv("PICLOCK_RESPONSE_FILE", defaults.response_file),
            refresh_interval=refresh_interval,
            retry_interval=retry_interval,
            retry_limit=_env_int("PICLOCK_RETRY_LIMIT", defaults.retry_limit, minimum=1),
            pre_fire_offset=pre_fire_offset,
            startup_delay=startup_delay,
            test_mode=_env_bool("PICLOCK_TEST_MODE"),
            display_width=_env_int("PICLOCK_DISPLAY_WIDTH", defaults.display_width, minimum=1),
            display_height=_env_int("PICLOCK_DISPLAY_HEIGHT", defaults.display_height, minimum=1),
            font_dir=Path(font_dir_str) if font_dir_str else None,
            log_level=os.getenv("PICLOCK_LOG_LEVEL", defaults.log_level).upper(),
        )
