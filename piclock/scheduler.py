"""Refresh scheduler driving the clock display and calendar fetch.

Everything happens on the one-second tick:

- every tick the clock labels are updated and the countdown drops by one;
- at ``pre_fire_offset`` seconds to go the fetch command is launched;
- at zero the event file is parsed (or the failure classified), the five
  display slots are replaced and the countdown is re-armed.

The re-arm length depends on the outcome: the long interval after a good
read, the short retry interval after a failure, and the long interval again
once ``retry_limit`` consecutive failures have been seen.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Protocol

from piclock.config import Config
from piclock.event_parser import EventFileParser, NotFound
from piclock.failure_classifier import FailureClassifier, fetch_failed_entries
from piclock.fetch_launcher import FetchLauncher
from piclock.models import EventRecord, Tag, pad_records, to_display_pairs

logger = logging.getLogger(__name__)

WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class Display(Protocol):
    """Sink for everything the scheduler wants on screen."""

    def show_clock(self, time: str, day: str, date: str) -> None: ...

    def show_entries(self, entries: list[tuple[str, Tag]]) -> None: ...


class Launcher(Protocol):
    def launch(self) -> None: ...


class RefreshScheduler:
    """Countdown, retry and "today" state for the refresh engine.

    A single instance is created at startup and lives for the process
    lifetime. It is only mutated from ``tick()`` and ``request_refresh()``,
    both of which run on the host's timer thread.
    """

    def __init__(
        self,
        config: Config,
        display: Display,
        launcher: Optional[Launcher] = None,
        parser: Optional[EventFileParser] = None,
        classifier: Optional[FailureClassifier] = None,
    ):
        self.config = config
        self.display = display
        self.launcher = launcher if launcher is not None else FetchLauncher(config)
        self.parser = parser if parser is not None else EventFileParser()
        self.classifier = classifier if classifier is not None else FailureClassifier()

        self.countdown: int = config.startup_delay
        self.retry_count: int = 0
        self.today: str = ""
        self.entries: list[EventRecord] = []

        self._weekday: Optional[int] = None
        self._day_text = ""
        self._date_text = ""

    def tick(self, now: Optional[datetime] = None) -> None:
        """Advance the scheduler by one second."""
        if now is None:
            now = datetime.now()

        self._update_clock(now)

        self.countdown -= 1
        if self.countdown == self.config.pre_fire_offset:
            self._launch()
        if self.countdown <= 0:
            self._refresh_entries()

    def request_refresh(self) -> None:
        """Bring the next launch forward to the coming tick.

        Ignored while the current cycle's launch has already happened or is
        about to, so repeated requests never launch twice in one window.
        """
        if self.countdown <= self.config.pre_fire_offset + 1:
            logger.debug("Refresh requested with %ds to go; already pending", self.countdown)
            return
        logger.info("Manual refresh requested")
        self.countdown = self.config.pre_fire_offset + 1

    def _update_clock(self, now: datetime) -> None:
        if now.weekday() != self._weekday:
            self._weekday = now.weekday()
            self._day_text = WEEKDAYS[now.weekday()]
            self._date_text = now.strftime("%d-%m-%Y")
            self.today = now.strftime("%Y-%m-%d")
            logger.debug("Day changed: today=%s", self.today)

        self.display.show_clock(now.strftime("%H:%M:%S"), self._day_text, self._date_text)

    def _launch(self) -> None:
        if self.config.test_mode:
            logger.debug("Test mode: skipping calendar fetch")
            return
        self.launcher.launch()

    def _refresh_entries(self) -> None:
        result = self.parser.parse(self.config.events_path, self.today)

        if result is NotFound:
            records = self.classifier.classify(self.config.response_path)
            self.retry_count = min(self.retry_count + 1, self.config.retry_limit)
            if self.retry_count < self.config.retry_limit:
                self.countdown = self.config.retry_interval
                logger.info(
                    "Fetch failed (%d/%d); retrying in %ds",
                    self.retry_count,
                    self.config.retry_limit,
                    self.countdown,
                )
            else:
                self.countdown = self.config.long_interval
                logger.warning(
                    "Fetch failed %d times; next attempt in %ds",
                    self.retry_count,
                    self.countdown,
                )
        else:
            # An empty but readable file still resets the retry count
            records = pad_records(result) if result else fetch_failed_entries()
            self.retry_count = 0
            self.countdown = self.config.long_interval
            logger.info("Calendar refreshed with %d event(s); next in %ds", len(result), self.countdown)

        self.entries = records
        self.display.show_entries(to_display_pairs(records))
