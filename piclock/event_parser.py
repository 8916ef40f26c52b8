"""Fixed-width scanner for the fetcher's event file.

The event file holds one entry per line in one of these forms::

    2022-10-13 Exercise
    2022-10-13T12:00:00+01:00 Lunch with Robin
    2022-11-01T21:00:00Z Recycling
    * something bad happened

Only the first five lines are ever shown. Field positions are fixed; the
scanner does not validate them, so malformed lines come out garbled rather
than raising.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final, Union

from piclock.models import SLOT_COUNT, AllDay, ErrorLine, EventRecord, Tag, Timed

logger = logging.getLogger(__name__)

ERROR_SENTINEL: Final = "*"
TIME_SEPARATOR: Final = "T"

# Field widths
DATE_WIDTH: Final = 10  # YYYY-MM-DD
CLOCK_WIDTH: Final = 8  # HH:MM:SS
SHOWN_TIME_WIDTH: Final = 5  # HH:MM
OFFSET_SUFFIX_WIDTH: Final = 7  # "+01:00 "
UTC_SUFFIX_WIDTH: Final = 2  # "Z "

TIME_START: Final = DATE_WIDTH + 1
SUFFIX_START: Final = TIME_START + CLOCK_WIDTH
ALL_DAY_TEXT_START: Final = DATE_WIDTH + 1


class NotFoundType:
    """Sentinel returned when the event file cannot be opened."""

    _instance: NotFoundType | None = None

    def __new__(cls) -> NotFoundType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NotFound"

    def __bool__(self) -> bool:
        return False


NotFound: Final = NotFoundType()

ParseResult = Union[list[EventRecord], NotFoundType]


def _strip_terminator(line: str) -> str:
    return line.rstrip("\r\n")


def parse_line(line: str, today: str) -> EventRecord:
    """Scan a single event-file line into a record.

    Args:
        line: Raw line, with or without its terminator
        today: Cached ``YYYY-MM-DD`` date used for highlighting

    Returns:
        ``ErrorLine`` for sentinel lines, otherwise ``Timed`` or ``AllDay``
    """
    line = _strip_terminator(line)

    if line.startswith(ERROR_SENTINEL):
        return ErrorLine(line)

    date = line[:DATE_WIDTH]
    # Raw prefix comparison; a malformed date just never matches today
    tag = Tag.TODAY if date == today else Tag.OTHER

    if line[DATE_WIDTH : DATE_WIDTH + 1] != TIME_SEPARATOR:
        return AllDay(date=date, text=line[ALL_DAY_TEXT_START:], tag=tag)

    start_time = line[TIME_START : TIME_START + SHOWN_TIME_WIDTH]
    if line[SUFFIX_START : SUFFIX_START + 1] in ("+", "-"):
        text_start = SUFFIX_START + OFFSET_SUFFIX_WIDTH
    else:
        text_start = SUFFIX_START + UTC_SUFFIX_WIDTH

    return Timed(date=date, time=start_time, text=line[text_start:], tag=tag)


class EventFileParser:
    """Turn the event file into at most five display records."""

    def __init__(self, max_lines: int = SLOT_COUNT):
        self.max_lines = max_lines

    def parse(self, path: Path | str, today: str) -> ParseResult:
        """Read and scan the first lines of the event file.

        Args:
            path: Event file location
            today: Cached ``YYYY-MM-DD`` date used for highlighting

        Returns:
            List of records (possibly empty), or ``NotFound`` when the file
            cannot be opened
        """
        records: list[EventRecord] = []
        try:
            with open(path, encoding="utf-8", errors="replace") as handle:
                for line in handle:
                    if len(records) >= self.max_lines:
                        break
                    records.append(parse_line(line, today))
        except OSError as e:
            logger.debug("Event file %s not readable: %s", path, e)
            return NotFound

        logger.debug("Parsed %d event line(s) from %s", len(records), path)
        return records
