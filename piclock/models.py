"""Display-ready records produced by the refresh engine.

Each record is one of four variants and carries a highlight tag used by the
renderer to pick a colour. Records are immutable; every parse produces a
fresh list that replaces the previous one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class Tag(str, Enum):
    """Highlight tag for a display slot."""

    TODAY = "today"  # emphasized
    OTHER = "other"  # normal
    ERROR = "error"  # alert


ALL_DAY_MARKER = "all day"


@dataclass(frozen=True)
class AllDay:
    """Event with no time component."""

    date: str
    text: str
    tag: Tag = Tag.OTHER

    @property
    def description(self) -> str:
        return self.text

    @property
    def display_text(self) -> str:
        # Two spaces after the marker line the text up with timed entries
        return f"{self.date} {ALL_DAY_MARKER}  {self.text}"


@dataclass(frozen=True)
class Timed:
    """Event with a start time (HH:MM)."""

    date: str
    time: str
    text: str
    tag: Tag = Tag.OTHER

    @property
    def description(self) -> str:
        return f"{self.time} {self.text}"

    @property
    def display_text(self) -> str:
        return f"{self.date} {self.description}"


@dataclass(frozen=True)
class ErrorLine:
    """Diagnostic line passed through verbatim from the fetcher."""

    text: str
    tag: Tag = Tag.ERROR

    @property
    def display_text(self) -> str:
        return self.text


@dataclass(frozen=True)
class Placeholder:
    """Synthetic entry used for padding or failure reports."""

    text: str
    tag: Tag = Tag.OTHER

    @property
    def display_text(self) -> str:
        return self.text


EventRecord = Union[AllDay, Timed, ErrorLine, Placeholder]

SLOT_COUNT = 5
PAD_TEXT = "**"


def pad_records(records: list[EventRecord], size: int = SLOT_COUNT) -> list[EventRecord]:
    """Pad (or truncate) a record list to exactly ``size`` entries.

    Padding entries are normal-tag placeholders so the display always has
    every slot filled.
    """
    padded = list(records[:size])
    while len(padded) < size:
        padded.append(Placeholder(PAD_TEXT, Tag.OTHER))
    return padded


def to_display_pairs(records: list[EventRecord]) -> list[tuple[str, Tag]]:
    """Convert records into the ``(text, tag)`` pairs the display consumes."""
    return [(record.display_text, record.tag) for record in records]
