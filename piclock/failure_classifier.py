"""Substitute display entries for when the event file is missing.

The fetcher writes its diagnostic stream to the response file. When the
event file could not be read, that stream is searched for the OAuth
"token expired" message; if found the operator gets a fixed remediation
script, otherwise a single generic failure line.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

from piclock.models import EventRecord, Placeholder, Tag, pad_records

logger = logging.getLogger(__name__)

TOKEN_EXPIRED_MARKER: Final = "Token has been expired"

FETCH_FAILED_TEXT: Final = "** Data failed to fetch **"

TOKEN_REMEDIATION_SCRIPT: Final = (
    "** Token refresh time **",
    "   cd calendar",
    "   rm token.json",
    "   python clock.py",
    "   wait for the browser and agree",
)


def fetch_failed_entries() -> list[EventRecord]:
    """Generic failure report padded to a full display."""
    return pad_records([Placeholder(FETCH_FAILED_TEXT, Tag.ERROR)])


class FailureClassifier:
    """Classify a failed fetch from its response file."""

    def __init__(self, marker: str = TOKEN_EXPIRED_MARKER):
        self.marker = marker

    def token_expired(self, response_path: Path | str) -> bool:
        """Return True if the response file mentions an expired token.

        An unreadable or missing response file counts as "no".
        """
        try:
            with open(response_path, encoding="utf-8", errors="replace") as handle:
                return any(self.marker in line for line in handle)
        except OSError as e:
            logger.debug("Response file %s not readable: %s", response_path, e)
            return False

    def classify(self, response_path: Path | str) -> list[EventRecord]:
        """Build the five display entries for a failed fetch.

        Args:
            response_path: Location of the fetcher's diagnostic output

        Returns:
            Exactly five records: the remediation script when the token has
            expired, otherwise the generic failure line plus padding
        """
        if self.token_expired(response_path):
            logger.warning("Calendar token has expired; operator action needed")
            script = [Placeholder(text, Tag.ERROR) for text in TOKEN_REMEDIATION_SCRIPT]
            return pad_records(script)

        logger.warning("Calendar fetch failed; no event file produced")
        return fetch_failed_entries()
