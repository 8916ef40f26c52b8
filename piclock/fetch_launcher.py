"""Detached launcher for the external calendar fetch command."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional

from piclock.config import Config

logger = logging.getLogger(__name__)


class FetchLauncher:
    """Start the fetch command without waiting for it.

    The fetch runs in its own session with stderr redirected to the
    response file. The previous cycle's response and event files are
    removed first so the next parse cannot pick up stale output. Nothing
    here raises to the caller; a failed start only shows up later as a
    missing event file.
    """

    def __init__(self, config: Config):
        self.config = config
        self._process: Optional[subprocess.Popen] = None

    def launch(self) -> None:
        """Remove stale output and spawn the fetch command.

        A no-op while the previous fetch is still running; its output is
        what the coming parse will read.
        """
        if self._previous_running():
            logger.warning(
                "Previous fetch (pid %s) still running; not launching another",
                self._process.pid,
            )
            return

        for path in (self.config.response_path, self.config.events_path):
            self._remove(path)

        try:
            with open(self.config.response_path, "wb") as response:
                self._process = subprocess.Popen(
                    self.config.fetch_command,
                    shell=True,  # nosec: B602 - operator-configured command line
                    cwd=self.config.workdir,
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=response,
                    start_new_session=True,
                )
        except OSError:
            logger.exception("Failed to launch fetch command: %s", self.config.fetch_command)
            return

        logger.info("Launched calendar fetch (pid %s): %s", self._process.pid, self.config.fetch_command)

    def _previous_running(self) -> bool:
        if self._process is None:
            return False
        if self._process.poll() is None:
            return True
        # Collect the exit status of a finished child so it does not linger
        logger.debug(
            "Previous fetch (pid %s) exited with %s",
            self._process.pid,
            self._process.returncode,
        )
        self._process = None
        return False

    @staticmethod
    def _remove(path: Path) -> None:
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove %s: %s", path, e)
