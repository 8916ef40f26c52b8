"""Command-line entry for the Pi clock.

Usage:
    python -m piclock [-t] [--workdir DIR] [--log-level LEVEL]
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import sys
from pathlib import Path
from typing import Optional

from piclock.config import Config
from piclock.main import main as run_clock


def _create_parser() -> argparse.ArgumentParser:
    """Create argument parser for the piclock CLI.

    Returns:
        Configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="piclock",
        description="Pi-Clock - wall clock with the next five calendar events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m piclock                         # Run with settings from PICLOCK_* env vars
  python -m piclock -t                      # Test mode: no fetch, refresh every minute
  python -m piclock --workdir ~/calendar    # Read events from another directory
        """,
    )

    parser.add_argument(
        "-t",
        "--test",
        action="store_true",
        help="Test mode: never launch the fetch command and refresh every 60 seconds",
    )
    parser.add_argument(
        "--workdir",
        type=Path,
        metavar="DIR",
        help="Directory holding the fetch script and its output (default: PICLOCK_WORKDIR or /home/pi/calendar)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help="Logging level (default: PICLOCK_LOG_LEVEL or INFO)",
    )

    return parser


def build_config(argv: Optional[list[str]] = None) -> Config:
    """Load the environment config and apply command-line overrides."""
    args = _create_parser().parse_args(argv)
    config = Config.from_env()

    if args.test:
        config.test_mode = True
    if args.workdir is not None:
        config.workdir = args.workdir.expanduser()
    if args.log_level:
        config.log_level = args.log_level

    return config


def main(argv: Optional[list[str]] = None) -> int:
    """Run the piclock CLI."""
    config = build_config(argv)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(run_clock(config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
