"""Pi-Clock - wall clock and calendar display for a Raspberry Pi screen.

Shows the local time, day and date with the next five calendar events
below them. An external fetch script (``clock.py``) writes the events to a
text file; the refresh engine launches it once an hour, reads its output
and falls back to on-screen diagnostics when the fetch fails.

Architecture:
- models.py: Display records and highlight tags
- event_parser.py: Fixed-width scanner for the event file
- failure_classifier.py: Response-file diagnostics and remediation text
- fetch_launcher.py: Detached launch of the fetch command
- scheduler.py: Countdown/retry state machine driven by the 1s tick
- renderer.py: Pygame display
- config.py: Configuration loading from environment
- main.py: Main event loop and coordinator

Usage:
    python -m piclock [-t]

Environment Variables:
    PICLOCK_WORKDIR - Directory holding clock.py, events.txt and response.edc
    SDL_VIDEODRIVER - SDL video driver (kmsdrm or x11)
"""

__version__ = "1.0.0"

from piclock.config import Config

__all__ = ["Config"]
