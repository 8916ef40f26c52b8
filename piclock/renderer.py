"""Pygame-based renderer for the Pi clock display.

Draws the fixed layout: Close/Refresh buttons along the top, a large
HH:MM:SS clock, the day and date beneath it and five calendar slots at the
bottom. The renderer only stores what the scheduler hands it and draws it;
it does no parsing or scheduling.
"""

from __future__ import annotations

import logging
import os
import platform
from pathlib import Path
from typing import Optional

import pygame

from piclock.config import Config
from piclock.models import SLOT_COUNT, Tag

logger = logging.getLogger(__name__)

COLORS = {
    "background": (0, 0, 0),
    "time": (255, 255, 255),  # white
    "day": (124, 252, 0),  # lawngreen
    "highlight": (255, 0, 0),  # red
    "normal": (65, 105, 225),  # royalblue
    "button": (0, 0, 255),
    "button_text": (255, 255, 255),
}

TAG_COLORS = {
    Tag.TODAY: COLORS["highlight"],
    Tag.ERROR: COLORS["highlight"],
    Tag.OTHER: COLORS["normal"],
}

# Positions for the 1440x900 reference layout
CLOSE_BUTTON_POS = (25, 15)
REFRESH_BUTTON_POS = (1140, 15)
TIME_POS = (100, 70)
DAY_POS = (95, 320)
DATE_POS = (720, 320)
SLOT_ORIGIN = (60, 455)
SLOT_SPACING = 70
BUTTON_PADDING = 12

CLOSE = "close"
REFRESH = "refresh"


class ClockRenderer:
    """Direct rendering of the clock layout using pygame.

    Implements the scheduler's display sink: ``show_clock`` and
    ``show_entries`` record state, ``render`` draws a frame.
    """

    def __init__(self, config: Config):
        """Initialize pygame renderer.

        Args:
            config: Configuration instance
        """
        self.config = config
        self.width = config.display_width
        self.height = config.display_height

        self.time_text = ""
        self.day_text = ""
        self.date_text = ""
        self.entries: list[tuple[str, Tag]] = [("", Tag.OTHER)] * SLOT_COUNT

        self.buttons: dict[str, pygame.Rect] = {}

        self._init_pygame()
        self._load_fonts()

        logger.info("Renderer initialized: %dx%d display", self.width, self.height)

    def _init_pygame(self) -> None:
        """Initialize pygame, using the framebuffer on Linux when available."""
        if not os.environ.get("SDL_VIDEODRIVER") and platform.system() == "Linux" and not os.environ.get("DISPLAY"):
            os.environ["SDL_VIDEODRIVER"] = "kmsdrm"
            logger.debug("SDL_VIDEODRIVER not set and no X display, using kmsdrm")

        pygame.init()

        try:
            self.screen = pygame.display.set_mode((self.width, self.height), pygame.FULLSCREEN)
            logger.info("Fullscreen display created")
        except pygame.error as e:
            logger.warning("Failed to create fullscreen display, falling back to windowed: %s", e)
            self.screen = pygame.display.set_mode((self.width, self.height))

        pygame.display.set_caption("Pi-Clock")

    def _load_fonts(self) -> None:
        """Load fonts, from ``config.font_dir`` if set, else pygame's default."""
        font_path: Optional[str] = None
        if self.config.font_dir:
            regular_font = Path(self.config.font_dir) / "DejaVuSans.ttf"
            if not regular_font.exists():
                raise FileNotFoundError(f"Regular font not found: {regular_font}")
            font_path = str(regular_font)

        self.fonts = {
            "time": pygame.font.Font(font_path, 250),
            "day": pygame.font.Font(font_path, 100),
            "slot": pygame.font.Font(font_path, 60),
            "button": pygame.font.Font(font_path, 50),
        }
        logger.debug("Fonts loaded from: %s", font_path or "pygame default")

    def show_clock(self, time: str, day: str, date: str) -> None:
        self.time_text = time
        self.day_text = day
        self.date_text = date

    def show_entries(self, entries: list[tuple[str, Tag]]) -> None:
        self.entries = list(entries)

    def button_at(self, pos: tuple[int, int]) -> Optional[str]:
        """Return the name of the button under ``pos``, if any."""
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def render(self) -> None:
        """Draw a complete frame."""
        self.screen.fill(COLORS["background"])

        self.buttons[CLOSE] = self._draw_button("Close", CLOSE_BUTTON_POS)
        self.buttons[REFRESH] = self._draw_button("Refresh", REFRESH_BUTTON_POS)

        self._draw_text(self.time_text, "time", COLORS["time"], TIME_POS)
        self._draw_text(self.day_text, "day", COLORS["day"], DAY_POS)
        self._draw_text(self.date_text, "day", COLORS["day"], DATE_POS)

        x, y = SLOT_ORIGIN
        for index, (text, tag) in enumerate(self.entries[:SLOT_COUNT]):
            self._draw_text(text, "slot", TAG_COLORS.get(tag, COLORS["normal"]), (x, y + index * SLOT_SPACING))

        pygame.display.flip()

    def _draw_text(self, text: str, font: str, color: tuple[int, int, int], pos: tuple[int, int]) -> None:
        if not text:
            return
        surface = self.fonts[font].render(text, True, color)
        self.screen.blit(surface, pos)

    def _draw_button(self, label: str, pos: tuple[int, int]) -> pygame.Rect:
        text_surf = self.fonts["button"].render(label, True, COLORS["button_text"])
        rect = pygame.Rect(
            pos[0],
            pos[1],
            text_surf.get_width() + 2 * BUTTON_PADDING,
            text_surf.get_height() + 2 * BUTTON_PADDING,
        )
        pygame.draw.rect(self.screen, COLORS["button"], rect, border_radius=5)
        pygame.draw.rect(self.screen, COLORS["button_text"], rect, width=5, border_radius=5)
        self.screen.blit(text_surf, (pos[0] + BUTTON_PADDING, pos[1] + BUTTON_PADDING))
        return rect

    def cleanup(self) -> None:
        """Clean up pygame resources."""
        pygame.quit()
        logger.debug("Renderer cleaned up")
