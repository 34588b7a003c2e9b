"""Color palette for MovieQuiz supporting light and dark themes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class Theme(Enum):
    """Application theme options."""
    LIGHT = auto()
    DARK = auto()


@dataclass(frozen=True)
class ThemeColors:
    """Color definitions for a specific theme."""
    light: str
    dark: str

    def get(self, theme: Theme) -> str:
        """Get color value for the specified theme."""
        return self.light if theme == Theme.LIGHT else self.dark


class ColorPalette:
    """Centralized color definitions for the application."""

    # Text colors
    TEXT_PRIMARY = ThemeColors(
        light="#1A1B22",      # Near black
        dark="#FFFFFF"        # White
    )

    TEXT_SECONDARY = ThemeColors(
        light="#5E5F66",
        dark="#AEAFB4"
    )

    # Background colors
    BACKGROUND_PRIMARY = ThemeColors(
        light="#FFFFFF",
        dark="#1A1B22"
    )

    POSTER_BACKGROUND = ThemeColors(
        light="#E8E8E8",
        dark="#3B3B3B"
    )

    # Answer feedback
    ANSWER_CORRECT = ThemeColors(
        light="#60C28E",      # Green
        dark="#60C28E"
    )

    ANSWER_WRONG = ThemeColors(
        light="#F56B6C",      # Red
        dark="#F56B6C"
    )

    # Button colors
    BUTTON_BG = ThemeColors(
        light="#1A1B22",
        dark="#FFFFFF"
    )

    BUTTON_TEXT = ThemeColors(
        light="#FFFFFF",
        dark="#1A1B22"
    )

    BUTTON_HOVER_BG = ThemeColors(
        light="#3B3B3B",
        dark="#E8E8E8"
    )

    BUTTON_DISABLED_BG = ThemeColors(
        light="#AEAFB4",
        dark="#5E5F66"
    )
