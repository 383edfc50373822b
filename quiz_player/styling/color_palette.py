"""Color palette for the quiz player supporting light and dark themes."""

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
    """Centralized color definitions for the player window."""

    TEXT_PRIMARY = ThemeColors(light="#000000", dark="#F5F5F5")
    TEXT_SECONDARY = ThemeColors(light="#666666", dark="#AAAAAA")

    BACKGROUND_PRIMARY = ThemeColors(light="#FFFFFF", dark="#1E1E1E")
    BACKGROUND_SECONDARY = ThemeColors(light="#F5F5F5", dark="#2D2D2D")

    BORDER_PRIMARY = ThemeColors(light="#D1D1D1", dark="#555555")

    BUTTON_SECONDARY_BG = ThemeColors(light="#F5F5F5", dark="#3A3A3A")
    BUTTON_HOVER_BG = ThemeColors(light="#E8E8E8", dark="#505050")

    # Option buttons once the question is answered
    OPTION_CORRECT_BG = ThemeColors(light="#107C10", dark="#6FCF6F")
    OPTION_WRONG_BG = ThemeColors(light="#D13438", dark="#FF6B6B")
    OPTION_MARKED_TEXT = ThemeColors(light="#FFFFFF", dark="#000000")

    # Status line colors
    NOTE = ThemeColors(light="#8A6D00", dark="#FFC83D")
    ERROR = ThemeColors(light="#D13438", dark="#FF6B6B")
