"""Colour themes for feedback embeds.

A theme maps the five feedback severities onto embed colours.  Two themes
ship with the library, tuned for Discord's dark and light client
appearances; pick one with :func:`get_theme`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import discord


class Severity(Enum):
    """How a feedback message should be coloured."""

    INFO = "info"
    """Informational -- rendered in the theme's primary colour."""

    SUCCESS = "success"
    """Positive outcome."""

    NEUTRAL = "neutral"
    """Neither good nor bad -- rendered in the theme's secondary colour."""

    WARNING = "warning"
    """Something the user should look at."""

    ERROR = "error"
    """Failure -- rendered in the theme's fault/danger colour."""


@dataclass(frozen=True, slots=True)
class FeedbackTheme:
    """A named palette of embed colours.

    Attributes:
        name: Short identifier used in configuration (``"dark"``).
        primary: Colour for informational messages.
        secondary: Colour for neutral messages.
        success: Colour for positive messages.
        warning: Colour for warnings.
        fault_or_danger: Colour for errors.
    """

    name: str
    primary: discord.Colour
    secondary: discord.Colour
    success: discord.Colour
    warning: discord.Colour
    fault_or_danger: discord.Colour

    def colour_for(self, severity: Severity) -> discord.Colour:
        """Return the colour this theme uses for *severity*."""
        return {
            Severity.INFO: self.primary,
            Severity.SUCCESS: self.success,
            Severity.NEUTRAL: self.secondary,
            Severity.WARNING: self.warning,
            Severity.ERROR: self.fault_or_danger,
        }[severity]


DISCORD_DARK: FeedbackTheme = FeedbackTheme(
    name="dark",
    primary=discord.Colour(0x5865F2),
    secondary=discord.Colour(0x4F545C),
    success=discord.Colour(0x57F287),
    warning=discord.Colour(0xFEE75C),
    fault_or_danger=discord.Colour(0xED4245),
)
"""Theme matched to Discord's dark appearance."""

DISCORD_LIGHT: FeedbackTheme = FeedbackTheme(
    name="light",
    primary=discord.Colour(0x5865F2),
    secondary=discord.Colour(0xB9BBBE),
    success=discord.Colour(0x3BA55C),
    warning=discord.Colour(0xFAA61A),
    fault_or_danger=discord.Colour(0xD83C3E),
)
"""Theme matched to Discord's light appearance."""

THEMES: dict[str, FeedbackTheme] = {
    theme.name: theme for theme in (DISCORD_DARK, DISCORD_LIGHT)
}


def get_theme(name: str) -> FeedbackTheme:
    """Look up a built-in theme by name (case-insensitive).

    Raises:
        KeyError: If no theme with that name exists.
    """
    try:
        return THEMES[name.strip().lower()]
    except KeyError:
        raise KeyError(
            f"Unknown feedback theme {name!r}; expected one of {sorted(THEMES)}"
        ) from None
