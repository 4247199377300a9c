"""Plain feedback message values."""

from __future__ import annotations

from dataclasses import dataclass

import discord


@dataclass(frozen=True, slots=True)
class FeedbackMessage:
    """Text paired with the colour it should be rendered in.

    Attributes:
        text: The message body.  May be longer than a single embed allows;
            the service chunks it on send.
        colour: Embed accent colour, normally taken from a
            :class:`~courier.feedback.themes.FeedbackTheme`.
    """

    text: str
    colour: discord.Colour
