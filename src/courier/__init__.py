"""Courier: themed, chunked feedback delivery for Discord bots.

Public API:
    :class:`FeedbackService` -- routes feedback to channels, interactions, DMs.
    :class:`DiscordRestTransport` -- ``aiohttp`` transport for the REST API.
    :class:`DiscordClientTransport` -- transport over a ``discord.py`` client.
"""

from courier.feedback import (
    DISCORD_DARK,
    DISCORD_LIGHT,
    ChannelInvocation,
    DeliveryContext,
    DMResolutionFailed,
    FeedbackError,
    FeedbackMessage,
    FeedbackScope,
    FeedbackService,
    FeedbackTheme,
    InteractionInvocation,
    NoContextAvailable,
    SendResult,
    Severity,
    TransportError,
)
from courier.transport import DiscordClientTransport, DiscordRestTransport

__version__ = "0.1.0"

__all__ = [
    "DISCORD_DARK",
    "DISCORD_LIGHT",
    "ChannelInvocation",
    "DMResolutionFailed",
    "DeliveryContext",
    "DiscordClientTransport",
    "DiscordRestTransport",
    "FeedbackError",
    "FeedbackMessage",
    "FeedbackScope",
    "FeedbackService",
    "FeedbackTheme",
    "InteractionInvocation",
    "NoContextAvailable",
    "SendResult",
    "Severity",
    "TransportError",
]
