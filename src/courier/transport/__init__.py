"""Transports that carry feedback embeds to Discord."""

from courier.transport.base import DMChannel, FeedbackTransport, SentMessage
from courier.transport.client import DiscordClientTransport
from courier.transport.rest import DEFAULT_BASE_URL, DiscordHTTPError, DiscordRestTransport

__all__ = [
    "DEFAULT_BASE_URL",
    "DMChannel",
    "DiscordClientTransport",
    "DiscordHTTPError",
    "DiscordRestTransport",
    "FeedbackTransport",
    "SentMessage",
]
