"""Build feedback services from configuration."""

from __future__ import annotations

from courier.config import CourierSettings
from courier.feedback.service import FeedbackService
from courier.feedback.themes import get_theme
from courier.transport.base import FeedbackTransport
from courier.transport.rest import DiscordRestTransport


def create_rest_transport(settings: CourierSettings) -> DiscordRestTransport:
    """Return a REST transport configured from *settings*."""
    return DiscordRestTransport(
        token=settings.DISCORD_TOKEN,
        base_url=settings.DISCORD_API_BASE_URL,
        timeout=settings.HTTP_TIMEOUT,
        max_retries=settings.HTTP_MAX_RETRIES,
    )


def create_feedback_service(
    settings: CourierSettings,
    transport: FeedbackTransport | None = None,
) -> FeedbackService:
    """Return a :class:`FeedbackService` using the configured theme and threshold.

    When *transport* is omitted a :class:`DiscordRestTransport` is created
    and the service owns it; close the service (or use it with
    ``async with``) to release its HTTP session.
    """
    if transport is None:
        transport = create_rest_transport(settings)
    return FeedbackService(
        transport,
        theme=get_theme(settings.FEEDBACK_THEME),
        chunk_threshold=settings.FEEDBACK_CHUNK_THRESHOLD,
    )
