"""Feedback delivery: chunking, themes, contexts and the routing service.

Public API:
    :class:`FeedbackService` -- routes feedback to channels, interactions, DMs.
    :class:`FeedbackScope` -- a service bound to one invocation's context.
    :class:`SendResult` -- success/failure value returned by every send.
"""

from courier.feedback.chunking import (
    DEFAULT_CHUNK_THRESHOLD,
    chunk_content,
    create_content_chunks,
    create_feedback_embed,
)
from courier.feedback.context import (
    ChannelInvocation,
    DeliveryContext,
    InteractionInvocation,
)
from courier.feedback.errors import (
    DMResolutionFailed,
    FeedbackError,
    NoContextAvailable,
    TransportError,
)
from courier.feedback.messages import FeedbackMessage
from courier.feedback.results import SendResult
from courier.feedback.service import FeedbackScope, FeedbackService
from courier.feedback.themes import (
    DISCORD_DARK,
    DISCORD_LIGHT,
    FeedbackTheme,
    Severity,
    get_theme,
)

__all__ = [
    "DEFAULT_CHUNK_THRESHOLD",
    "DISCORD_DARK",
    "DISCORD_LIGHT",
    "ChannelInvocation",
    "DMResolutionFailed",
    "DeliveryContext",
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
    "chunk_content",
    "create_content_chunks",
    "create_feedback_embed",
    "get_theme",
]
