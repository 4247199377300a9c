"""Transport protocol consumed by the feedback service.

A transport is the thin layer that actually talks to Discord.  The feedback
service only needs three capabilities from it: posting to a channel,
posting an interaction follow-up, and opening a DM channel.  Transports
raise on failure; the service turns those exceptions into result values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol, Sequence, runtime_checkable

import discord


# ---------------------------------------------------------------------------
# Handles
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class SentMessage:
    """Handle for a message that Discord accepted.

    Attributes:
        id: Snowflake of the created message.
        channel_id: Snowflake of the channel it landed in.
        raw: The transport-specific object (JSON payload or
            :class:`discord.Message`) the handle was built from.
    """

    id: int
    channel_id: int
    raw: Any = field(default=None, repr=False, compare=False)


@dataclass(frozen=True, slots=True)
class DMChannel:
    """Handle for a private channel between the bot and one user.

    Attributes:
        id: Snowflake of the DM channel.
        recipient_id: Snowflake of the user on the other end.
        raw: The transport-specific object the handle was built from.
    """

    id: int
    recipient_id: int
    raw: Any = field(default=None, repr=False, compare=False)


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------

@runtime_checkable
class FeedbackTransport(Protocol):
    """Structural type for anything that can deliver feedback embeds."""

    async def create_channel_message(
        self,
        channel_id: int,
        embeds: Sequence[discord.Embed],
    ) -> SentMessage:
        """Post *embeds* as a new message in *channel_id*."""
        ...  # pragma: no cover

    async def create_interaction_followup(
        self,
        application_id: int,
        token: str,
        embeds: Sequence[discord.Embed],
    ) -> SentMessage:
        """Post *embeds* as a follow-up to the interaction owning *token*."""
        ...  # pragma: no cover

    async def create_dm_channel(self, user_id: int) -> DMChannel:
        """Open (or fetch) the DM channel with *user_id*."""
        ...  # pragma: no cover
