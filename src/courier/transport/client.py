"""Feedback transport backed by a running ``discord.py`` client.

Bots that already hold a logged-in :class:`discord.Client` should use this
transport so feedback shares the client's HTTP session and rate-limit
bookkeeping.  No objects are fetched up front: channels are addressed
through partial messageables and follow-ups through a partial webhook.
"""

from __future__ import annotations

import logging
from typing import Sequence

import discord

from courier.transport.base import DMChannel, SentMessage

logger = logging.getLogger(__name__)


class DiscordClientTransport:
    """Deliver feedback through an existing :class:`discord.Client`.

    Errors raised by ``discord.py`` (normally :class:`discord.HTTPException`)
    propagate unchanged; the feedback service wraps them.

    Args:
        client: A logged-in client or bot.
    """

    def __init__(self, client: discord.Client) -> None:
        self._client = client

    async def create_channel_message(
        self,
        channel_id: int,
        embeds: Sequence[discord.Embed],
    ) -> SentMessage:
        channel = self._client.get_partial_messageable(channel_id)
        message = await channel.send(embeds=list(embeds))
        return SentMessage(id=message.id, channel_id=message.channel.id, raw=message)

    async def create_interaction_followup(
        self,
        application_id: int,
        token: str,
        embeds: Sequence[discord.Embed],
    ) -> SentMessage:
        webhook = discord.Webhook.partial(application_id, token, client=self._client)
        message = await webhook.send(embeds=list(embeds), wait=True)
        return SentMessage(id=message.id, channel_id=message.channel.id, raw=message)

    async def create_dm_channel(self, user_id: int) -> DMChannel:
        channel = await self._client.create_dm(discord.Object(id=user_id))
        logger.debug("Resolved DM channel %s for user %s", channel.id, user_id)
        return DMChannel(id=channel.id, recipient_id=user_id, raw=channel)
