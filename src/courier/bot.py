"""CourierBot: a small Discord bot that demonstrates the feedback service."""

from __future__ import annotations

import logging

import discord
from discord.ext import commands

from courier.commands import COMMAND_EXTENSIONS
from courier.config import CourierSettings, get_settings
from courier.feedback.service import FeedbackService
from courier.transport.client import DiscordClientTransport
from courier.wiring import create_feedback_service

log = logging.getLogger(__name__)


class CourierBot(commands.Bot):
    """Discord bot exposing :class:`FeedbackService` to its command cogs.

    Feedback is delivered through the bot's own client connection via
    :class:`~courier.transport.client.DiscordClientTransport`.
    """

    def __init__(self, settings: CourierSettings | None = None) -> None:
        settings = settings or get_settings()

        intents = discord.Intents.default()
        intents.message_content = True

        super().__init__(
            command_prefix=settings.COMMAND_PREFIX,
            intents=intents,
        )

        self.settings = settings
        self.feedback: FeedbackService = create_feedback_service(
            settings, DiscordClientTransport(self)
        )

    async def setup_hook(self) -> None:
        """Called after login, before the bot starts processing events."""
        for extension in COMMAND_EXTENSIONS:
            await self.load_extension(extension)
        log.info("Command cogs loaded: %s", ", ".join(COMMAND_EXTENSIONS))

        if self.settings.SYNC_COMMANDS:
            synced = await self.tree.sync()
            log.info("Synced %d application command(s)", len(synced))

    async def on_ready(self) -> None:
        log.info("Logged in as %s (ID: %s)", self.user, self.user.id if self.user else "?")
        log.info(
            "Feedback theme=%s, chunk threshold=%d",
            self.feedback.theme.name,
            self.feedback.chunk_threshold,
        )
