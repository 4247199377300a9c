"""Demo commands that exercise the feedback service.

Provides a prefix command that answers in the invoking channel
(``!say``), one that answers over DM (``!dm``), and a slash command that
answers with interaction follow-ups (``/say``).

Usage::

    await bot.load_extension("courier.commands.feedback")
"""

from __future__ import annotations

import logging

import discord
from discord import app_commands
from discord.ext import commands

from courier.feedback.results import SendResult
from courier.feedback.themes import Severity
from courier.integrations.discord_context import (
    context_from_command,
    context_from_interaction,
)

log = logging.getLogger(__name__)

_SEVERITY_CHOICES: list[app_commands.Choice[str]] = [
    app_commands.Choice(name=severity.value, value=severity.value) for severity in Severity
]


def parse_severity(name: str) -> Severity | None:
    """Resolve a user-typed severity name, or ``None`` if unknown."""
    try:
        return Severity(name.strip().lower())
    except ValueError:
        return None


def unknown_severity_text(name: str) -> str:
    return f"Unknown severity `{name}`. Use one of: {', '.join(s.value for s in Severity)}."


class FeedbackCommands(commands.Cog):
    """Commands that send themed feedback back to the invoker.

    Attributes:
        bot: The parent bot; must expose a ``feedback`` service.
    """

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    # ------------------------------------------------------------------
    # !say -- reply in the invoking channel
    # ------------------------------------------------------------------

    @commands.command(name="say")
    async def say(self, ctx: commands.Context, severity: str, *, text: str) -> None:
        """Echo text back as feedback.

        Usage: !say success Build passed on all targets.
        Severities: info, success, neutral, warning, error
        """
        feedback = self.bot.feedback.scoped(context_from_command(ctx))
        level = parse_severity(severity)
        if level is None:
            result = await feedback.send_error(
                unknown_severity_text(severity),
                target=ctx.author.id,
            )
        else:
            result = await feedback.send(level, text, target=ctx.author.id)
        self._log_failure("!say", result)

    # ------------------------------------------------------------------
    # !dm -- reply privately
    # ------------------------------------------------------------------

    @commands.command(name="dm")
    async def dm(self, ctx: commands.Context, severity: str, *, text: str) -> None:
        """Echo text back to the invoker over DM.

        Usage: !dm warning Your token expires tomorrow.
        """
        service = self.bot.feedback
        level = parse_severity(severity)
        if level is None:
            result = await service.send_contextual_error(
                context_from_command(ctx),
                unknown_severity_text(severity),
                target=ctx.author.id,
            )
            self._log_failure("!dm", result)
            return

        result = await service.send_private_message(
            ctx.author.id, service.message(level, text)
        )
        if not result.is_success:
            self._log_failure("!dm", result)
            await service.send_contextual_warning(
                context_from_command(ctx),
                "I couldn't DM you. Check your privacy settings.",
                target=ctx.author.id,
            )

    # ------------------------------------------------------------------
    # /say -- reply with interaction follow-ups
    # ------------------------------------------------------------------

    @app_commands.command(name="say", description="Echo text back as feedback.")
    @app_commands.describe(severity="How the message is coloured", text="What to say")
    @app_commands.choices(severity=_SEVERITY_CHOICES)
    async def say_slash(
        self,
        interaction: discord.Interaction,
        severity: app_commands.Choice[str],
        text: str,
    ) -> None:
        await interaction.response.defer(thinking=True)
        feedback = self.bot.feedback.scoped(context_from_interaction(interaction))
        result = await feedback.send(Severity(severity.value), text)
        self._log_failure("/say", result)

    @staticmethod
    def _log_failure(command: str, result: SendResult) -> None:
        if not result.is_success:
            log.warning("%s could not deliver feedback: %s", command, result.error)


async def setup(bot: commands.Bot) -> None:
    """Load the FeedbackCommands cog into the bot."""
    await bot.add_cog(FeedbackCommands(bot))
