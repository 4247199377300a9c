"""Build delivery contexts from ``discord.py`` objects."""

from __future__ import annotations

import discord
from discord.ext import commands

from courier.feedback.context import ChannelInvocation, InteractionInvocation


def context_from_interaction(interaction: discord.Interaction) -> InteractionInvocation:
    """Return the follow-up context for *interaction*.

    The interaction must be acknowledged (responded to or deferred) before
    follow-ups sent through this context will be accepted by Discord.
    """
    return InteractionInvocation(
        application_id=interaction.application_id,
        token=interaction.token,
    )


def context_from_command(
    ctx: commands.Context,
) -> ChannelInvocation | InteractionInvocation:
    """Return the delivery context for a prefix or hybrid command.

    Hybrid commands invoked as slash commands carry an interaction; those
    are answered with follow-ups.  Everything else goes to the channel.
    """
    if ctx.interaction is not None:
        return context_from_interaction(ctx.interaction)
    return ChannelInvocation(channel_id=ctx.channel.id)
