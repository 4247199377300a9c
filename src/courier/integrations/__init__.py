"""Glue between Courier and ``discord.py``."""

from courier.integrations.discord_context import context_from_command, context_from_interaction

__all__ = ["context_from_command", "context_from_interaction"]
