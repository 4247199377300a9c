"""Tests for building delivery contexts from discord.py objects."""

from unittest.mock import MagicMock

from courier.feedback.context import ChannelInvocation, InteractionInvocation
from courier.integrations.discord_context import context_from_command, context_from_interaction


def test_interaction_context():
    interaction = MagicMock()
    interaction.application_id = 7
    interaction.token = "abc"

    context = context_from_interaction(interaction)

    assert context == InteractionInvocation(application_id=7, token="abc")
    assert context.has_followed_up is False


def test_prefix_command_uses_channel():
    ctx = MagicMock()
    ctx.interaction = None
    ctx.channel.id = 42

    assert context_from_command(ctx) == ChannelInvocation(channel_id=42)


def test_hybrid_slash_invocation_uses_interaction():
    ctx = MagicMock()
    ctx.interaction.application_id = 7
    ctx.interaction.token = "abc"

    assert isinstance(context_from_command(ctx), InteractionInvocation)


def test_interaction_token_hidden_from_repr():
    context = InteractionInvocation(application_id=7, token="very-secret")
    assert "very-secret" not in repr(context)


def test_mark_followed_up_is_idempotent():
    context = InteractionInvocation(application_id=7, token="abc")
    flipped = context.mark_followed_up()

    assert flipped.has_followed_up is True
    assert flipped.mark_followed_up() is flipped
    assert context.has_followed_up is False
