"""Invocation contexts that decide where a contextual send is delivered.

A delivery context is one of three things:

* ``None`` -- nothing is being handled right now.
* :class:`ChannelInvocation` -- a prefix command typed in a channel.
* :class:`InteractionInvocation` -- an application command or component
  interaction, answered through follow-up messages.

Contexts are immutable.  The feedback service hands back an updated copy
when it changes one (see :meth:`InteractionInvocation.mark_followed_up`),
so no service instance ever carries per-invocation state.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ChannelInvocation:
    """A command invoked by a message in a text channel.

    Attributes:
        channel_id: Snowflake of the channel the command came from.
    """

    channel_id: int


@dataclass(frozen=True, slots=True)
class InteractionInvocation:
    """A command invoked through a Discord interaction.

    Attributes:
        application_id: Snowflake of the application that owns the
            interaction.
        token: Continuation token used to create follow-up messages.
        has_followed_up: ``True`` once a follow-up has been delivered and
            the original interaction response is consumed.
    """

    application_id: int
    token: str = dataclasses.field(repr=False)
    has_followed_up: bool = False

    def mark_followed_up(self) -> InteractionInvocation:
        """Return this context with :attr:`has_followed_up` set."""
        if self.has_followed_up:
            return self
        return dataclasses.replace(self, has_followed_up=True)


DeliveryContext = ChannelInvocation | InteractionInvocation | None
"""The active invocation, if any."""
