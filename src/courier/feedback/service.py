"""Deliver formatted feedback to users.

:class:`FeedbackService` decides where a message goes and how it is split:

* **Channel sends** post into an explicit channel.
* **Contextual sends** post wherever the active invocation lives -- a plain
  channel message for prefix commands, an interaction follow-up for
  application commands.
* **Private sends** open the user's DM channel first, then post there.

Text is chunked into embed-sized units (see :mod:`courier.feedback.chunking`)
and the units are sent one at a time, in order.  The first failing unit
stops the sequence.  Failures come back as values on a
:class:`~courier.feedback.results.SendResult`; only cancellation propagates.

Usage::

    service = FeedbackService(transport, theme=DISCORD_DARK)

    result = await service.send_contextual_info(context, "Done!")
    if not result.is_success:
        log.warning("Feedback failed: %s", result.error)
    context = result.context  # carry forward for the next send
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Sequence

import discord

from courier.feedback.chunking import DEFAULT_CHUNK_THRESHOLD, create_content_chunks
from courier.feedback.context import (
    ChannelInvocation,
    DeliveryContext,
    InteractionInvocation,
)
from courier.feedback.errors import DMResolutionFailed, NoContextAvailable, TransportError
from courier.feedback.messages import FeedbackMessage
from courier.feedback.results import SendResult
from courier.feedback.themes import DISCORD_DARK, FeedbackTheme, Severity
from courier.transport.base import DMChannel, FeedbackTransport, SentMessage

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    _ChunkSender = Callable[
        [DeliveryContext, discord.Embed],
        Awaitable[tuple[SentMessage, DeliveryContext]],
    ]


async def _call_transport(call: Awaitable[SentMessage]) -> SentMessage:
    """Await a transport call, wrapping any failure in :class:`TransportError`."""
    try:
        return await call
    except TransportError:
        raise
    except Exception as exc:
        raise TransportError(exc) from exc


class FeedbackService:
    """Route feedback messages to channels, interactions and DMs.

    The service holds no per-invocation state.  Contextual sends take the
    active :data:`~courier.feedback.context.DeliveryContext` explicitly and
    return the updated context on the result; :meth:`scoped` wraps that
    bookkeeping for callers that send several messages per invocation.

    Use the service as an async context manager (or call :meth:`close`)
    to release a transport that owns an HTTP session.

    Args:
        transport: Anything implementing
            :class:`~courier.transport.base.FeedbackTransport`.
        theme: Palette used by the severity helpers.
        chunk_threshold: Nominal length of a single embed unit.
    """

    def __init__(
        self,
        transport: FeedbackTransport,
        theme: FeedbackTheme = DISCORD_DARK,
        chunk_threshold: int = DEFAULT_CHUNK_THRESHOLD,
    ) -> None:
        self._transport = transport
        self.theme = theme
        self.chunk_threshold = chunk_threshold

    def scoped(self, context: DeliveryContext) -> FeedbackScope:
        """Bind this service to one invocation's context."""
        return FeedbackScope(self, context)

    # -- Async context manager ----------------------------------------------

    async def __aenter__(self) -> FeedbackService:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the transport, if it owns closable resources.

        Transports without a ``close`` coroutine (such as one borrowing a
        running bot client) are left alone.
        """
        close = getattr(self._transport, "close", None)
        if close is not None:
            await close()

    # ------------------------------------------------------------------
    # Content sends (chunked)
    # ------------------------------------------------------------------

    async def send_content(
        self,
        channel_id: int,
        contents: str,
        colour: discord.Colour,
        target: int | None = None,
    ) -> SendResult:
        """Send *contents* to *channel_id* as one or more sequential embeds.

        Args:
            channel_id: Destination channel.
            contents: Message text; chunked if long.
            colour: Embed colour.
            target: User to mention at the start of every embed, if any.
        """
        embeds = create_content_chunks(target, colour, contents, self.chunk_threshold)
        return await self._send_chunks(embeds, None, self._channel_sender(channel_id))

    async def send_contextual_content(
        self,
        context: DeliveryContext,
        contents: str,
        colour: discord.Colour,
        target: int | None = None,
    ) -> SendResult:
        """Send *contents* wherever the active invocation lives.

        Fails with :class:`NoContextAvailable` -- before any transport call --
        when *context* is ``None``.
        """
        if context is None:
            return SendResult.fail(NoContextAvailable())

        embeds = create_content_chunks(target, colour, contents, self.chunk_threshold)
        return await self._send_chunks(embeds, context, self._deliver_contextual)

    async def send_private_content(
        self,
        user_id: int,
        contents: str,
        colour: discord.Colour,
    ) -> SendResult:
        """Send *contents* to *user_id* over DM.

        If the DM channel cannot be opened the result carries
        :class:`DMResolutionFailed` and nothing is sent.
        """
        try:
            dm = await self._open_dm(user_id)
        except DMResolutionFailed as exc:
            logger.warning("Could not open DM with user %s: %s", user_id, exc.cause)
            return SendResult.fail(exc)

        return await self.send_content(dm.id, contents, colour)

    # ------------------------------------------------------------------
    # Message sends
    # ------------------------------------------------------------------

    async def send_message(
        self,
        channel_id: int,
        message: FeedbackMessage,
        target: int | None = None,
    ) -> SendResult:
        return await self.send_content(channel_id, message.text, message.colour, target)

    async def send_contextual_message(
        self,
        context: DeliveryContext,
        message: FeedbackMessage,
        target: int | None = None,
    ) -> SendResult:
        return await self.send_contextual_content(
            context, message.text, message.colour, target
        )

    async def send_private_message(self, user_id: int, message: FeedbackMessage) -> SendResult:
        return await self.send_private_content(user_id, message.text, message.colour)

    # ------------------------------------------------------------------
    # Embed sends (never chunked)
    # ------------------------------------------------------------------

    async def send_embed(self, channel_id: int, embed: discord.Embed) -> SendResult:
        """Send a pre-built embed to *channel_id* as-is."""
        return await self._send_chunks([embed], None, self._channel_sender(channel_id))

    async def send_contextual_embed(
        self,
        context: DeliveryContext,
        embed: discord.Embed,
    ) -> SendResult:
        """Send a pre-built embed wherever the active invocation lives."""
        if context is None:
            return SendResult.fail(NoContextAvailable())
        return await self._send_chunks([embed], context, self._deliver_contextual)

    async def send_private_embed(self, user_id: int, embed: discord.Embed) -> SendResult:
        """Send a pre-built embed to *user_id* over DM."""
        try:
            dm = await self._open_dm(user_id)
        except DMResolutionFailed as exc:
            logger.warning("Could not open DM with user %s: %s", user_id, exc.cause)
            return SendResult.fail(exc)

        return await self.send_embed(dm.id, embed)

    # ------------------------------------------------------------------
    # Severity helpers
    # ------------------------------------------------------------------

    def message(self, severity: Severity, contents: str) -> FeedbackMessage:
        """Build a :class:`FeedbackMessage` coloured by this service's theme."""
        return FeedbackMessage(contents, self.theme.colour_for(severity))

    async def send_info(self, channel_id: int, contents: str, target: int | None = None) -> SendResult:
        return await self.send_message(channel_id, self.message(Severity.INFO, contents), target)

    async def send_success(self, channel_id: int, contents: str, target: int | None = None) -> SendResult:
        return await self.send_message(channel_id, self.message(Severity.SUCCESS, contents), target)

    async def send_neutral(self, channel_id: int, contents: str, target: int | None = None) -> SendResult:
        return await self.send_message(channel_id, self.message(Severity.NEUTRAL, contents), target)

    async def send_warning(self, channel_id: int, contents: str, target: int | None = None) -> SendResult:
        return await self.send_message(channel_id, self.message(Severity.WARNING, contents), target)

    async def send_error(self, channel_id: int, contents: str, target: int | None = None) -> SendResult:
        return await self.send_message(channel_id, self.message(Severity.ERROR, contents), target)

    async def send_contextual_info(
        self, context: DeliveryContext, contents: str, target: int | None = None
    ) -> SendResult:
        return await self.send_contextual_message(context, self.message(Severity.INFO, contents), target)

    async def send_contextual_success(
        self, context: DeliveryContext, contents: str, target: int | None = None
    ) -> SendResult:
        return await self.send_contextual_message(context, self.message(Severity.SUCCESS, contents), target)

    async def send_contextual_neutral(
        self, context: DeliveryContext, contents: str, target: int | None = None
    ) -> SendResult:
        return await self.send_contextual_message(context, self.message(Severity.NEUTRAL, contents), target)

    async def send_contextual_warning(
        self, context: DeliveryContext, contents: str, target: int | None = None
    ) -> SendResult:
        return await self.send_contextual_message(context, self.message(Severity.WARNING, contents), target)

    async def send_contextual_error(
        self, context: DeliveryContext, contents: str, target: int | None = None
    ) -> SendResult:
        return await self.send_contextual_message(context, self.message(Severity.ERROR, contents), target)

    async def send_private_info(self, user_id: int, contents: str) -> SendResult:
        return await self.send_private_message(user_id, self.message(Severity.INFO, contents))

    async def send_private_success(self, user_id: int, contents: str) -> SendResult:
        return await self.send_private_message(user_id, self.message(Severity.SUCCESS, contents))

    async def send_private_neutral(self, user_id: int, contents: str) -> SendResult:
        return await self.send_private_message(user_id, self.message(Severity.NEUTRAL, contents))

    async def send_private_warning(self, user_id: int, contents: str) -> SendResult:
        return await self.send_private_message(user_id, self.message(Severity.WARNING, contents))

    async def send_private_error(self, user_id: int, contents: str) -> SendResult:
        return await self.send_private_message(user_id, self.message(Severity.ERROR, contents))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _channel_sender(self, channel_id: int) -> _ChunkSender:
        async def send(
            context: DeliveryContext, embed: discord.Embed
        ) -> tuple[SentMessage, DeliveryContext]:
            message = await _call_transport(
                self._transport.create_channel_message(channel_id, [embed])
            )
            return message, context

        return send

    async def _deliver_contextual(
        self,
        context: DeliveryContext,
        embed: discord.Embed,
    ) -> tuple[SentMessage, DeliveryContext]:
        if isinstance(context, ChannelInvocation):
            message = await _call_transport(
                self._transport.create_channel_message(context.channel_id, [embed])
            )
            return message, context

        if isinstance(context, InteractionInvocation):
            message = await _call_transport(
                self._transport.create_interaction_followup(
                    context.application_id, context.token, [embed]
                )
            )
            return message, context.mark_followed_up()

        raise TypeError(f"Unsupported delivery context: {context!r}")

    async def _open_dm(self, user_id: int) -> DMChannel:
        try:
            return await self._transport.create_dm_channel(user_id)
        except Exception as exc:
            raise DMResolutionFailed(user_id, exc) from exc

    async def _send_chunks(
        self,
        embeds: Sequence[discord.Embed],
        context: DeliveryContext,
        send: _ChunkSender,
    ) -> SendResult:
        """Send *embeds* strictly in order, stopping at the first failure."""
        sent: list[SentMessage] = []
        total = len(embeds)
        for index, embed in enumerate(embeds, start=1):
            try:
                message, context = await send(context, embed)
            except TransportError as exc:
                logger.warning(
                    "Feedback send failed on chunk %d/%d (%d already delivered): %s",
                    index,
                    total,
                    len(sent),
                    exc,
                )
                return SendResult.fail(exc, context)
            sent.append(message)

        logger.debug("Delivered feedback in %d chunk(s).", total)
        return SendResult.ok(sent, context)


class FeedbackScope:
    """A :class:`FeedbackService` bound to one invocation.

    The scope keeps the most recent delivery context, so a command handler
    can send several contextual messages without threading
    ``result.context`` through by hand.  A scope belongs to a single
    invocation; do not share one between concurrently running handlers.

    Usage::

        feedback = service.scoped(context_from_interaction(interaction))
        await feedback.send_info("Working on it...")
        await feedback.send_success("Done.")
    """

    def __init__(self, service: FeedbackService, context: DeliveryContext) -> None:
        self._service = service
        self._context = context

    @property
    def context(self) -> DeliveryContext:
        """The current delivery context."""
        return self._context

    @property
    def has_followed_up(self) -> bool:
        """Whether an interaction follow-up has been delivered in this scope.

        Always ``False`` outside interaction contexts.
        """
        return isinstance(self._context, InteractionInvocation) and self._context.has_followed_up

    def _track(self, result: SendResult) -> SendResult:
        if result.context is not None:
            self._context = result.context
        return result

    async def send_content(
        self,
        contents: str,
        colour: discord.Colour,
        target: int | None = None,
    ) -> SendResult:
        return self._track(
            await self._service.send_contextual_content(self._context, contents, colour, target)
        )

    async def send_message(self, message: FeedbackMessage, target: int | None = None) -> SendResult:
        return await self.send_content(message.text, message.colour, target)

    async def send_embed(self, embed: discord.Embed) -> SendResult:
        return self._track(await self._service.send_contextual_embed(self._context, embed))

    async def send(
        self,
        severity: Severity,
        contents: str,
        target: int | None = None,
    ) -> SendResult:
        """Send *contents* coloured for *severity*."""
        return await self.send_message(self._service.message(severity, contents), target)

    async def send_info(self, contents: str, target: int | None = None) -> SendResult:
        return await self.send(Severity.INFO, contents, target)

    async def send_success(self, contents: str, target: int | None = None) -> SendResult:
        return await self.send(Severity.SUCCESS, contents, target)

    async def send_neutral(self, contents: str, target: int | None = None) -> SendResult:
        return await self.send(Severity.NEUTRAL, contents, target)

    async def send_warning(self, contents: str, target: int | None = None) -> SendResult:
        return await self.send(Severity.WARNING, contents, target)

    async def send_error(self, contents: str, target: int | None = None) -> SendResult:
        return await self.send(Severity.ERROR, contents, target)
