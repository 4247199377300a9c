"""Outcome of a feedback send."""

from __future__ import annotations

from dataclasses import dataclass

from courier.feedback.context import DeliveryContext
from courier.feedback.errors import FeedbackError
from courier.transport.base import SentMessage


@dataclass(frozen=True, slots=True)
class SendResult:
    """Either the messages that were created or the error that stopped them.

    A failed result says nothing about chunks that went out before the
    failure.  Those messages stay in the channel; the caller has to treat
    the whole send as failed.

    Attributes:
        messages: Created messages, in send order.  Empty on failure.
        error: The failure, or ``None`` on success.
        context: The delivery context after the send.  For interaction
            contexts this reflects whether a follow-up has been delivered;
            pass it to the next contextual send.
    """

    messages: tuple[SentMessage, ...] = ()
    error: FeedbackError | None = None
    context: DeliveryContext = None

    @property
    def is_success(self) -> bool:
        return self.error is None

    @classmethod
    def ok(
        cls,
        messages: list[SentMessage] | tuple[SentMessage, ...],
        context: DeliveryContext = None,
    ) -> SendResult:
        return cls(messages=tuple(messages), context=context)

    @classmethod
    def fail(cls, error: FeedbackError, context: DeliveryContext = None) -> SendResult:
        return cls(error=error, context=context)

    def unwrap(self) -> tuple[SentMessage, ...]:
        """Return :attr:`messages`, raising :attr:`error` if the send failed."""
        if self.error is not None:
            raise self.error
        return self.messages
