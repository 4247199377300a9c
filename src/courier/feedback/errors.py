"""Error values reported by the feedback service.

The service never raises these for ordinary delivery failures.  They are
stored on the returned :class:`~courier.feedback.results.SendResult` so the
calling command handler decides what to do with them.
"""

from __future__ import annotations


class FeedbackError(Exception):
    """Base class for every feedback delivery failure."""


class NoContextAvailable(FeedbackError):
    """Raised (as a value) when a contextual send has no active invocation."""

    def __init__(self) -> None:
        super().__init__("Contextual sends require a context to be available.")


class TransportError(FeedbackError):
    """A transport call failed.

    The original exception is kept on :attr:`cause` and chained as
    ``__cause__`` so nothing from the transport is lost.

    Attributes:
        cause: The exception raised by the transport.
    """

    def __init__(self, cause: BaseException, message: str | None = None) -> None:
        self.cause = cause
        self.__cause__ = cause
        super().__init__(message or f"Transport call failed: {cause}")


class DMResolutionFailed(TransportError):
    """The private channel for a user could not be created or resolved.

    Attributes:
        user_id: The user whose DM channel was requested.
    """

    def __init__(self, user_id: int, cause: BaseException) -> None:
        self.user_id = user_id
        super().__init__(
            cause,
            f"Could not open a DM channel with user {user_id}: {cause}",
        )
