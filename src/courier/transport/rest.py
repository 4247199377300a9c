"""Async Discord REST transport built on ``aiohttp``.

Implements the three calls the feedback service needs directly against
Discord's HTTP API, without a gateway connection.  Useful for workers and
webhooks handlers that answer interactions but never log in as a bot.

Usage::

    from courier.transport.rest import DiscordRestTransport

    async with DiscordRestTransport(token="...") as transport:
        service = FeedbackService(transport)
        await service.send_info(1234567890, "Deploy finished.")

HTTP 429 responses are retried with exponential backoff (or the
``retry_after`` Discord supplies); every other error status raises
:class:`DiscordHTTPError`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Sequence

import aiohttp
import discord

from courier.transport.base import DMChannel, SentMessage

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL: str = "https://discord.com/api/v10"
"""Default Discord API base URL."""

_MAX_RETRIES: int = 3
"""Maximum number of attempts on rate-limit (HTTP 429) responses."""

_RETRY_BACKOFF_BASE: float = 1.0
"""Base delay in seconds for exponential backoff (1s, 2s, 4s, ...)."""

_USER_AGENT: str = "DiscordBot (https://github.com/courier-feedback, 0.1.0)"
"""Discord requires bots to identify themselves in this format."""


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DiscordHTTPError(Exception):
    """Raised when the Discord API returns an error response.

    Attributes:
        status_code: HTTP status code of the failed response.
        code: Discord's JSON error code, if the body carried one.
        message: Human-readable error description.
    """

    def __init__(self, status_code: int, message: str, code: int | None = None) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        super().__init__(
            f"Discord error {status_code}"
            f"{f' (code={code})' if code is not None else ''}: {message}"
        )


# ---------------------------------------------------------------------------
# Transport
# ---------------------------------------------------------------------------


class DiscordRestTransport:
    """Feedback transport that calls the Discord REST API directly.

    The HTTP session is created lazily on first use and reused for the
    lifetime of the transport.  Call :meth:`close` (or use the transport as
    an async context manager) to release the connection pool.

    Args:
        token: Bot token, sent as ``Authorization: Bot <token>``.
        base_url: API base URL.  Override for testing or proxying.
        timeout: Total per-request timeout in seconds.
        max_retries: Attempts made on HTTP 429 before giving up.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        max_retries: int = _MAX_RETRIES,
    ) -> None:
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._session: aiohttp.ClientSession | None = None

    # -- Async context manager ----------------------------------------------

    async def __aenter__(self) -> DiscordRestTransport:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP session, if open."""
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    # -- Internal helpers ---------------------------------------------------

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": _USER_AGENT},
                timeout=aiohttp.ClientTimeout(total=self._timeout),
            )
        return self._session

    async def _request(
        self,
        method: str,
        endpoint: str,
        payload: dict[str, Any],
        *,
        auth: bool = True,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        """Execute an HTTP request, retrying on 429.

        Args:
            method: HTTP method.
            endpoint: Path appended to the base URL.
            payload: JSON body.
            auth: Send the bot ``Authorization`` header.  Webhook endpoints
                authenticate through the token in the path instead.
            params: Query string parameters.

        Returns:
            The decoded JSON response body.

        Raises:
            DiscordHTTPError: On error responses, or after exhausting all
                retries.
        """
        session = await self._ensure_session()
        url = f"{self._base_url}{endpoint}"
        headers = {"Authorization": f"Bot {self._token}"} if auth else {}
        last_error: DiscordHTTPError | None = None

        for attempt in range(self._max_retries):
            async with session.request(
                method, url, json=payload, headers=headers, params=params
            ) as resp:
                # Cloudflare and proxy errors arrive as plain text or HTML.
                body, text = await self._read_body(resp)

                if resp.status == 429:
                    last_error = DiscordHTTPError(
                        429, body.get("message") or text.strip() or "Rate limited"
                    )
                    if attempt == self._max_retries - 1:
                        break
                    delay = self._retry_delay(body, resp.headers, attempt)
                    # Only the route prefix is logged; webhook paths carry a token.
                    logger.warning(
                        "Discord rate-limited %s %s (429). Retrying in %.2fs "
                        "(attempt %d/%d).",
                        method,
                        endpoint.split("/")[1],
                        delay,
                        attempt + 1,
                        self._max_retries,
                    )
                elif resp.status >= 400:
                    raise DiscordHTTPError(
                        resp.status,
                        body.get("message") or text.strip()[:200] or f"HTTP {resp.status}",
                        body.get("code"),
                    )
                else:
                    return body

            await asyncio.sleep(delay)

        raise last_error or DiscordHTTPError(429, "Request failed after all retries.")

    @staticmethod
    async def _read_body(resp: aiohttp.ClientResponse) -> tuple[dict[str, Any], str]:
        """Return ``(json_object, raw_text)``; one of the two is always empty."""
        try:
            body = await resp.json(content_type=None)
        except (aiohttp.ContentTypeError, ValueError):
            return {}, await resp.text()
        if not isinstance(body, dict):
            return {}, ""
        return body, ""

    @staticmethod
    def _retry_delay(body: dict[str, Any], headers: Any, attempt: int) -> float:
        """Seconds to wait before retrying a 429.

        Prefers Discord's ``retry_after`` (body, then ``Retry-After`` header)
        and falls back to exponential backoff.
        """
        retry_after = body.get("retry_after")
        if retry_after is None:
            retry_after = headers.get("Retry-After")
        if retry_after is not None:
            try:
                return max(0.0, float(retry_after))
            except (TypeError, ValueError):
                pass
        return _RETRY_BACKOFF_BASE * (2 ** attempt)

    @staticmethod
    def _to_message(body: dict[str, Any]) -> SentMessage:
        return SentMessage(
            id=int(body["id"]),
            channel_id=int(body["channel_id"]),
            raw=body,
        )

    # -- Public API ---------------------------------------------------------

    async def create_channel_message(
        self,
        channel_id: int,
        embeds: Sequence[discord.Embed],
    ) -> SentMessage:
        body = await self._request(
            "POST",
            f"/channels/{channel_id}/messages",
            {"embeds": [embed.to_dict() for embed in embeds]},
        )
        return self._to_message(body)

    async def create_interaction_followup(
        self,
        application_id: int,
        token: str,
        embeds: Sequence[discord.Embed],
    ) -> SentMessage:
        body = await self._request(
            "POST",
            f"/webhooks/{application_id}/{token}",
            {"embeds": [embed.to_dict() for embed in embeds]},
            auth=False,
            params={"wait": "true"},
        )
        return self._to_message(body)

    async def create_dm_channel(self, user_id: int) -> DMChannel:
        body = await self._request(
            "POST",
            "/users/@me/channels",
            {"recipient_id": str(user_id)},
        )
        return DMChannel(id=int(body["id"]), recipient_id=user_id, raw=body)
