"""Tests for the aiohttp-based Discord REST transport."""

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from courier.transport.base import DMChannel, SentMessage
from courier.transport.rest import DiscordHTTPError, DiscordRestTransport


def make_response(status, body, text=None, headers=None):
    resp = MagicMock()
    resp.status = status
    resp.headers = headers or {}
    if text is None:
        resp.json = AsyncMock(return_value=body)
    else:
        resp.json = AsyncMock(side_effect=ValueError("Expecting value: line 1 column 1"))
    resp.text = AsyncMock(return_value=text or "")
    ctx = MagicMock()
    ctx.__aenter__ = AsyncMock(return_value=resp)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


def attach_session(transport, *responses):
    session = MagicMock()
    session.closed = False
    session.request = MagicMock(side_effect=list(responses))
    transport._session = session
    return session


@pytest.mark.asyncio
async def test_channel_message_endpoint_and_payload():
    transport = DiscordRestTransport(token="tok")
    mock_request = AsyncMock(return_value={"id": "11", "channel_id": "22"})

    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(transport, "_request", mock_request)
        message = await transport.create_channel_message(
            22, [discord.Embed(description="hi", colour=discord.Colour(0x010203))]
        )

    method, endpoint, payload = mock_request.call_args.args
    assert (method, endpoint) == ("POST", "/channels/22/messages")
    assert payload["embeds"][0]["description"] == "hi"
    assert payload["embeds"][0]["color"] == 0x010203
    assert message == SentMessage(id=11, channel_id=22)


@pytest.mark.asyncio
async def test_followup_uses_webhook_without_bot_auth():
    transport = DiscordRestTransport(token="tok")
    mock_request = AsyncMock(return_value={"id": "1", "channel_id": "2"})

    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(transport, "_request", mock_request)
        await transport.create_interaction_followup(7, "abc", [discord.Embed(description="x")])

    assert mock_request.call_args.args[1] == "/webhooks/7/abc"
    assert mock_request.call_args.kwargs == {"auth": False, "params": {"wait": "true"}}


@pytest.mark.asyncio
async def test_dm_channel_endpoint():
    transport = DiscordRestTransport(token="tok")
    mock_request = AsyncMock(return_value={"id": "555"})

    with pytest.MonkeyPatch.context() as mp:
        mp.setattr(transport, "_request", mock_request)
        channel = await transport.create_dm_channel(3)

    mock_request.assert_called_once_with("POST", "/users/@me/channels", {"recipient_id": "3"})
    assert channel == DMChannel(id=555, recipient_id=3)


@pytest.mark.asyncio
async def test_request_sends_bot_authorization():
    transport = DiscordRestTransport(token="tok", base_url="https://example.test/api/")
    session = attach_session(transport, make_response(200, {"id": "1", "channel_id": "2"}))

    await transport.create_channel_message(2, [discord.Embed(description="x")])

    args, kwargs = session.request.call_args
    assert args == ("POST", "https://example.test/api/channels/2/messages")
    assert kwargs["headers"] == {"Authorization": "Bot tok"}


@pytest.mark.asyncio
async def test_webhook_request_omits_authorization():
    transport = DiscordRestTransport(token="tok")
    session = attach_session(transport, make_response(200, {"id": "1", "channel_id": "2"}))

    await transport.create_interaction_followup(7, "abc", [discord.Embed(description="x")])

    assert session.request.call_args.kwargs["headers"] == {}


@pytest.mark.asyncio
async def test_rate_limit_is_retried():
    transport = DiscordRestTransport(token="tok")
    session = attach_session(
        transport,
        make_response(429, {"message": "You are being rate limited.", "retry_after": 0.01}),
        make_response(200, {"id": "9", "channel_id": "2"}),
    )

    message = await transport.create_channel_message(2, [discord.Embed(description="x")])

    assert message.id == 9
    assert session.request.call_count == 2


@pytest.mark.asyncio
async def test_rate_limit_gives_up_after_max_retries():
    transport = DiscordRestTransport(token="tok", max_retries=2)
    attach_session(
        transport,
        make_response(429, {"retry_after": 0.01}),
        make_response(429, {"retry_after": 0.01}),
    )

    with pytest.raises(DiscordHTTPError) as excinfo:
        await transport.create_channel_message(2, [discord.Embed(description="x")])
    assert excinfo.value.status_code == 429


@pytest.mark.asyncio
async def test_error_status_raises_with_discord_code():
    transport = DiscordRestTransport(token="tok")
    attach_session(transport, make_response(403, {"message": "Missing Access", "code": 50001}))

    with pytest.raises(DiscordHTTPError) as excinfo:
        await transport.create_channel_message(2, [discord.Embed(description="x")])

    assert excinfo.value.status_code == 403
    assert excinfo.value.code == 50001
    assert "Missing Access" in str(excinfo.value)


@pytest.mark.asyncio
async def test_close_releases_session():
    transport = DiscordRestTransport(token="tok")
    session = attach_session(transport)
    session.close = AsyncMock()

    async with transport:
        pass

    session.close.assert_awaited_once()
    assert transport._session is None


@pytest.mark.asyncio
async def test_plain_text_rate_limit_is_retried():
    transport = DiscordRestTransport(token="tok")
    session = attach_session(
        transport,
        make_response(429, None, text="error code: 1015", headers={"Retry-After": "0"}),
        make_response(200, {"id": "9", "channel_id": "2"}),
    )

    message = await transport.create_channel_message(2, [discord.Embed(description="x")])

    assert message.id == 9
    assert session.request.call_count == 2


@pytest.mark.asyncio
async def test_plain_text_server_error_raises_http_error():
    transport = DiscordRestTransport(token="tok")
    attach_session(transport, make_response(502, None, text="<html>502 Bad Gateway</html>"))

    with pytest.raises(DiscordHTTPError) as excinfo:
        await transport.create_channel_message(2, [discord.Embed(description="x")])

    assert excinfo.value.status_code == 502
    assert excinfo.value.code is None
    assert "Bad Gateway" in excinfo.value.message


@pytest.mark.asyncio
async def test_zero_retry_after_is_honoured():
    transport = DiscordRestTransport(token="tok")
    attach_session(
        transport,
        make_response(429, {"retry_after": 0}),
        make_response(200, {"id": "9", "channel_id": "2"}),
    )
    mock_sleep = AsyncMock()

    with pytest.MonkeyPatch.context() as mp:
        mp.setattr("courier.transport.rest.asyncio.sleep", mock_sleep)
        await transport.create_channel_message(2, [discord.Embed(description="x")])

    mock_sleep.assert_awaited_once_with(0.0)


@pytest.mark.asyncio
async def test_missing_retry_after_uses_exponential_backoff():
    transport = DiscordRestTransport(token="tok", max_retries=3)
    attach_session(
        transport,
        make_response(429, {}),
        make_response(429, {}),
        make_response(200, {"id": "9", "channel_id": "2"}),
    )
    mock_sleep = AsyncMock()

    with pytest.MonkeyPatch.context() as mp:
        mp.setattr("courier.transport.rest.asyncio.sleep", mock_sleep)
        await transport.create_channel_message(2, [discord.Embed(description="x")])

    assert [c.args[0] for c in mock_sleep.await_args_list] == [1.0, 2.0]


@pytest.mark.asyncio
async def test_final_rate_limit_does_not_sleep():
    transport = DiscordRestTransport(token="tok", max_retries=2)
    attach_session(
        transport,
        make_response(429, {"retry_after": 5}),
        make_response(429, {"retry_after": 5}),
    )
    mock_sleep = AsyncMock()

    with pytest.MonkeyPatch.context() as mp:
        mp.setattr("courier.transport.rest.asyncio.sleep", mock_sleep)
        with pytest.raises(DiscordHTTPError):
            await transport.create_channel_message(2, [discord.Embed(description="x")])

    assert mock_sleep.await_count == 1
