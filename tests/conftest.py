"""Shared fixtures for the Courier test suite."""

from itertools import count
from unittest.mock import AsyncMock

import pytest

from courier.feedback.service import FeedbackService
from courier.transport.base import DMChannel, SentMessage


@pytest.fixture
def mock_transport():
    """Mock transport that hands out increasing message IDs."""
    ids = count(1)
    transport = AsyncMock()

    async def channel_message(channel_id, embeds):
        return SentMessage(id=next(ids), channel_id=channel_id)

    async def followup(application_id, token, embeds):
        return SentMessage(id=next(ids), channel_id=0)

    async def dm_channel(user_id):
        return DMChannel(id=9000 + user_id, recipient_id=user_id)

    transport.create_channel_message = AsyncMock(side_effect=channel_message)
    transport.create_interaction_followup = AsyncMock(side_effect=followup)
    transport.create_dm_channel = AsyncMock(side_effect=dm_channel)
    return transport


@pytest.fixture
def service(mock_transport):
    return FeedbackService(mock_transport)


@pytest.fixture
def long_text():
    """About 3000 characters of short words."""
    return " ".join(f"word{i}" for i in range(500))


@pytest.fixture
def discord_env(monkeypatch):
    """Minimal environment for CourierSettings."""
    for key in (
        "FEEDBACK_THEME",
        "FEEDBACK_CHUNK_THRESHOLD",
        "HTTP_TIMEOUT",
        "HTTP_MAX_RETRIES",
        "COMMAND_PREFIX",
        "SYNC_COMMANDS",
        "DISCORD_API_BASE_URL",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("DISCORD_TOKEN", "test-token")
