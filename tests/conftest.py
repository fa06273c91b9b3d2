"""Pytest configuration and fixtures."""

import os
import sys
from unittest.mock import AsyncMock, Mock

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domains.reminders.store import JsonReminderFile, ReminderStore  # noqa: E402


class FakeOracle:
    """Stands in for ClaudeClient, answering by prompt type.

    Each answer may be a string or an exception to raise.
    """

    def __init__(self, intent="", gate="Permissible", motivation="Keep going."):
        self.intent = intent
        self.gate = gate
        self.motivation = motivation
        self.prompts: list[str] = []

    async def complete(self, prompt: str, temperature=None, **kwargs) -> str:
        self.prompts.append(prompt)
        if "Now extract data for" in prompt:
            answer = self.intent
        elif "Reply with one word only" in prompt:
            answer = self.gate
        else:
            answer = self.motivation

        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def oracle():
    """Oracle that approves and motivates by default."""
    return FakeOracle()


@pytest.fixture
def transport():
    """Mock chat transport."""
    transport = Mock()
    transport.deliver = AsyncMock()
    return transport


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "reminders.json"


@pytest.fixture
def store(store_path):
    """Empty reminder store backed by a temp file."""
    return ReminderStore(JsonReminderFile(store_path))


@pytest.fixture
def mock_discord_bot():
    """Create a mock Discord bot."""
    bot = Mock()
    bot.get_channel = Mock(return_value=Mock(send=AsyncMock()))
    bot.fetch_channel = AsyncMock()
    bot.user = Mock(name="TestBot#1234")
    return bot
