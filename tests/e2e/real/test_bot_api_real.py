"""Real Bot API tests.

These tests need a valid bot token.
Run with: pytest tests/e2e/real/ --run-real --bot-token=<token> -v
"""

from __future__ import annotations

import asyncio

import pytest

from telenotify.core.notifier.notifier import NotifierState, UpdateNotifier
from telenotify.core.transport.client import BotApiClient


@pytest.mark.real
class TestRealBotApi:
    """Tests against api.telegram.org."""

    @pytest.mark.asyncio
    async def test_get_me(self, real_bot_token: str):
        """Test that the token identifies a bot."""
        async with BotApiClient(real_bot_token) as client:
            user = await client.get_me()
        assert user.is_bot is True
        assert user.username

    @pytest.mark.asyncio
    async def test_notifier_polls_without_errors(self, real_bot_token: str):
        """Test a few real poll cycles."""
        async with BotApiClient(real_bot_token) as client:
            notifier = UpdateNotifier(client, poll_interval=0.5)
            await notifier.subscribe()
            stop = asyncio.Event()
            task = notifier.start(stop)
            await asyncio.sleep(2)
            stop.set()
            await asyncio.wait_for(task, timeout=10)

        assert notifier.state is NotifierState.STOPPED
        assert notifier.stats["polls"] >= 2
        assert notifier.errors.empty()
