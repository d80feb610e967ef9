"""Tests for the echo bot example."""

from __future__ import annotations

import asyncio
import os
import signal
import sys

import pytest

from examples import echo_bot
from telenotify.core.events.types import UpdateKind
from telenotify.core.events.update import Update
from telenotify.core.models.telegram import Chat, Message, User
from telenotify.core.transport.client import BotApiClient
from tests.pytest_plugins.mock_services import wait_until


@pytest.mark.skipif(sys.platform == "win32", reason="Needs Unix signal handlers")
class TestEchoBotShutdown:
    """Tests for echo bot shutdown."""

    @pytest.mark.asyncio
    async def test_workers_are_finished_when_main_returns(self, monkeypatch: pytest.MonkeyPatch):
        """Test that Ctrl+C leaves no echo or error worker behind."""
        sent: list[tuple[int, str]] = []

        async def get_me(self) -> User:
            return User(id=1, is_bot=True, first_name="Echo", username="echo_bot")

        async def get_updates(self, offset: int) -> list[Update]:
            if offset == 1:
                chat = Chat(id=42, type="private")
                return [Update(sequence_id=1, kind=UpdateKind.MESSAGE, payload=Message(id=7, chat=chat, text="ping"))]
            return []

        async def send_message(self, chat_id: int, text: str, parse_mode=None) -> Message:
            sent.append((chat_id, text))
            return Message(id=8, text=text)

        monkeypatch.setattr(BotApiClient, "get_me", get_me)
        monkeypatch.setattr(BotApiClient, "get_updates", get_updates)
        monkeypatch.setattr(BotApiClient, "send_message", send_message)
        monkeypatch.setenv("TELENOTIFY_API__TOKEN", "1:x")
        monkeypatch.setenv("TELENOTIFY_POLLING__INTERVAL", "0.01")

        before = asyncio.all_tasks()
        main = asyncio.create_task(echo_bot.main())
        await wait_until(lambda: bool(sent))
        os.kill(os.getpid(), signal.SIGINT)
        await asyncio.wait_for(main, timeout=2.0)

        assert sent == [(42, "ping")]
        assert asyncio.all_tasks() - before == set()
