"""Fake update sources and a fake Bot API for tests."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest

from telenotify.core.events.types import UpdateKind
from telenotify.core.events.update import Update
from telenotify.core.transport.client import BotApiClient

TEST_TOKEN = "110201543:AAHdqTcvCH1vGWJxfSeofSAs0K5PALDsaw"
TEST_API_URL = "https://api.telegram.test"


def make_update(sequence_id: int, kind: UpdateKind = UpdateKind.MESSAGE) -> Update:
    """Build an Update with a minimal payload."""
    return Update(sequence_id=sequence_id, kind=kind, payload={"update_id": sequence_id})


def drain(queue: asyncio.Queue[Update]) -> list[int]:
    """Empty a subscriber queue and return the sequence ids it held."""
    ids = []
    while not queue.empty():
        ids.append(queue.get_nowait().sequence_id)
    return ids


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0) -> None:
    """Poll ``predicate`` until it holds, failing the test on timeout."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            pytest.fail("condition not reached before timeout")
        await asyncio.sleep(0.005)


# ============================================================================
# SCRIPTED UPDATE SOURCE
# ============================================================================


@dataclass
class ScriptedUpdateSource:
    """UpdateSource answering from a script, then with empty batches.

    Each script step is either a batch of updates or an exception to raise.
    Every requested offset is recorded.
    """

    script: list[Iterable[Update] | BaseException] = field(default_factory=list)
    offsets: list[int] = field(default_factory=list)

    async def get_updates(self, offset: int) -> list[Update]:
        self.offsets.append(offset)
        if not self.script:
            return []
        step = self.script.pop(0)
        if isinstance(step, BaseException):
            raise step
        return list(step)


@dataclass
class GatedUpdateSource:
    """UpdateSource whose first call blocks until ``release`` is set."""

    batch: list[Update] = field(default_factory=list)
    entered: asyncio.Event = field(default_factory=asyncio.Event)
    release: asyncio.Event = field(default_factory=asyncio.Event)
    offsets: list[int] = field(default_factory=list)

    async def get_updates(self, offset: int) -> list[Update]:
        self.offsets.append(offset)
        if len(self.offsets) > 1:
            return []
        self.entered.set()
        await self.release.wait()
        return list(self.batch)


# ============================================================================
# MOCK BOT API
# ============================================================================


@dataclass
class MockBotApi:
    """In-memory Bot API served through httpx.MockTransport."""

    responses: dict[str, httpx.Response] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def respond(self, method: str, status_code: int = 200, **kwargs: Any) -> None:
        """Set the response for a Bot API method (kwargs go to httpx.Response)."""
        self.responses[method] = httpx.Response(status_code, **kwargs)

    def respond_ok(self, method: str, result: Any) -> None:
        self.respond(method, json={"ok": True, "result": result})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        method = request.url.path.rsplit("/", 1)[-1]
        if method not in self.responses:
            return httpx.Response(
                404,
                json={"ok": False, "error_code": 404, "description": "Not Found"},
            )
        return self.responses[method]

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)

    def client(self, **kwargs: Any) -> BotApiClient:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return BotApiClient(
            TEST_TOKEN,
            base_url=TEST_API_URL,
            http_client=http_client,
            **kwargs,
        )


@pytest.fixture
def scripted_source() -> ScriptedUpdateSource:
    """Provide an empty scripted update source."""
    return ScriptedUpdateSource()


@pytest.fixture
def mock_bot_api() -> MockBotApi:
    """Provide a fake Bot API with no responses configured."""
    return MockBotApi()
