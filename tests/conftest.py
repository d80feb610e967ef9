"""Global test fixtures for telenotify."""

from __future__ import annotations

import os

import pytest
import structlog

# Import pytest plugins for live Bot API testing
from tests.pytest_plugins.markers import (
    pytest_addoption,
    pytest_collection_modifyitems,
    pytest_configure,
)
from tests.pytest_plugins.mock_services import mock_bot_api, scripted_source

# Re-export for pytest discovery
__all__ = [
    "mock_bot_api",
    "pytest_addoption",
    "pytest_collection_modifyitems",
    "pytest_configure",
    "scripted_source",
]

# Captured before clean_env strips the environment
_SHELL_BOT_TOKEN = os.environ.get("TELENOTIFY_API__TOKEN")


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any structlog configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep TELENOTIFY_* variables from the shell out of unit tests."""
    for name in list(os.environ):
        if name.startswith("TELENOTIFY_"):
            monkeypatch.delenv(name)


@pytest.fixture
def real_bot_token(request: pytest.FixtureRequest) -> str:
    """Bot token for real tests, skipping when none is available."""
    token = request.config.getoption("--bot-token") or _SHELL_BOT_TOKEN
    if not token:
        pytest.skip("No bot token configured for real tests")
    return token
