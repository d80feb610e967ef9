"""Pytest plugins for telenotify tests."""

from tests.pytest_plugins.markers import (
    pytest_addoption,
    pytest_collection_modifyitems,
    pytest_configure,
)
from tests.pytest_plugins.mock_services import (
    GatedUpdateSource,
    MockBotApi,
    ScriptedUpdateSource,
)

__all__ = [
    "GatedUpdateSource",
    "MockBotApi",
    "ScriptedUpdateSource",
    "pytest_addoption",
    "pytest_collection_modifyitems",
    "pytest_configure",
]
