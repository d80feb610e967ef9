"""Transport adapters for the Bot API."""

from telenotify.core.transport.base import UpdateSource
from telenotify.core.transport.client import BotApiClient

__all__ = [
    "BotApiClient",
    "UpdateSource",
]
