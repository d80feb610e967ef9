"""Core module - update model, transport and notifier."""

from telenotify.core.events import Update, UpdateKind
from telenotify.core.notifier import UpdateNotifier
from telenotify.core.transport import BotApiClient, UpdateSource

__all__ = [
    "BotApiClient",
    "Update",
    "UpdateKind",
    "UpdateNotifier",
    "UpdateSource",
]
