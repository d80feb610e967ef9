"""Data models."""

from telenotify.core.models.config import (
    ApiConfig,
    LoggingConfig,
    PollingConfig,
    Settings,
)
from telenotify.core.models.telegram import ApiResponse, Chat, Message, User

__all__ = [
    "ApiConfig",
    "ApiResponse",
    "Chat",
    "LoggingConfig",
    "Message",
    "PollingConfig",
    "Settings",
    "User",
]
