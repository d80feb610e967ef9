"""Long-polling notifier for the Telegram Bot API."""

__version__ = "0.1.0"

from telenotify.core.errors import (  # noqa: E402
    NotifierError,
    RemoteRejectedError,
    ShutdownInProgressError,
    TransportError,
)
from telenotify.core.events import ParseMode, Update, UpdateKind  # noqa: E402
from telenotify.core.notifier import NotifierState, UpdateNotifier  # noqa: E402
from telenotify.core.transport import BotApiClient, UpdateSource  # noqa: E402

__all__ = [
    "BotApiClient",
    "NotifierError",
    "NotifierState",
    "ParseMode",
    "RemoteRejectedError",
    "ShutdownInProgressError",
    "TransportError",
    "Update",
    "UpdateKind",
    "UpdateNotifier",
    "UpdateSource",
    "__version__",
]
