"""Update model and kinds."""

from telenotify.core.events.types import ParseMode, UpdateKind
from telenotify.core.events.update import Update

__all__ = [
    "ParseMode",
    "Update",
    "UpdateKind",
]
