"""Update kind definitions."""

from __future__ import annotations

from enum import Enum


class UpdateKind(str, Enum):
    """Kinds of update the Bot API can deliver through getUpdates.

    Values are the JSON keys that carry the payload of each kind.
    """

    MESSAGE = "message"
    EDITED_MESSAGE = "edited_message"
    CHANNEL_POST = "channel_post"
    EDITED_CHANNEL_POST = "edited_channel_post"

    # Anything the client does not know how to decode
    UNKNOWN = "unknown"

    @classmethod
    def known(cls) -> tuple[UpdateKind, ...]:
        """Kinds that map to a payload key."""
        return tuple(kind for kind in cls if kind is not cls.UNKNOWN)


class ParseMode(str, Enum):
    """Formatting modes accepted by sendMessage."""

    MARKDOWN_V2 = "MarkdownV2"
    HTML = "HTML"
    MARKDOWN = "Markdown"  # Legacy
    NONE = ""
