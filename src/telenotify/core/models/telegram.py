"""Bot API payload models using Pydantic."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class User(_ApiModel):
    """A Telegram user or bot."""

    id: int
    is_bot: bool = False
    first_name: str = ""
    last_name: str = ""
    username: str = ""
    language_code: str = ""
    can_join_groups: bool = False
    can_read_all_group_messages: bool = False
    supports_inline_queries: bool = False


class Chat(_ApiModel):
    """A private chat, group, supergroup or channel."""

    id: int
    type: str = ""  # private, group, supergroup or channel
    title: str = ""
    username: str = ""
    first_name: str = ""
    last_name: str = ""
    bio: str = ""
    description: str = ""


class Message(_ApiModel):
    """A sent or received message."""

    id: int = Field(alias="message_id")
    from_user: User | None = Field(default=None, alias="from")
    sender_chat: Chat | None = None
    date: int = 0  # Unix time
    chat: Chat | None = None
    forward_from_chat: Chat | None = None
    via_bot: User | None = None
    text: str = ""


class ApiResponse(BaseModel):
    """Envelope every Bot API method answers with."""

    model_config = ConfigDict(extra="ignore")

    ok: bool
    result: Any = None
    error_code: int = 0
    description: str = ""
