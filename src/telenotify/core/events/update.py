"""Update record delivered to subscribers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from telenotify.core.errors import MalformedResponseError
from telenotify.core.events.types import UpdateKind
from telenotify.core.models.telegram import Message


@dataclass(frozen=True, slots=True)
class Update:
    """A single update pulled from getUpdates.

    ``sequence_id`` is Telegram's ``update_id``. The kind is decided once,
    when the raw object is decoded, so consumers only ever branch on
    ``kind``.
    """

    sequence_id: int
    kind: UpdateKind
    payload: Message | dict[str, Any] = field(default_factory=dict)

    @property
    def message(self) -> Message | None:
        """Payload as a Message, or None for unknown updates."""
        return self.payload if isinstance(self.payload, Message) else None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        payload = self.payload
        if isinstance(payload, Message):
            payload = payload.model_dump(by_alias=True, exclude_none=True)
        return {
            "update_id": self.sequence_id,
            "kind": self.kind.value,
            "payload": payload,
        }

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> Update:
        """
        Decode a raw getUpdates entry.

        Exactly one payload key is expected. The first known key present
        decides the kind; objects with none of them become UNKNOWN and keep
        the raw object as payload.

        Raises:
            MalformedResponseError: If update_id is missing or a payload
                does not validate
        """
        if not isinstance(raw, dict):
            raise MalformedResponseError(f"update is not an object: {raw!r}")

        update_id = raw.get("update_id")
        if not isinstance(update_id, int) or isinstance(update_id, bool):
            raise MalformedResponseError(f"update without a valid update_id: {raw!r}")

        for kind in UpdateKind.known():
            body = raw.get(kind.value)
            if body is None:
                continue
            try:
                message = Message.model_validate(body)
            except ValidationError as e:
                raise MalformedResponseError(
                    f"invalid {kind.value} payload in update {update_id}: {e}"
                ) from e
            return cls(sequence_id=update_id, kind=kind, payload=message)

        return cls(sequence_id=update_id, kind=UpdateKind.UNKNOWN, payload=dict(raw))
