"""Error hierarchy for the notifier and its transport."""

from __future__ import annotations


class NotifierError(Exception):
    """Base class for every error raised by telenotify."""

    pass


class TransportError(NotifierError):
    """A poll could not be completed. Always recoverable on the next tick."""

    pass


class NetworkError(TransportError):
    """Timeout or connection failure while talking to the Bot API."""

    pass


class MalformedResponseError(TransportError):
    """The response body was not the JSON the Bot API promises."""

    pass


class ResponseTooLargeError(TransportError):
    """The response body exceeded the configured size limit."""

    def __init__(self, size: int, limit: int) -> None:
        self.size = size
        self.limit = limit
        super().__init__(f"response too big ({size} bytes, limit {limit})")


class RemoteRejectedError(NotifierError):
    """The Bot API answered with a structured failure."""

    def __init__(
        self,
        error_code: int,
        description: str,
        status_code: int | None = None,
    ) -> None:
        self.error_code = error_code
        self.description = description
        self.status_code = status_code
        super().__init__(f"Telegram API error (statuscode {error_code}): {description}")


class LifecycleError(NotifierError):
    """The notifier was used in a way its current state does not allow."""

    pass


class NotifierStateError(LifecycleError):
    """Raised when run() is called on a notifier that is not idle."""

    pass


class ShutdownInProgressError(LifecycleError):
    """Raised by subscribe/unsubscribe once shutdown has begun."""

    pass


__all__ = [
    "LifecycleError",
    "MalformedResponseError",
    "NetworkError",
    "NotifierError",
    "NotifierStateError",
    "RemoteRejectedError",
    "ResponseTooLargeError",
    "ShutdownInProgressError",
    "TransportError",
]
