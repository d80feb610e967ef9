"""Async Bot API client used as the notifier's update source."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from pydantic import ValidationError

from telenotify.core.errors import (
    MalformedResponseError,
    NetworkError,
    RemoteRejectedError,
    ResponseTooLargeError,
)
from telenotify.core.events.types import ParseMode
from telenotify.core.events.update import Update
from telenotify.core.models.config import DEFAULT_API_URL
from telenotify.core.models.telegram import ApiResponse, Message, User

if TYPE_CHECKING:
    from telenotify.core.models.config import ApiConfig

logger = structlog.get_logger(__name__)


class BotApiClient:
    """
    Thin wrapper over the Telegram Bot API HTTP interface.

    Every failure surfaces as a NotifierError subclass so callers never see
    raw httpx exceptions. Implements the UpdateSource protocol.
    """

    def __init__(
        self,
        token: str,
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 5.0,
        max_response_bytes: int = 100_000,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            token: Bot token issued by BotFather
            base_url: API root, overridable for tests and local API servers
            timeout: Per-request timeout in seconds
            max_response_bytes: Largest response body accepted
            http_client: Pre-built client; the caller keeps ownership of it
        """
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_response_bytes = max_response_bytes
        self._http_client = http_client
        self._owns_client = http_client is None

    @classmethod
    def from_config(
        cls,
        config: ApiConfig,
        http_client: httpx.AsyncClient | None = None,
    ) -> BotApiClient:
        """Build a client from the api section of the settings."""
        return cls(
            config.token.get_secret_value(),
            base_url=config.base_url,
            timeout=config.timeout,
            max_response_bytes=config.max_response_bytes,
            http_client=http_client,
        )

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self._timeout)
        return self._http_client

    def _method_url(self, method: str) -> str:
        return f"{self._base_url}/bot{self._token}/{method}"

    async def aclose(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._http_client is not None and self._owns_client:
            await self._http_client.aclose()
            self._http_client = None

    async def __aenter__(self) -> BotApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def get_updates(self, offset: int) -> list[Update]:
        """
        Fetch updates with update_id >= offset.

        Args:
            offset: Lowest update_id wanted

        Returns:
            Decoded updates in the order the API returned them
        """
        result = await self._call("GET", "getUpdates", params={"offset": offset})
        if not isinstance(result, list):
            raise MalformedResponseError(f"getUpdates result is not a list: {result!r}")

        updates = [Update.from_api(raw) for raw in result]
        logger.debug("Fetched updates", offset=offset, count=len(updates))
        return updates

    async def get_me(self) -> User:
        """Return the identity of the bot owning the token."""
        result = await self._call("GET", "getMe")
        try:
            return User.model_validate(result)
        except ValidationError as e:
            raise MalformedResponseError(f"invalid getMe result: {e}") from e

    async def send_message(
        self,
        chat_id: int,
        text: str,
        parse_mode: ParseMode = ParseMode.NONE,
    ) -> Message:
        """
        Send a text message to a chat.

        Args:
            chat_id: Target chat
            text: Message body
            parse_mode: Formatting applied by Telegram; omitted when NONE

        Returns:
            The message as stored by Telegram
        """
        payload: dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode is not ParseMode.NONE:
            payload["parse_mode"] = parse_mode.value

        result = await self._call("POST", "sendMessage", json_body=payload)
        try:
            return Message.model_validate(result)
        except ValidationError as e:
            raise MalformedResponseError(f"invalid sendMessage result: {e}") from e

    async def _call(
        self,
        http_method: str,
        api_method: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: dict[str, Any] | None = None,
    ) -> Any:
        """Perform one API call and return its ``result`` field."""
        client = self._get_client()
        try:
            async with client.stream(
                http_method,
                self._method_url(api_method),
                params=params,
                json=json_body,
            ) as response:
                body = await self._read_body(response)
                status_code = response.status_code
        except httpx.TimeoutException as e:
            raise NetworkError(f"timeout calling {api_method}") from e
        except httpx.HTTPError as e:
            raise NetworkError(f"error sending {api_method} request: {e}") from e

        answer = self._decode(body, api_method, status_code)
        if status_code != httpx.codes.OK or not answer.ok:
            logger.debug(
                "Bot API rejected request",
                method=api_method,
                status_code=status_code,
                error_code=answer.error_code,
            )
            raise RemoteRejectedError(
                answer.error_code or status_code,
                answer.description,
                status_code=status_code,
            )
        return answer.result

    async def _read_body(self, response: httpx.Response) -> bytes:
        """Read the body, refusing anything above the size limit."""
        limit = self._max_response_bytes

        content_length = response.headers.get("content-length")
        if content_length is not None and content_length.isdigit():
            if int(content_length) > limit:
                raise ResponseTooLargeError(int(content_length), limit)

        chunks: list[bytes] = []
        size = 0
        async for chunk in response.aiter_bytes():
            size += len(chunk)
            if size > limit:
                raise ResponseTooLargeError(size, limit)
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _decode(body: bytes, api_method: str, status_code: int) -> ApiResponse:
        try:
            data = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise MalformedResponseError(
                f"error parsing {api_method} body (status {status_code}): {e}"
            ) from e

        try:
            return ApiResponse.model_validate(data)
        except ValidationError as e:
            raise MalformedResponseError(
                f"unexpected {api_method} body (status {status_code}): {e}"
            ) from e
