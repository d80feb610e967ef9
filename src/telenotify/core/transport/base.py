"""Interface the poll loop pulls updates through."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from telenotify.core.events.update import Update


@runtime_checkable
class UpdateSource(Protocol):
    """Anything that can answer "which updates came after this offset"."""

    async def get_updates(self, offset: int) -> list[Update]:
        """
        Fetch updates whose sequence id is at least ``offset``.

        Args:
            offset: Lowest update_id wanted (last delivered id + 1)

        Returns:
            Updates in ascending update_id order, possibly empty

        Raises:
            TransportError: Network, size or decoding failure
            RemoteRejectedError: The upstream refused the request
        """
        ...
