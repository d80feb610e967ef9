"""Long-polling update notifier."""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from enum import Enum
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from telenotify.core.errors import NotifierError, NotifierStateError, TransportError
from telenotify.core.notifier.registry import SubscriptionRegistry

if TYPE_CHECKING:
    from telenotify.core.events.types import UpdateKind
    from telenotify.core.events.update import Update
    from telenotify.core.models.config import PollingConfig
    from telenotify.core.transport.base import UpdateSource

logger = structlog.get_logger(__name__)


class NotifierState(str, Enum):
    """Notifier lifecycle states."""

    IDLE = "idle"  # Accepting subscriptions, not polling
    RUNNING = "running"
    STOPPING = "stopping"  # Waiting for the in-flight tick
    STOPPED = "stopped"  # Terminal


@dataclass
class NotifierStats:
    """Poll loop counters."""

    polls: int = 0
    failed_polls: int = 0
    updates_received: int = 0
    duplicates_skipped: int = 0
    deliveries: int = 0


class UpdateNotifier:
    """
    Polls an UpdateSource and fans updates out to subscribers.

    The cursor is the last update_id delivered. Each tick asks the source
    for ``cursor + 1`` onwards, dispatches the whole batch, and only then
    moves the cursor. A failed tick leaves the cursor untouched, reports
    the error on ``errors`` and the next tick retries the same range.

    ``run()`` blocks until shutdown has completed. Use ``start()`` to get a
    task instead.
    """

    def __init__(
        self,
        source: UpdateSource,
        *,
        poll_interval: float = 1.0,
        initial_cursor: int = 0,
        queue_size: int = 100,
    ) -> None:
        """
        Initialize the notifier.

        Args:
            source: Where updates are pulled from
            poll_interval: Seconds to wait between ticks
            initial_cursor: Last update_id considered delivered
            queue_size: Capacity of each subscriber queue (0 = unbounded)
        """
        if poll_interval <= 0:
            raise ValueError("poll_interval must be positive")
        if initial_cursor < 0:
            raise ValueError("initial_cursor must not be negative")

        self._source = source
        self._poll_interval = poll_interval
        self._cursor = initial_cursor
        self._registry = SubscriptionRegistry(queue_size=queue_size)
        self._errors: asyncio.Queue[NotifierError] = asyncio.Queue()
        self._stop_requested = asyncio.Event()
        self._poll_task: asyncio.Task[None] | None = None
        self._state = NotifierState.IDLE
        self._stats = NotifierStats()

    @classmethod
    def from_config(cls, source: UpdateSource, config: PollingConfig) -> UpdateNotifier:
        """Build a notifier from the polling section of the settings."""
        return cls(
            source,
            poll_interval=config.interval,
            initial_cursor=config.initial_cursor,
            queue_size=config.subscriber_queue_size,
        )

    @property
    def state(self) -> NotifierState:
        return self._state

    @property
    def cursor(self) -> int:
        """Last update_id delivered to subscribers."""
        return self._cursor

    @property
    def errors(self) -> asyncio.Queue[NotifierError]:
        """Unbounded queue of poll failures, oldest first."""
        return self._errors

    @property
    def stats(self) -> dict[str, int]:
        return asdict(self._stats)

    @property
    def subscriber_count(self) -> int:
        return len(self._registry)

    async def subscribe(
        self,
        kinds: Iterable[UpdateKind] | None = None,
    ) -> tuple[UUID, asyncio.Queue[Update]]:
        """
        Subscribe to updates of the given kinds.

        Args:
            kinds: Kinds to receive, or None for every kind

        Returns:
            Subscription id and the queue updates arrive on

        Raises:
            ShutdownInProgressError: Once the notifier is stopping or stopped
        """
        return await self._registry.subscribe(kinds)

    async def unsubscribe(self, subscription_id: UUID) -> None:
        """
        Remove a subscription. Unknown ids are ignored.

        Raises:
            ShutdownInProgressError: Once the notifier is stopping or stopped
        """
        await self._registry.unsubscribe(subscription_id)

    async def run(self, stop_event: asyncio.Event | None = None) -> None:
        """
        Poll until ``stop_event`` is set or ``stop()`` is called.

        Returns once the in-flight tick (if any) has finished and the
        notifier is STOPPED. Cancelling the calling task also shuts the
        notifier down gracefully.

        Raises:
            NotifierStateError: If the notifier is not IDLE
        """
        self._begin()
        await self._wait_and_shutdown(stop_event)

    def start(self, stop_event: asyncio.Event | None = None) -> asyncio.Task[None]:
        """
        Run the notifier in a background task.

        The notifier is RUNNING when this returns.

        Returns:
            Task completing once the notifier is STOPPED

        Raises:
            NotifierStateError: If the notifier is not IDLE
        """
        self._begin()
        return asyncio.create_task(
            self._wait_and_shutdown(stop_event),
            name="telenotify-notifier",
        )

    def stop(self) -> None:
        """
        Ask the notifier to stop at the next tick boundary.

        An IDLE notifier goes straight to STOPPED.
        """
        if self._state is NotifierState.IDLE:
            self._registry.close()
            self._state = NotifierState.STOPPED
        self._stop_requested.set()

    def _begin(self) -> None:
        """Move IDLE -> RUNNING and spawn the poll loop."""
        if self._state is not NotifierState.IDLE:
            raise NotifierStateError(f"cannot run notifier in state {self._state.value}")

        self._state = NotifierState.RUNNING
        self._poll_task = asyncio.create_task(self._poll_loop(), name="telenotify-poll-loop")
        logger.info(
            "Notifier started",
            cursor=self._cursor,
            poll_interval=self._poll_interval,
        )

    async def _wait_and_shutdown(self, stop_event: asyncio.Event | None) -> None:
        waiters = [asyncio.create_task(self._stop_requested.wait())]
        if stop_event is not None:
            waiters.append(asyncio.create_task(stop_event.wait()))

        try:
            await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
        finally:
            for waiter in waiters:
                waiter.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await waiter
            await self._shutdown()

    async def _shutdown(self) -> None:
        self._state = NotifierState.STOPPING
        self._registry.close()
        self._stop_requested.set()
        logger.info("Notifier stopping", cursor=self._cursor)

        if self._poll_task is not None:
            await self._poll_task
            self._poll_task = None

        self._state = NotifierState.STOPPED
        logger.info("Notifier stopped", cursor=self._cursor, stats=self.stats)

    async def _poll_loop(self) -> None:
        """Tick every poll_interval until stop is requested."""
        while not self._stop_requested.is_set():
            try:
                await asyncio.wait_for(self._stop_requested.wait(), timeout=self._poll_interval)
            except TimeoutError:
                await self._tick()

    async def _tick(self) -> None:
        """Fetch one batch, dispatch it, then advance the cursor."""
        offset = self._cursor + 1
        self._stats.polls += 1

        try:
            updates = await self._source.get_updates(offset)
        except NotifierError as e:
            self._report(e, offset)
            return
        except Exception as e:
            error = TransportError(f"error getting updates: {e}")
            error.__cause__ = e
            self._report(error, offset)
            return

        if not updates:
            return

        self._stats.updates_received += len(updates)
        batch = self._fresh(updates)
        if not batch:
            return

        self._stats.deliveries += await self._registry.dispatch(batch)

        new_cursor = max(update.sequence_id for update in batch)
        logger.debug(
            "Updating offset",
            previous=self._cursor,
            cursor=new_cursor,
            batch_size=len(batch),
        )
        self._cursor = new_cursor

    def _fresh(self, updates: list[Update]) -> list[Update]:
        """Drop updates at or below the cursor and repeats within the batch."""
        seen: set[int] = set()
        batch: list[Update] = []
        for update in updates:
            if update.sequence_id <= self._cursor or update.sequence_id in seen:
                continue
            seen.add(update.sequence_id)
            batch.append(update)

        skipped = len(updates) - len(batch)
        if skipped:
            self._stats.duplicates_skipped += skipped
            logger.debug("Skipping already delivered updates", count=skipped, cursor=self._cursor)
        return batch

    def _report(self, error: NotifierError, offset: int) -> None:
        self._stats.failed_polls += 1
        logger.warning(
            "Error getting updates",
            offset=offset,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._errors.put_nowait(error)
