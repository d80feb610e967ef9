"""Subscription registry fanning updates out to subscriber queues."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field
from uuid import UUID, uuid4

import structlog

from telenotify.core.errors import ShutdownInProgressError
from telenotify.core.events.types import UpdateKind
from telenotify.core.events.update import Update

logger = structlog.get_logger(__name__)


@dataclass
class Subscription:
    """A registered consumer: interest filter plus delivery queue."""

    kinds: frozenset[UpdateKind] | None
    queue: asyncio.Queue[Update]
    id: UUID = field(default_factory=uuid4)

    def wants(self, kind: UpdateKind) -> bool:
        """Check whether this subscription is interested in ``kind``."""
        return self.kinds is None or kind in self.kinds


class SubscriptionRegistry:
    """
    Concurrent map of subscription id to Subscription.

    A single lock serializes subscribe, unsubscribe and dispatch. Dispatch
    holds it for an entire batch, so a subscription added while a batch is
    being delivered receives none of that batch.

    Backpressure: delivery awaits ``queue.put``. A subscriber whose bounded
    queue is full stalls dispatch, and with it the poll loop, until it
    drains. Nothing is ever dropped.
    """

    def __init__(self, queue_size: int = 100) -> None:
        """
        Initialize the registry.

        Args:
            queue_size: Capacity of each subscriber queue (0 = unbounded)
        """
        self._queue_size = queue_size
        self._subscriptions: dict[UUID, Subscription] = {}
        self._lock = asyncio.Lock()
        self._closed = False

    async def subscribe(
        self,
        kinds: Iterable[UpdateKind] | None,
    ) -> tuple[UUID, asyncio.Queue[Update]]:
        """
        Register a new subscriber.

        Args:
            kinds: Update kinds to receive, or None for all kinds

        Returns:
            Subscription id and the queue updates will be delivered on

        Raises:
            ShutdownInProgressError: If the registry has been closed
        """
        interest = frozenset(kinds) if kinds is not None else None
        async with self._lock:
            if self._closed:
                raise ShutdownInProgressError("cannot subscribe, notifier is shutting down")
            subscription = Subscription(
                kinds=interest,
                queue=asyncio.Queue(maxsize=self._queue_size),
            )
            self._subscriptions[subscription.id] = subscription

        logger.debug(
            "Subscriber added",
            subscription_id=str(subscription.id),
            kinds=sorted(k.value for k in interest) if interest is not None else "*",
        )
        return subscription.id, subscription.queue

    async def unsubscribe(self, subscription_id: UUID) -> None:
        """
        Remove a subscriber. Unknown ids are ignored.

        Raises:
            ShutdownInProgressError: If the registry has been closed
        """
        async with self._lock:
            if self._closed:
                raise ShutdownInProgressError("cannot unsubscribe, notifier is shutting down")
            removed = self._subscriptions.pop(subscription_id, None)

        if removed is not None:
            logger.debug("Subscriber removed", subscription_id=str(subscription_id))

    async def dispatch(self, updates: Iterable[Update]) -> int:
        """
        Deliver a batch, in order, to every matching subscriber.

        Args:
            updates: Batch in ascending sequence order

        Returns:
            Number of deliveries made
        """
        delivered = 0
        async with self._lock:
            for update in updates:
                for subscription in self._subscriptions.values():
                    if subscription.wants(update.kind):
                        await subscription.queue.put(update)
                        delivered += 1
        return delivered

    def close(self) -> None:
        """Refuse further subscribe/unsubscribe calls."""
        self._closed = True

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def subscription_ids(self) -> list[UUID]:
        return list(self._subscriptions)

    def __len__(self) -> int:
        return len(self._subscriptions)
