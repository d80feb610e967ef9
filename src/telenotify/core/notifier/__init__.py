"""Poll loop, subscription registry and lifecycle."""

from telenotify.core.notifier.notifier import NotifierState, NotifierStats, UpdateNotifier
from telenotify.core.notifier.registry import Subscription, SubscriptionRegistry

__all__ = [
    "NotifierState",
    "NotifierStats",
    "Subscription",
    "SubscriptionRegistry",
    "UpdateNotifier",
]
