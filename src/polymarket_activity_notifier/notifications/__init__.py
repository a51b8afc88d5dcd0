"""Notification subsystem."""

from polymarket_activity_notifier.notifications.strategies import (
    BaseNotificationStrategy,
    ConsoleNotifier,
    TelegramNotifier,
)
from polymarket_activity_notifier.notifications.stylers import (
    BATCH_SEPARATOR,
    ActivityMessageStyler,
)
from polymarket_activity_notifier.notifications.types import MessageRenderer

__all__ = [
    "ActivityMessageStyler",
    "BATCH_SEPARATOR",
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "MessageRenderer",
    "TelegramNotifier",
]
