"""Notification strategies."""

from polymarket_activity_notifier.notifications.strategies.base import (
    BaseNotificationStrategy,
)
from polymarket_activity_notifier.notifications.strategies.console import ConsoleNotifier
from polymarket_activity_notifier.notifications.strategies.telegram import TelegramNotifier

__all__ = [
    "BaseNotificationStrategy",
    "ConsoleNotifier",
    "TelegramNotifier",
]
