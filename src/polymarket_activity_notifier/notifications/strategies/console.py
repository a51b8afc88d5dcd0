# -*- coding: utf-8 -*-
"""Console notifier (print-based dry run)."""

from __future__ import annotations

from polymarket_activity_notifier.notifications.strategies.base import BaseNotificationStrategy
from polymarket_activity_notifier.config import Settings


class ConsoleNotifier(BaseNotificationStrategy):
    """Print messages to stdout instead of sending them."""

    def __init__(self, settings: "Settings") -> None:
        super().__init__(settings)
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        self._running = True

    async def shutdown(self) -> None:
        self._running = False

    async def send(self, chat_id: int, text: str) -> bool:
        """Print the message for the chat. Returns False when stopped or disabled."""
        if not self.is_running or not self.settings.console.enabled:
            return False
        print(f"[chat {chat_id}]\n{text}\n")
        return True
