# -*- coding: utf-8 -*-
"""Base notification strategy."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from polymarket_activity_notifier.config.config import Settings


class BaseNotificationStrategy(ABC):
    """Abstract base for delivery channels (one rendered message to one chat)."""

    def __init__(self, settings: "Settings"):
        """
        Initialize the base strategy.

        Args:
            settings: Global configuration (Settings).
        """
        self.settings = settings

    @property
    @abstractmethod
    def is_running(self) -> bool:
        """Whether the strategy has been initialized and can send."""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        pass

    @abstractmethod
    async def send(self, chat_id: int, text: str) -> bool:
        """
        Deliver one message to one chat.

        Returns:
            True if the platform accepted the message, False for ordinary
            delivery failures (rate limit exhausted, bad or blocked chat).

        Raises:
            NotificationDeliveryError: On transport-level faults only.
        """
        pass
