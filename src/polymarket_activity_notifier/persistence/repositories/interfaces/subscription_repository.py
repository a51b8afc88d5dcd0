"""Abstract interface for the subscription store (keyed by chat id)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from polymarket_activity_notifier.models.subscription import Subscription


class ISubscriptionRepository(ABC):
    """Interface for reading (and, for the command layer, writing) chat subscriptions."""

    @abstractmethod
    async def list_chat_ids(
        self,
        *,
        cursor: str | None = None,
        limit: int = 1000,
    ) -> tuple[list[int], str | None]:
        """Return one page of chat ids that have a subscription record.

        Returns:
            (chat_ids, next_cursor); next_cursor is None on the last page.
        """
        ...

    @abstractmethod
    async def get(self, chat_id: int) -> list[Subscription]:
        """Return the chat's subscriptions (empty list if none)."""
        ...

    @abstractmethod
    async def save(self, chat_id: int, subscriptions: list[Subscription]) -> None:
        """Replace the chat's subscriptions. An empty list removes the record."""
        ...

    async def delete(self, chat_id: int) -> None:
        """Remove the chat's record. Default impl saves an empty list."""
        await self.save(chat_id, [])
