"""Abstract interface for the per-chat config store."""

from __future__ import annotations

from abc import ABC, abstractmethod

from polymarket_activity_notifier.models.subscription import SubscriberConfig


class IConfigRepository(ABC):
    """Interface for reading (and, for the command layer, writing) SubscriberConfig."""

    @abstractmethod
    async def list_chat_ids(
        self,
        *,
        cursor: str | None = None,
        limit: int = 1000,
    ) -> tuple[list[int], str | None]:
        """Return one page of chat ids that have a config record."""
        ...

    @abstractmethod
    async def get(self, chat_id: int) -> SubscriberConfig | None:
        """Return the chat's config, or None if the chat never configured anything."""
        ...

    @abstractmethod
    async def save(self, chat_id: int, config: SubscriberConfig) -> None:
        """Create or replace the chat's config."""
        ...

    @abstractmethod
    async def delete(self, chat_id: int) -> None:
        """Remove the chat's config. Idempotent."""
        ...
