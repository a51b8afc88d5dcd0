# -*- coding: utf-8 -*-
"""In-memory per-chat config repository."""

from __future__ import annotations

from polymarket_activity_notifier.models.subscription import SubscriberConfig
from polymarket_activity_notifier.persistence.repositories.interfaces.config_repository import (
    IConfigRepository,
)
from polymarket_activity_notifier.persistence.repositories.pagination import paginate_chat_ids


class InMemoryConfigRepository(IConfigRepository):
    """In-memory implementation of IConfigRepository."""

    def __init__(self, initial: dict[int, SubscriberConfig] | None = None) -> None:
        self._store: dict[int, SubscriberConfig] = dict(initial or {})

    async def list_chat_ids(
        self,
        *,
        cursor: str | None = None,
        limit: int = 1000,
    ) -> tuple[list[int], str | None]:
        return paginate_chat_ids(self._store.keys(), cursor=cursor, limit=limit)

    async def get(self, chat_id: int) -> SubscriberConfig | None:
        return self._store.get(chat_id)

    async def save(self, chat_id: int, config: SubscriberConfig) -> None:
        self._store[chat_id] = config

    async def delete(self, chat_id: int) -> None:
        self._store.pop(chat_id, None)
