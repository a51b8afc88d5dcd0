# -*- coding: utf-8 -*-
"""In-memory subscription repository (keyed by chat id)."""

from __future__ import annotations

from polymarket_activity_notifier.models.subscription import Subscription
from polymarket_activity_notifier.persistence.repositories.interfaces.subscription_repository import (
    ISubscriptionRepository,
)
from polymarket_activity_notifier.persistence.repositories.pagination import paginate_chat_ids


class InMemorySubscriptionRepository(ISubscriptionRepository):
    """In-memory implementation of ISubscriptionRepository."""

    def __init__(self, initial: dict[int, list[Subscription]] | None = None) -> None:
        self._store: dict[int, list[Subscription]] = {
            chat_id: list(subs) for chat_id, subs in (initial or {}).items() if subs
        }

    async def list_chat_ids(
        self,
        *,
        cursor: str | None = None,
        limit: int = 1000,
    ) -> tuple[list[int], str | None]:
        return paginate_chat_ids(self._store.keys(), cursor=cursor, limit=limit)

    async def get(self, chat_id: int) -> list[Subscription]:
        return list(self._store.get(chat_id, []))

    async def save(self, chat_id: int, subscriptions: list[Subscription]) -> None:
        if subscriptions:
            self._store[chat_id] = list(subscriptions)
        else:
            self._store.pop(chat_id, None)
