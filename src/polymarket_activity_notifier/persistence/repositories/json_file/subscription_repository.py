# -*- coding: utf-8 -*-
"""Subscription repository backed by one JSON document ({chatId: [subscription records]})."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

import structlog

from polymarket_activity_notifier.models.subscription import Subscription
from polymarket_activity_notifier.persistence.repositories.interfaces.subscription_repository import (
    ISubscriptionRepository,
)
from polymarket_activity_notifier.persistence.repositories.json_file.document import JsonDocument
from polymarket_activity_notifier.persistence.repositories.pagination import paginate_chat_ids


class JsonFileSubscriptionRepository(ISubscriptionRepository):
    """JSON file implementation of ISubscriptionRepository.

    Records use the command layer's camelCase shape
    (``{"address", "alias", "addedAt"}``). Rows that cannot be parsed are
    skipped with a warning so one bad row never hides a whole chat.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._document = JsonDocument(path)
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def list_chat_ids(
        self,
        *,
        cursor: str | None = None,
        limit: int = 1000,
    ) -> tuple[list[int], str | None]:
        data = await self._document.read()
        chat_ids = [int(k) for k, v in data.items() if v]
        return paginate_chat_ids(chat_ids, cursor=cursor, limit=limit)

    async def get(self, chat_id: int) -> list[Subscription]:
        data = await self._document.read()
        raw = data.get(str(chat_id)) or []
        if not isinstance(raw, list):
            self._logger.warning(
                "subscription_repository_record_invalid",
                subscription_chat_id=chat_id,
                subscription_record_type=type(raw).__name__,
            )
            return []
        result: list[Subscription] = []
        for record in raw:
            try:
                result.append(Subscription.from_record(record))
            except (AttributeError, TypeError, ValueError) as e:
                self._logger.warning(
                    "subscription_repository_row_skipped",
                    subscription_chat_id=chat_id,
                    error_message=str(e),
                )
        return result

    async def save(self, chat_id: int, subscriptions: list[Subscription]) -> None:
        await self._document.update(
            chat_id,
            [s.to_record() for s in subscriptions] if subscriptions else None,
        )
