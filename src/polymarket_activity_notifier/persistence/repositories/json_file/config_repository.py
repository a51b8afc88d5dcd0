# -*- coding: utf-8 -*-
"""Per-chat config repository backed by one JSON document ({chatId: config record})."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Optional

import structlog

from polymarket_activity_notifier.models.subscription import Language, SubscriberConfig
from polymarket_activity_notifier.persistence.repositories.interfaces.config_repository import (
    IConfigRepository,
)
from polymarket_activity_notifier.persistence.repositories.json_file.document import JsonDocument
from polymarket_activity_notifier.persistence.repositories.pagination import paginate_chat_ids


class JsonFileConfigRepository(IConfigRepository):
    """JSON file implementation of IConfigRepository.

    Missing fields inside a record fall back to the given defaults; a record
    that cannot be parsed at all is treated as absent.
    """

    def __init__(
        self,
        path: str | Path,
        *,
        default_language: Language = "en",
        default_min_amount: float = 10.0,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._document = JsonDocument(path)
        self._default_language = default_language
        self._default_min_amount = default_min_amount
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def list_chat_ids(
        self,
        *,
        cursor: str | None = None,
        limit: int = 1000,
    ) -> tuple[list[int], str | None]:
        data = await self._document.read()
        return paginate_chat_ids((int(k) for k in data), cursor=cursor, limit=limit)

    async def get(self, chat_id: int) -> SubscriberConfig | None:
        data = await self._document.read()
        record = data.get(str(chat_id))
        if record is None:
            return None
        try:
            return SubscriberConfig.from_record(
                record,
                default_language=self._default_language,
                default_min_amount=self._default_min_amount,
            )
        except (AttributeError, TypeError, ValueError) as e:
            self._logger.warning(
                "config_repository_record_invalid",
                config_chat_id=chat_id,
                error_message=str(e),
            )
            return None

    async def save(self, chat_id: int, config: SubscriberConfig) -> None:
        await self._document.update(chat_id, config.to_record())

    async def delete(self, chat_id: int) -> None:
        await self._document.update(chat_id, None)
