# -*- coding: utf-8 -*-
"""Watermark repository backed by one JSON document ({"lastSeen", "recentIds", "tieKeys"})."""

from __future__ import annotations

from pathlib import Path

from polymarket_activity_notifier.exceptions import StorageError
from polymarket_activity_notifier.models.watermark import WatermarkState
from polymarket_activity_notifier.persistence.repositories.interfaces.watermark_repository import (
    IWatermarkRepository,
)
from polymarket_activity_notifier.persistence.repositories.json_file.document import JsonDocument


class JsonFileWatermarkRepository(IWatermarkRepository):
    """JSON file implementation of IWatermarkRepository (atomic whole-file replace)."""

    def __init__(self, path: str | Path) -> None:
        self._document = JsonDocument(path)

    async def load(self) -> WatermarkState:
        data = await self._document.read()
        try:
            return WatermarkState.from_dict(data)
        except (TypeError, ValueError) as e:
            raise StorageError(
                "Watermark document is malformed",
                path=str(self._document.path),
                cause=e,
            ) from e

    async def save(self, state: WatermarkState) -> None:
        await self._document.write(state.to_dict())
