# -*- coding: utf-8 -*-
"""In-memory watermark repository (snapshot copied on load and save)."""

from __future__ import annotations

from polymarket_activity_notifier.models.watermark import WatermarkState
from polymarket_activity_notifier.persistence.repositories.interfaces.watermark_repository import (
    IWatermarkRepository,
)


class InMemoryWatermarkRepository(IWatermarkRepository):
    """In-memory implementation of IWatermarkRepository."""

    def __init__(self, initial: WatermarkState | None = None) -> None:
        self._state = initial or WatermarkState()
        self.save_count = 0

    async def load(self) -> WatermarkState:
        return self._state.copy()

    async def save(self, state: WatermarkState) -> None:
        self._state = state.copy()
        self.save_count += 1
