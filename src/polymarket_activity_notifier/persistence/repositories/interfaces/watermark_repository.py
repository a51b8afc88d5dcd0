"""Abstract interface for watermark persistence (whole-snapshot load/save)."""

from __future__ import annotations

from abc import ABC, abstractmethod

from polymarket_activity_notifier.models.watermark import WatermarkState


class IWatermarkRepository(ABC):
    """Persist WatermarkState as one unit.

    ``save`` must be all-or-nothing: after a failed save, ``load`` returns the
    previous snapshot.
    """

    @abstractmethod
    async def load(self) -> WatermarkState:
        """Return the stored snapshot, or an empty state if nothing was saved yet."""
        ...

    @abstractmethod
    async def save(self, state: WatermarkState) -> None:
        """Replace the stored snapshot.

        Raises:
            StorageError: If the snapshot could not be written.
        """
        ...
