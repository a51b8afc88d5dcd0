# -*- coding: utf-8 -*-
"""WatermarkStore: per-address last-seen event time plus a bounded recent delivery-key set."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

import structlog

from polymarket_activity_notifier.models.watermark import WatermarkState
from polymarket_activity_notifier.utils.validation import mask_address

if TYPE_CHECKING:
    from polymarket_activity_notifier.config import Settings
    from polymarket_activity_notifier.persistence.repositories.interfaces import (
        IWatermarkRepository,
    )

_SECONDS_PER_DAY = 86_400


class WatermarkStore:
    """Durable watermark map with orphan eviction and a capped recent-id list.

    All reads are served from the in-memory snapshot. ``commit`` builds the next
    snapshot, persists it through the repository and only then swaps it in; a
    failed save leaves the previous snapshot untouched.
    """

    def __init__(
        self,
        repository: IWatermarkRepository,
        settings: Settings,
        *,
        clock: Callable[[], float] = time.time,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            repository: Snapshot persistence (in-memory or JSON file).
            settings: Application settings (uses settings.storage.recent_ids_cap and orphan_ttl_days).
            clock: Returns current unix time in seconds (injected for tests).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._repository = repository
        self._settings = settings
        self._clock = clock
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._state = WatermarkState()
        self._recent_set: frozenset[str] = frozenset()
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def state(self) -> WatermarkState:
        return self._state

    async def load(self, *, force: bool = False) -> None:
        """Read the persisted snapshot. No-op once loaded unless force is set.

        Raises:
            StorageError: If the snapshot cannot be read.
        """
        if self._loaded and not force:
            return
        state = await self._repository.load()
        self._swap(state)
        self._loaded = True
        self._logger.info(
            "watermark_store_loaded",
            watermark_addresses=len(state.last_seen),
            watermark_recent_ids=len(state.recent_ids),
        )

    def get(self, address: str) -> int:
        """Return the last seen event time for the address (0 if never seen)."""
        return self._state.last_seen.get(address.lower(), 0)

    def get_tie_keys(self, address: str) -> frozenset[str]:
        """Event keys already processed at exactly the address's watermark second."""
        return frozenset(self._state.tie_keys.get(address.lower(), ()))

    def get_recent_ids(self) -> frozenset[str]:
        return self._recent_set

    async def commit(
        self,
        updates: Mapping[str, int],
        new_ids: Iterable[str],
        valid_addresses: Iterable[str],
        tie_keys: Mapping[str, Iterable[str]] | None = None,
    ) -> None:
        """Apply updates, merge ids, evict orphans and persist the result.

        Args:
            updates: address -> candidate watermark; applied only when greater than the current one.
            new_ids: Delivery keys recorded this cycle, in delivery order.
            valid_addresses: Addresses that currently have at least one subscriber.
            tie_keys: address -> event keys processed at exactly its candidate watermark.
                They replace the stored keys when the watermark advances and are merged
                into them when the candidate equals the current watermark.

        Raises:
            StorageError: If the snapshot could not be persisted (state is unchanged).
        """
        storage = self._settings.storage
        last_seen = dict(self._state.last_seen)
        ties = dict(self._state.tie_keys)
        advanced = 0
        for address, ts in updates.items():
            key = address.lower()
            current = last_seen.get(key, 0)
            keys = tuple((tie_keys or {}).get(address, ()))
            if ts > current:
                last_seen[key] = ts
                advanced += 1
                if keys:
                    ties[key] = tuple(dict.fromkeys(keys))
                else:
                    ties.pop(key, None)
            elif ts == current and keys:
                ties[key] = tuple(dict.fromkeys(ties.get(key, ()) + keys))

        recent = list(self._state.recent_ids)
        seen = set(recent)
        for delivery_key in new_ids:
            if delivery_key not in seen:
                seen.add(delivery_key)
                recent.append(delivery_key)
        recent = recent[-storage.recent_ids_cap :]

        valid = {a.lower() for a in valid_addresses}
        cutoff = int(self._clock()) - storage.orphan_ttl_days * _SECONDS_PER_DAY
        evicted = [a for a, ts in last_seen.items() if a not in valid and ts < cutoff]
        for address in evicted:
            del last_seen[address]
            ties.pop(address, None)
            self._logger.debug(
                "watermark_orphan_evicted",
                watermark_address_masked=mask_address(address),
            )

        state = WatermarkState(last_seen=last_seen, recent_ids=tuple(recent), tie_keys=ties)
        if state == self._state:
            return
        await self._repository.save(state)
        self._swap(state)
        self._logger.debug(
            "watermark_store_committed",
            watermark_advanced=advanced,
            watermark_evicted=len(evicted),
            watermark_recent_ids=len(state.recent_ids),
        )

    def _swap(self, state: WatermarkState) -> None:
        self._state = state
        self._recent_set = frozenset(state.recent_ids)
