# -*- coding: utf-8 -*-
"""PollScheduler: self-rearming single-slot timer that drives poll cycles."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

import structlog

from polymarket_activity_notifier.models.cycle_result import CycleResult

if TYPE_CHECKING:
    from polymarket_activity_notifier.config import Settings
    from polymarket_activity_notifier.services.poll_cycle import PollCycleService
    from polymarket_activity_notifier.services.subscription_cache import SubscriptionCache
    from polymarket_activity_notifier.services.watermark import WatermarkStore


class PollScheduler:
    """Keeps exactly one tick armed: run a cycle, then re-arm after the remaining interval.

    The next tick is armed ``max(interval - elapsed, min_delay)`` after the
    previous one started, or a full interval after a failed tick. The scheduler
    never stops on its own; only ``stop()`` disarms it.
    """

    def __init__(
        self,
        poll_cycle: PollCycleService,
        cache: SubscriptionCache,
        watermark_store: WatermarkStore,
        settings: Settings,
        *,
        sleep: Callable[[float], Any] = asyncio.sleep,
        monotonic: Callable[[], float] = time.monotonic,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            poll_cycle: Orchestrator run on every tick.
            cache: Subscription cache, hydrated on the first tick.
            watermark_store: Watermark store, loaded on the first tick.
            settings: Application settings (uses settings.scheduler interval and floor).
            sleep: Awaitable sleep used to wait for the next tick (injected for tests).
            monotonic: Clock used to measure cycle duration.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._poll_cycle = poll_cycle
        self._cache = cache
        self._store = watermark_store
        self._settings = settings
        self._sleep = sleep
        self._monotonic = monotonic
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._task: asyncio.Task[None] | None = None
        self._last_result: CycleResult | None = None
        self._ticks = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def last_result(self) -> CycleResult | None:
        return self._last_result

    @property
    def ticks(self) -> int:
        return self._ticks

    def ensure_running(self) -> bool:
        """Arm an immediate tick unless one is already pending or running.

        Must be called from inside the event loop. Returns True if a tick was armed.
        """
        if self.is_running:
            return False
        self._task = asyncio.get_running_loop().create_task(
            self._run(0.0), name="poll-scheduler"
        )
        self._logger.info("scheduler_armed")
        return True

    async def stop(self) -> None:
        """Cancel the pending tick and wait for it to unwind."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        self._logger.info("scheduler_stopped", scheduler_ticks=self._ticks)

    def next_delay(self, elapsed: float) -> float:
        """Seconds to wait before the next tick after a cycle that took ``elapsed`` seconds."""
        cfg = self._settings.scheduler
        return max(cfg.interval_seconds - elapsed, cfg.min_delay_seconds)

    async def _run(self, delay: float) -> None:
        while True:
            if delay > 0:
                await self._sleep(delay)
            delay = await self._on_tick()

    async def _on_tick(self) -> float:
        """Run one tick and return the delay before the next one."""
        self._ticks += 1
        started = self._monotonic()
        try:
            if not self._cache.is_loaded:
                await self._cache.load_all()
            if not self._store.is_loaded:
                await self._store.load()
            self._last_result = await self._poll_cycle.run_cycle()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self._logger.exception(
                "scheduler_tick_failed",
                scheduler_tick=self._ticks,
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return self._settings.scheduler.interval_seconds

        elapsed = self._monotonic() - started
        delay = self.next_delay(elapsed)
        self._logger.debug(
            "scheduler_tick_completed",
            scheduler_tick=self._ticks,
            scheduler_elapsed_seconds=round(elapsed, 3),
            scheduler_next_delay_seconds=round(delay, 3),
        )
        return delay
