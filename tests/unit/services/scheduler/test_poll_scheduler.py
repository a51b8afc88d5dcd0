# -*- coding: utf-8 -*-
"""Unit tests for PollScheduler."""

from __future__ import annotations

import asyncio

from polymarket_activity_notifier.config import Settings
from polymarket_activity_notifier.models.cycle_result import CycleResult
from polymarket_activity_notifier.services.scheduler import PollScheduler
from polymarket_activity_notifier.services.subscription_cache import SubscriptionCache
from polymarket_activity_notifier.services.watermark import WatermarkStore


class _FakeCycle:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls = 0
        self.error = error

    async def run_cycle(self) -> CycleResult:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return CycleResult(total_subscriptions=3, addresses_checked=1)


class _ParkingSleep:
    """Records requested delays and parks the caller until the test releases it."""

    def __init__(self) -> None:
        self.delays: list[float] = []
        self.parked = asyncio.Event()
        self._release = asyncio.Event()

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        self.parked.set()
        await self._release.wait()


def _scheduler(
    cycle: _FakeCycle,
    cache: SubscriptionCache,
    watermark_store: WatermarkStore,
    settings: Settings,
    sleep: _ParkingSleep,
    ticks: list[float] | None = None,
) -> PollScheduler:
    clock = iter(ticks or [100.0, 103.0])
    return PollScheduler(
        cycle,  # type: ignore[arg-type]
        cache,
        watermark_store,
        settings,
        sleep=sleep,
        monotonic=lambda: next(clock),
    )


def test_next_delay_is_remaining_interval_with_floor(
    cache: SubscriptionCache,
    watermark_store: WatermarkStore,
    settings: Settings,
) -> None:
    scheduler = _scheduler(_FakeCycle(), cache, watermark_store, settings, _ParkingSleep())

    assert scheduler.next_delay(3.0) == 7.0
    assert scheduler.next_delay(9.5) == 1.0
    assert scheduler.next_delay(42.0) == 1.0


async def test_ensure_running_arms_one_tick_and_is_idempotent(
    cache: SubscriptionCache,
    watermark_store: WatermarkStore,
    settings: Settings,
) -> None:
    cycle = _FakeCycle()
    sleep = _ParkingSleep()
    scheduler = _scheduler(cycle, cache, watermark_store, settings, sleep)

    assert scheduler.ensure_running() is True
    assert scheduler.ensure_running() is False
    await asyncio.wait_for(sleep.parked.wait(), timeout=1)

    assert scheduler.is_running
    assert scheduler.ensure_running() is False
    assert cycle.calls == 1
    assert scheduler.ticks == 1
    assert sleep.delays == [7.0]
    assert scheduler.last_result is not None
    assert scheduler.last_result.total_subscriptions == 3

    await scheduler.stop()
    assert not scheduler.is_running


async def test_first_tick_hydrates_cache_and_watermarks(
    cache: SubscriptionCache,
    watermark_store: WatermarkStore,
    settings: Settings,
) -> None:
    sleep = _ParkingSleep()
    scheduler = _scheduler(_FakeCycle(), cache, watermark_store, settings, sleep)
    assert not cache.is_loaded
    assert not watermark_store.is_loaded

    scheduler.ensure_running()
    await asyncio.wait_for(sleep.parked.wait(), timeout=1)

    assert cache.is_loaded
    assert watermark_store.is_loaded
    await scheduler.stop()


async def test_failed_tick_rearms_after_full_interval(
    cache: SubscriptionCache,
    watermark_store: WatermarkStore,
    settings: Settings,
) -> None:
    cycle = _FakeCycle(error=RuntimeError("unexpected"))
    sleep = _ParkingSleep()
    scheduler = _scheduler(cycle, cache, watermark_store, settings, sleep)

    scheduler.ensure_running()
    await asyncio.wait_for(sleep.parked.wait(), timeout=1)

    assert cycle.calls == 1
    assert sleep.delays == [settings.scheduler.interval_seconds]
    assert scheduler.is_running
    assert scheduler.last_result is None
    await scheduler.stop()


async def test_stop_then_ensure_running_rearms(
    cache: SubscriptionCache,
    watermark_store: WatermarkStore,
    settings: Settings,
) -> None:
    cycle = _FakeCycle()
    sleep = _ParkingSleep()
    scheduler = _scheduler(
        cycle, cache, watermark_store, settings, sleep, ticks=[0.0, 1.0, 10.0, 11.0]
    )

    scheduler.ensure_running()
    await asyncio.wait_for(sleep.parked.wait(), timeout=1)
    await scheduler.stop()
    await scheduler.stop()

    sleep.parked.clear()
    assert scheduler.ensure_running() is True
    await asyncio.wait_for(sleep.parked.wait(), timeout=1)

    assert cycle.calls == 2
    assert sleep.delays == [9.0, 9.0]
    await scheduler.stop()
