# -*- coding: utf-8 -*-
"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest
from bubus import EventBus  # type: ignore[import-untyped]

from polymarket_activity_notifier.config import Settings
from polymarket_activity_notifier.models.activity import ActivityEvent
from polymarket_activity_notifier.notifications.stylers.activity_styler import ActivityMessageStyler
from polymarket_activity_notifier.persistence.repositories.in_memory import (
    InMemoryConfigRepository,
    InMemorySubscriptionRepository,
    InMemoryWatermarkRepository,
)
from polymarket_activity_notifier.services.subscription_cache import SubscriptionCache
from polymarket_activity_notifier.services.watermark import WatermarkStore


class FakeDataApi:
    """Data API double: canned events per address (returned whatever the lower bound), failures, call log."""

    def __init__(self, events: dict[str, list[ActivityEvent]] | None = None) -> None:
        self.events: dict[str, list[ActivityEvent]] = events or {}
        self.errors: dict[str, Exception] = {}
        self.calls: list[tuple[str, int]] = []

    async def fetch_activity(self, address: str, since: int) -> list[ActivityEvent]:
        self.calls.append((address, since))
        if address in self.errors:
            raise self.errors[address]
        return list(self.events.get(address, []))


class FakeNotifier:
    """Notifier double: records successful sends; chats in fail_chats get False."""

    def __init__(self) -> None:
        self.sent: list[tuple[int, str]] = []
        self.attempts: list[tuple[int, str]] = []
        self.fail_chats: set[int] = set()
        self.raise_chats: dict[int, Exception] = {}

    async def send(self, chat_id: int, text: str) -> bool:
        self.attempts.append((chat_id, text))
        if chat_id in self.raise_chats:
            raise self.raise_chats[chat_id]
        if chat_id in self.fail_chats:
            return False
        self.sent.append((chat_id, text))
        return True


@pytest.fixture
def address() -> str:
    """Default watched address used by tests."""
    return "0x2d27b6e21b3d4d7c9a43fdf58f12345678907706"


@pytest.fixture
def other_address() -> str:
    return "0x9f1c3e5a7b9d1f3e5a7b9d1f3e5a7b9d1f3e5a7b"


@pytest.fixture
def settings() -> Settings:
    """Settings with no send jitter and small caps, independent of the environment."""
    return Settings(
        scheduler={
            "interval_seconds": 10,
            "min_delay_seconds": 1,
            "send_delay_min_seconds": 0,
            "send_delay_max_seconds": 0,
        },
        storage={"recent_ids_cap": 1000, "orphan_ttl_days": 90, "page_size": 2},
        telegram={"enabled": False},
        server={"enabled": False},
    )


@pytest.fixture
def event_factory(address: str) -> Callable[..., ActivityEvent]:
    """Build an ActivityEvent from Data API fields with sensible defaults."""

    def _build(event_time: int, **overrides: Any) -> ActivityEvent:
        raw: dict[str, Any] = {
            "proxyWallet": address,
            "timestamp": event_time,
            "type": "TRADE",
            "side": "BUY",
            "price": 0.55,
            "size": 181.82,
            "usdcSize": 100.0,
            "title": "Lakers vs. Celtics",
            "outcome": "Lakers",
            "slug": "nba-lakers-vs-celtics",
            "eventSlug": "nba-lakers-vs-celtics",
            "transactionHash": f"0xtx{event_time}",
        }
        raw.update(overrides)
        return ActivityEvent.from_response(raw)

    return _build


@pytest.fixture
def subscription_repo() -> InMemorySubscriptionRepository:
    """Fresh in-memory subscription repository per test."""
    return InMemorySubscriptionRepository()


@pytest.fixture
def config_repo() -> InMemoryConfigRepository:
    """Fresh in-memory config repository per test."""
    return InMemoryConfigRepository()


@pytest.fixture
def watermark_repo() -> InMemoryWatermarkRepository:
    """Fresh in-memory watermark repository per test."""
    return InMemoryWatermarkRepository()


@pytest.fixture
def cache(
    subscription_repo: InMemorySubscriptionRepository,
    config_repo: InMemoryConfigRepository,
    settings: Settings,
) -> SubscriptionCache:
    return SubscriptionCache(subscription_repo, config_repo, settings)


@pytest.fixture
def clock() -> list[float]:
    """Mutable clock value shared by stores and cycles: clock[0] is 'now' in unix seconds."""
    return [2_000_000.0]


@pytest.fixture
def watermark_store(
    watermark_repo: InMemoryWatermarkRepository,
    settings: Settings,
    clock: list[float],
) -> WatermarkStore:
    return WatermarkStore(watermark_repo, settings, clock=lambda: clock[0])


@pytest.fixture
def data_api() -> FakeDataApi:
    return FakeDataApi()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def styler() -> ActivityMessageStyler:
    return ActivityMessageStyler()


@pytest.fixture
def event_bus() -> EventBus:
    """Isolated event bus instance for tests."""
    return EventBus(
        name="PolymarketActivityNotifierTests",
        max_history_size=200,
        wal_path=None,
    )
