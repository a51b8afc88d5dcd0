"""Persistence layer (repositories for subscriptions, configs and watermarks)."""

from polymarket_activity_notifier.persistence.repositories import (
    IConfigRepository,
    InMemoryConfigRepository,
    InMemorySubscriptionRepository,
    InMemoryWatermarkRepository,
    ISubscriptionRepository,
    IWatermarkRepository,
    JsonFileConfigRepository,
    JsonFileSubscriptionRepository,
    JsonFileWatermarkRepository,
)

__all__ = [
    "IConfigRepository",
    "ISubscriptionRepository",
    "IWatermarkRepository",
    "InMemoryConfigRepository",
    "InMemorySubscriptionRepository",
    "InMemoryWatermarkRepository",
    "JsonFileConfigRepository",
    "JsonFileSubscriptionRepository",
    "JsonFileWatermarkRepository",
]
