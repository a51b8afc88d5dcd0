# -*- coding: utf-8 -*-
"""Repositories: interfaces (abstractions) and implementations (in_memory, json_file)."""

from polymarket_activity_notifier.persistence.repositories.in_memory import (
    InMemoryConfigRepository,
    InMemorySubscriptionRepository,
    InMemoryWatermarkRepository,
)
from polymarket_activity_notifier.persistence.repositories.interfaces import (
    IConfigRepository,
    ISubscriptionRepository,
    IWatermarkRepository,
)
from polymarket_activity_notifier.persistence.repositories.json_file import (
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
