"""In-memory repository implementations."""

from polymarket_activity_notifier.persistence.repositories.in_memory.config_repository import (
    InMemoryConfigRepository,
)
from polymarket_activity_notifier.persistence.repositories.in_memory.subscription_repository import (
    InMemorySubscriptionRepository,
)
from polymarket_activity_notifier.persistence.repositories.in_memory.watermark_repository import (
    InMemoryWatermarkRepository,
)

__all__ = [
    "InMemoryConfigRepository",
    "InMemorySubscriptionRepository",
    "InMemoryWatermarkRepository",
]
