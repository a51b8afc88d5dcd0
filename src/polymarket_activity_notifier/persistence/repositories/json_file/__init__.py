"""JSON file repository implementations (one document per store, atomic replace on write)."""

from polymarket_activity_notifier.persistence.repositories.json_file.config_repository import (
    JsonFileConfigRepository,
)
from polymarket_activity_notifier.persistence.repositories.json_file.document import JsonDocument
from polymarket_activity_notifier.persistence.repositories.json_file.subscription_repository import (
    JsonFileSubscriptionRepository,
)
from polymarket_activity_notifier.persistence.repositories.json_file.watermark_repository import (
    JsonFileWatermarkRepository,
)

__all__ = [
    "JsonDocument",
    "JsonFileConfigRepository",
    "JsonFileSubscriptionRepository",
    "JsonFileWatermarkRepository",
]
