# -*- coding: utf-8 -*-
"""Repository interfaces (abstractions). Implementations live in in_memory/ and json_file/."""

from polymarket_activity_notifier.persistence.repositories.interfaces.config_repository import (
    IConfigRepository,
)
from polymarket_activity_notifier.persistence.repositories.interfaces.subscription_repository import (
    ISubscriptionRepository,
)
from polymarket_activity_notifier.persistence.repositories.interfaces.watermark_repository import (
    IWatermarkRepository,
)

__all__ = [
    "IConfigRepository",
    "ISubscriptionRepository",
    "IWatermarkRepository",
]
