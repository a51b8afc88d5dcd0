# -*- coding: utf-8 -*-
"""Application services: cache, watermarks, poll cycle and scheduler."""

from polymarket_activity_notifier.services.poll_cycle import PollCycleService
from polymarket_activity_notifier.services.scheduler import PollScheduler
from polymarket_activity_notifier.services.subscription_cache import SubscriptionCache
from polymarket_activity_notifier.services.watermark import WatermarkStore

__all__ = [
    "PollCycleService",
    "PollScheduler",
    "SubscriptionCache",
    "WatermarkStore",
]
