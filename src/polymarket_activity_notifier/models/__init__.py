# -*- coding: utf-8 -*-
"""Domain models."""

from polymarket_activity_notifier.models.activity import ActivityEvent, ActivityKind, TradeSide
from polymarket_activity_notifier.models.cycle_result import CycleResult
from polymarket_activity_notifier.models.pending_message import PendingMessage
from polymarket_activity_notifier.models.subscription import (
    SUPPORTED_LANGUAGES,
    CategoryFilter,
    FilterMode,
    Language,
    SubscriberConfig,
    SubscriberRef,
    Subscription,
)
from polymarket_activity_notifier.models.watermark import WatermarkState

__all__ = [
    "ActivityEvent",
    "ActivityKind",
    "CategoryFilter",
    "CycleResult",
    "FilterMode",
    "Language",
    "PendingMessage",
    "SUPPORTED_LANGUAGES",
    "SubscriberConfig",
    "SubscriberRef",
    "Subscription",
    "TradeSide",
    "WatermarkState",
]
