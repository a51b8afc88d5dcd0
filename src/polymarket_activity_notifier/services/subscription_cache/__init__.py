"""Subscription/config cache service."""

from polymarket_activity_notifier.services.subscription_cache.subscription_cache import (
    SubscriptionCache,
)

__all__ = ["SubscriptionCache"]
