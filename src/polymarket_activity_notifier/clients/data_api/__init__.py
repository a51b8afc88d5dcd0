"""Polymarket Data API client and response schema."""

from polymarket_activity_notifier.clients.data_api.data_api import (
    NOTIFIABLE_ACTIVITY_TYPES,
    DataApiClient,
)
from polymarket_activity_notifier.clients.data_api.schema import ActivitySchema

__all__ = ["ActivitySchema", "DataApiClient", "NOTIFIABLE_ACTIVITY_TYPES"]
