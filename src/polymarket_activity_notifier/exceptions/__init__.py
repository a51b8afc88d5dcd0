"""Exceptions subpackage."""

from polymarket_activity_notifier.exceptions.exceptions import (
    MissingRequiredConfigError,
    NotificationDeliveryError,
    NotifierError,
    RateLimitError,
    StorageError,
    UpstreamAPIError,
)

__all__ = [
    "MissingRequiredConfigError",
    "NotificationDeliveryError",
    "NotifierError",
    "RateLimitError",
    "StorageError",
    "UpstreamAPIError",
]
