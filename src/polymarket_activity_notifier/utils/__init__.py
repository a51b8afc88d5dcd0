# -*- coding: utf-8 -*-
"""Utility modules."""

from polymarket_activity_notifier.utils.dedupe import activity_key, delivery_key
from polymarket_activity_notifier.utils.validation import (
    is_hex_address,
    mask_address,
    normalize_address,
    to_unix_seconds,
)

__all__ = [
    "activity_key",
    "delivery_key",
    "is_hex_address",
    "mask_address",
    "normalize_address",
    "to_unix_seconds",
]
