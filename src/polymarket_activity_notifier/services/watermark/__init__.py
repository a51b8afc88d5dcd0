"""Watermark store service."""

from polymarket_activity_notifier.services.watermark.watermark_store import WatermarkStore

__all__ = ["WatermarkStore"]
