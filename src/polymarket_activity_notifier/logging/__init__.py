"""Logging setup (structlog + Logfire)."""

from polymarket_activity_notifier.logging.config import configure_logging

__all__ = ["configure_logging"]
