"""HTTP API."""

from polymarket_activity_notifier.api.server import NotifierApi, create_app

__all__ = ["NotifierApi", "create_app"]
