"""HTTP and API clients."""

from polymarket_activity_notifier.clients.data_api import DataApiClient
from polymarket_activity_notifier.clients.http import AsyncHttpClient

__all__ = [
    "AsyncHttpClient",
    "DataApiClient",
]
