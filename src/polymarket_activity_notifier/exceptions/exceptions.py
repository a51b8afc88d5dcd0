"""Custom exceptions for the activity feed, delivery and storage."""

from __future__ import annotations


class NotifierError(Exception):
    """Base exception for activity notifier errors."""

    pass


class MissingRequiredConfigError(NotifierError):
    """Raised when a required configuration value is missing."""

    def __init__(self, setting: str) -> None:
        super().__init__(f"Missing required setting: {setting}")
        self.setting = setting


class UpstreamAPIError(NotifierError):
    """Raised when a Data API request fails after retries."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class RateLimitError(UpstreamAPIError):
    """Raised when the Data API keeps answering HTTP 429 (Too Many Requests)."""

    def __init__(
        self,
        message: str = "Rate limit exceeded (429)",
        *,
        url: str | None = None,
        retry_after: float | None = None,
    ) -> None:
        super().__init__(message, url=url, status_code=429)
        self.retry_after = retry_after


class NotificationDeliveryError(NotifierError):
    """Raised when a message could not reach the messaging platform (transport fault)."""

    def __init__(
        self,
        message: str,
        *,
        chat_id: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.chat_id = chat_id
        self.cause = cause


class StorageError(NotifierError):
    """Raised when a durable store cannot be read or written."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.path = path
        self.cause = cause
