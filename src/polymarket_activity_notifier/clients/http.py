# -*- coding: utf-8 -*-
"""Async HTTP client with retries and rate-limit handling."""

from __future__ import annotations

import asyncio
import random
import uuid
import aiohttp
import structlog
from typing import Any, Callable, Dict, Optional
from structlog.contextvars import bound_contextvars

from polymarket_activity_notifier.config import Settings
from polymarket_activity_notifier.exceptions import RateLimitError, UpstreamAPIError

_DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "PolymarketActivityNotifier/1.0",
}


def _retry_after_seconds(response: aiohttp.ClientResponse) -> Optional[float]:
    header = response.headers.get("Retry-After")
    if not header:
        return None
    try:
        return float(header)
    except ValueError:
        return None


class AsyncHttpClient:
    """Async JSON GET client for the Polymarket Data API with retries and 429 handling.

    Injects Settings and optionally an aiohttp.ClientSession. If no session
    is provided, one is created lazily and must be closed via aclose() or by
    using the client as an async context manager.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        session: Optional[aiohttp.ClientSession] = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings: Configuration (uses settings.api.timeout_seconds and max_retries).
            session: Optional shared aiohttp session. If None, the client
                creates and owns a session (call aclose() when done).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._settings = settings
        self._session = session
        self._owns_session = session is None
        self._logger = get_logger(logger_name or self.__class__.__name__)

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self._settings.api.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout, headers=_DEFAULT_HEADERS)
        return self._session

    async def aclose(self) -> None:
        """Close the session if this client owns it."""
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> AsyncHttpClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    def _backoff_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter, capped at 4 seconds."""
        base = min(4.0, 0.25 * (2**attempt))
        return base + random.uniform(0.0, 0.15)

    async def get(
        self,
        url: str,
        *,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """Perform a GET request and return parsed JSON, retrying transient failures.

        Query values that are None are dropped; booleans are sent as "true"/"false"
        (aiohttp only accepts str, int and float).

        Raises:
            RateLimitError: If every attempt was answered with 429.
            UpstreamAPIError: If the request fails after all retries, or at once on a 4xx answer.
        """
        query = {
            k: (str(v).lower() if isinstance(v, bool) else v)
            for k, v in (params or {}).items()
            if v is not None
        }
        max_retries = self._settings.api.max_retries
        last_error: Optional[Exception] = None
        last_retry_after: Optional[float] = None
        rate_limited = 0
        attempts = 0

        with bound_contextvars(
            http_url=url,
            http_request_id=uuid.uuid4().hex[:12],
            http_max_retries=max_retries,
        ):
            for attempt in range(max_retries):
                is_last = attempt == max_retries - 1
                attempts = attempt + 1
                with bound_contextvars(http_attempt=attempts):
                    try:
                        session = await self._get_session()
                        async with session.get(url, params=query) as response:
                            if response.status == 429:
                                rate_limited += 1
                                last_retry_after = _retry_after_seconds(response)
                                self._logger.warning(
                                    "http_get_rate_limited",
                                    http_status_code=429,
                                    http_retry_after_seconds=last_retry_after,
                                )
                                if not is_last:
                                    await asyncio.sleep(
                                        last_retry_after
                                        if last_retry_after and last_retry_after > 0
                                        else self._backoff_delay(attempt)
                                    )
                                continue

                            response.raise_for_status()
                            return await response.json(content_type=None)
                    except aiohttp.ClientResponseError as e:
                        last_error = e
                        if e.status < 500:
                            # Bad address or query: the same request will not succeed later.
                            break
                        self._logger.debug(
                            "http_get_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                            http_status_code=e.status,
                        )
                    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                        last_error = e
                        self._logger.debug(
                            "http_get_retry",
                            error_type=type(e).__name__,
                            error_message=str(e),
                        )
                    if not is_last:
                        await asyncio.sleep(self._backoff_delay(attempt))

            if rate_limited == max_retries:
                raise RateLimitError(url=url, retry_after=last_retry_after)

            status_code = (
                last_error.status if isinstance(last_error, aiohttp.ClientResponseError) else None
            )
            self._logger.warning(
                "http_get_failed",
                http_status_code=status_code,
                http_attempts=attempts,
                error_type=type(last_error).__name__ if last_error else None,
                error_message=str(last_error) if last_error else None,
            )
            raise UpstreamAPIError(
                f"GET failed after {attempts} attempts: {url}",
                url=url,
                status_code=status_code,
                cause=last_error,
            ) from last_error
