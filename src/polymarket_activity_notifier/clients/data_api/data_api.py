# -*- coding: utf-8 -*-
"""Polymarket Data API client (public activity feed)."""

from __future__ import annotations

import structlog
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Literal, Optional, Sequence, cast
from structlog.contextvars import bound_contextvars

from polymarket_activity_notifier.clients.data_api.schema import ActivitySchema
from polymarket_activity_notifier.config import Settings
from polymarket_activity_notifier.models.activity import ActivityEvent
from polymarket_activity_notifier.utils.validation import mask_address

if TYPE_CHECKING:
    from polymarket_activity_notifier.clients.http import AsyncHttpClient

SortDirection = Literal["ASC", "DESC"]
NOTIFIABLE_ACTIVITY_TYPES: tuple[str, ...] = ("TRADE", "REDEEM")


class DataApiClient:
    """Client for Polymarket Data API GET /activity."""

    def __init__(
        self,
        http_client: "AsyncHttpClient",
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        """Initialize the client.

        Args:
            http_client: Async HTTP client (e.g. AsyncHttpClient).
            settings: Application settings (uses settings.api).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._http = http_client
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)

    def _base_url(self) -> str:
        return self._settings.api.data_api_host.rstrip("/")

    async def get_activity(
        self,
        user: str,
        *,
        start: Optional[int] = None,
        limit: int = 100,
        offset: int = 0,
        types: Sequence[str] = NOTIFIABLE_ACTIVITY_TYPES,
        sort_direction: SortDirection = "ASC",
    ) -> List[ActivitySchema]:
        """Fetch one page of on-chain activity for a user, sorted by timestamp.

        Args:
            user: Wallet address (0x...).
            start: Lower time bound (unix seconds, inclusive); None for no bound.
            limit: Max results (0-500).
            offset: Pagination offset.
            types: Activity types to include (e.g. TRADE, REDEEM).
            sort_direction: ASC (oldest first) or DESC.

        Returns:
            List of activity items (Activity schema).
        """
        params: Dict[str, Any] = {
            "user": user,
            "type": ",".join(types),
            "limit": max(0, min(500, limit)),
            "offset": max(0, offset),
            "sortBy": "TIMESTAMP",
            "sortDirection": sort_direction,
            "start": start,
        }
        url = f"{self._base_url()}/activity"
        data = await self._http.get(url, params=params)
        if not isinstance(data, list):
            self._logger.warning(
                "data_api_get_activity_non_list",
                data_api_response_type=type(data).__name__,
            )
            return []
        result: List[ActivitySchema] = []
        for x in cast(list[Any], data):
            if isinstance(x, dict):
                result.append(cast(ActivitySchema, x))
        return result

    async def fetch_activity(self, address: str, since: int) -> List[ActivityEvent]:
        """Return normalized activity for an address with timestamp >= since, oldest first.

        Pages through /activity until a short page or the configured page cap.
        Items that cannot be normalized are skipped.

        Raises:
            UpstreamAPIError: If any page request fails after retries.
        """
        api = self._settings.api
        page_size = api.activity_page_size
        events: List[ActivityEvent] = []
        with bound_contextvars(
            data_api_user_masked=mask_address(address),
            data_api_since=since,
        ):
            for page in range(api.activity_max_pages):
                items = await self.get_activity(
                    address,
                    start=since if since > 0 else None,
                    limit=page_size,
                    offset=page * page_size,
                )
                for item in items:
                    try:
                        events.append(ActivityEvent.from_response(cast(Dict[str, Any], item)))
                    except (TypeError, ValueError) as e:
                        self._logger.warning(
                            "data_api_activity_item_skipped",
                            error_message=str(e),
                            data_api_transaction_hash=item.get("transactionHash"),
                        )
                if len(items) < page_size:
                    break
            else:
                self._logger.info(
                    "data_api_activity_truncated",
                    data_api_pages=api.activity_max_pages,
                    data_api_events=len(events),
                )
        return events
