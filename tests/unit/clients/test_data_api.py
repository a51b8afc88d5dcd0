# -*- coding: utf-8 -*-
"""Unit tests for DataApiClient with a fake HTTP client."""

from __future__ import annotations

from typing import Any

import pytest

from polymarket_activity_notifier.clients.data_api import DataApiClient
from polymarket_activity_notifier.config import Settings
from polymarket_activity_notifier.exceptions import UpstreamAPIError


class _FakeHttp:
    def __init__(self, pages: list[Any] | None = None, error: Exception | None = None) -> None:
        self.pages = list(pages or [])
        self.error = error
        self.requests: list[tuple[str, dict[str, Any]]] = []

    async def get(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        self.requests.append((url, dict(params or {})))
        if self.error is not None:
            raise self.error
        return self.pages.pop(0) if self.pages else []


def _item(ts: int, **overrides: Any) -> dict[str, Any]:
    item: dict[str, Any] = {
        "timestamp": ts,
        "type": "TRADE",
        "side": "BUY",
        "usdcSize": 10,
        "size": 20,
        "price": 0.5,
        "transactionHash": f"0x{ts}",
    }
    item.update(overrides)
    return item


@pytest.fixture
def api_settings() -> Settings:
    return Settings(api={"activity_page_size": 2, "activity_max_pages": 3})


async def test_fetch_activity_sends_expected_query(api_settings: Settings, address: str) -> None:
    http = _FakeHttp(pages=[[_item(1500)]])
    client = DataApiClient(http, api_settings)  # type: ignore[arg-type]

    events = await client.fetch_activity(address, 1499)

    assert [e.event_time for e in events] == [1500]
    [(url, params)] = http.requests
    assert url == "https://data-api.polymarket.com/activity"
    assert params["user"] == address
    assert params["start"] == 1499
    assert params["type"] == "TRADE,REDEEM"
    assert params["sortBy"] == "TIMESTAMP"
    assert params["sortDirection"] == "ASC"
    assert params["limit"] == 2
    assert params["offset"] == 0


async def test_fetch_activity_pages_until_short_page(api_settings: Settings, address: str) -> None:
    http = _FakeHttp(pages=[[_item(1), _item(2)], [_item(3), _item(4)], [_item(5)]])
    client = DataApiClient(http, api_settings)  # type: ignore[arg-type]

    events = await client.fetch_activity(address, 1)

    assert [e.event_time for e in events] == [1, 2, 3, 4, 5]
    assert [p["offset"] for _, p in http.requests] == [0, 2, 4]


async def test_fetch_activity_stops_at_page_cap(api_settings: Settings, address: str) -> None:
    http = _FakeHttp(pages=[[_item(i), _item(i + 1)] for i in range(0, 10, 2)])
    client = DataApiClient(http, api_settings)  # type: ignore[arg-type]

    events = await client.fetch_activity(address, 1)

    assert len(http.requests) == 3
    assert len(events) == 6


async def test_fetch_activity_skips_malformed_items(api_settings: Settings, address: str) -> None:
    http = _FakeHttp(pages=[[_item(1500), {"type": "TRADE"}, "garbage", _item(1501, price="x")]])
    client = DataApiClient(http, api_settings)  # type: ignore[arg-type]

    events = await client.fetch_activity(address, 1)

    assert [e.event_time for e in events] == [1500]


async def test_fetch_activity_without_lower_bound_omits_start(
    api_settings: Settings, address: str
) -> None:
    http = _FakeHttp(pages=[[]])
    client = DataApiClient(http, api_settings)  # type: ignore[arg-type]

    assert await client.fetch_activity(address, 0) == []
    assert http.requests[0][1]["start"] is None


async def test_non_list_response_is_treated_as_empty(api_settings: Settings, address: str) -> None:
    http = _FakeHttp(pages=[{"error": "bad user"}])
    client = DataApiClient(http, api_settings)  # type: ignore[arg-type]

    assert await client.get_activity(address) == []


async def test_upstream_errors_propagate(api_settings: Settings, address: str) -> None:
    http = _FakeHttp(error=UpstreamAPIError("GET failed", status_code=503))
    client = DataApiClient(http, api_settings)  # type: ignore[arg-type]

    with pytest.raises(UpstreamAPIError):
        await client.fetch_activity(address, 1)
