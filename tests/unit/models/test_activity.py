# -*- coding: utf-8 -*-
"""Unit tests for ActivityEvent."""

from __future__ import annotations

import pytest

from polymarket_activity_notifier.models.activity import ActivityEvent


def test_from_response_normalizes_trade() -> None:
    event = ActivityEvent.from_response(
        {
            "timestamp": 1_700_000_000,
            "type": "TRADE",
            "side": "SELL",
            "price": "0.42",
            "size": 10,
            "usdcSize": 4.2,
            "title": " Arsenal vs. Chelsea ",
            "outcome": "Arsenal",
            "slug": "EPL-arsenal-vs-chelsea",
            "transactionHash": "0xAbC",
            "pseudonym": "Lucky-Fox",
        }
    )

    assert event.kind == "trade"
    assert event.side == "sell"
    assert event.event_time == 1_700_000_000
    assert event.price == pytest.approx(0.42)
    assert event.notional_amount == pytest.approx(4.2)
    assert event.share_size == pytest.approx(10)
    assert event.market_title == "Arsenal vs. Chelsea"
    assert event.key == "tx:0xabc"
    assert event.category == "epl"
    assert event.link_slug == "EPL-arsenal-vs-chelsea"
    assert event.trader_name == "Lucky-Fox"


def test_from_response_converts_millisecond_timestamps() -> None:
    event = ActivityEvent.from_response({"timestamp": 1_700_000_000_500, "type": "REDEEM"})
    assert event.event_time == 1_700_000_000
    assert event.kind == "redeem"
    assert event.side is None


def test_from_response_ignores_side_for_non_trades() -> None:
    event = ActivityEvent.from_response({"timestamp": 1, "type": "REDEEM", "side": "BUY"})
    assert event.side is None


def test_from_response_requires_timestamp() -> None:
    with pytest.raises(ValueError):
        ActivityEvent.from_response({"type": "TRADE"})


def test_link_slug_prefers_event_slug_and_category_empty_without_slug() -> None:
    event = ActivityEvent.from_response(
        {"timestamp": 5, "type": "TRADE", "slug": "nba-game-1", "eventSlug": "nba-game"}
    )
    assert event.link_slug == "nba-game"
    assert ActivityEvent.from_response({"timestamp": 5}).category == ""


@pytest.mark.parametrize("timestamp", [-1, 999_999_999_999, 10**20, "inf"])
def test_from_response_rejects_out_of_range_timestamps(timestamp: object) -> None:
    with pytest.raises(ValueError):
        ActivityEvent.from_response({"timestamp": timestamp, "type": "TRADE"})
