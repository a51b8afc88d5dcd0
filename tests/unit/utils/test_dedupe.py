# -*- coding: utf-8 -*-
"""Unit tests for dedupe helpers."""

from __future__ import annotations

from typing import Any

from polymarket_activity_notifier.utils.dedupe import activity_key, delivery_key


def test_activity_key_prefers_transaction_hash_lowercased() -> None:
    activity = {"transactionHash": " 0xABC ", "timestamp": 1}
    assert activity_key(activity) == "tx:0xabc"


def test_activity_key_uses_txhash_when_transaction_hash_missing() -> None:
    activity = {"txHash": "0xdef"}
    assert activity_key(activity) == "tx:0xdef"


def test_activity_key_treats_empty_transaction_hash_as_missing() -> None:
    activity = {
        "transactionHash": "",
        "timestamp": 1000,
        "type": "TRADE",
        "slug": "nba-x",
        "outcome": "Yes",
        "side": "BUY",
        "size": 10,
        "usdcSize": 5.5,
    }
    assert activity_key(activity) == "cmp:1000|TRADE|nba-x|Yes|BUY|10|5.5"


def test_activity_key_fallback_uses_empty_tokens_for_missing_fields() -> None:
    activity: dict[str, Any] = {}
    assert activity_key(activity) == "cmp:||||||"


def test_delivery_key_scopes_event_key_to_chat() -> None:
    assert delivery_key(42, "tx:0xabc") == "42:tx:0xabc"
    assert delivery_key(-100123, "tx:0xabc") != delivery_key(42, "tx:0xabc")
