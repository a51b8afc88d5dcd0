# -*- coding: utf-8 -*-
"""Per-language strings used by activity push messages."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PushStrings:
    buy: str
    sell: str
    redeem: str
    cost: str
    received: str
    redeemed: str
    shares: str
    if_win: str
    market: str
    tx: str
    unknown: str


PUSH_STRINGS: dict[str, PushStrings] = {
    "en": PushStrings(
        buy="🟢 BUY",
        sell="🔴 SELL",
        redeem="✅ REDEEM",
        cost="Cost",
        received="Received",
        redeemed="Redeemed",
        shares="Shares",
        if_win="If Win",
        market="Market",
        tx="Tx",
        unknown="Unknown",
    ),
    "zh": PushStrings(
        buy="🟢 买入",
        sell="🔴 卖出",
        redeem="✅ 赎回",
        cost="成本",
        received="收到",
        redeemed="赎回金额",
        shares="Shares",
        if_win="若胜",
        market="市场",
        tx="交易",
        unknown="未知",
    ),
}


def push_strings(language: str) -> PushStrings:
    """Return the strings for a language tag, falling back to English."""
    return PUSH_STRINGS.get((language or "").lower(), PUSH_STRINGS["en"])
