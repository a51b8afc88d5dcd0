"""ActivityEvent: one item of the Data API activity feed (GET /activity).

Immutable once fetched; the only local identity is ``key`` (transaction hash,
or a composite when the feed omits it).
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal

from polymarket_activity_notifier.utils.dedupe import activity_key

# 9999-12-31T23:59:59Z; later times cannot be rendered as dates.
_MAX_EVENT_TIME = 253_402_300_799

ActivityKind = Literal["trade", "redeem"]
TradeSide = Literal["buy", "sell"]


def _float(value: Any) -> float:
    if value is None or value == "":
        return 0.0
    return float(value)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True, slots=True)
class ActivityEvent:
    """Normalized activity event.

    ``kind`` is lowercased from the upstream ``type`` (trade, redeem, or any
    other kind the feed returns, kept verbatim). ``side`` is only set for trades.
    """

    kind: str
    event_time: int
    key: str
    side: str | None = None
    price: float = 0.0
    notional_amount: float = 0.0
    """USDC value of the activity (``usdcSize``)."""
    share_size: float = 0.0
    market_title: str = ""
    outcome: str = ""
    market_slug: str = ""
    event_slug: str = ""
    transaction_id: str = ""
    trader_name: str = ""

    @property
    def category(self) -> str:
        """First dash-separated segment of the market slug, lowercased ("" if no slug)."""
        return self.market_slug.split("-", 1)[0].lower() if self.market_slug else ""

    @property
    def link_slug(self) -> str:
        """Slug used for the market link: event slug, falling back to market slug."""
        return self.event_slug or self.market_slug

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_response(cls, response: dict[str, Any]) -> ActivityEvent:
        """Build from a raw GET /activity item (camelCase).

        Raises:
            ValueError: If the item has no usable timestamp or numeric fields are malformed.
        """
        raw_ts = response.get("timestamp")
        if raw_ts is None:
            raise ValueError("activity item has no timestamp")
        try:
            event_time = int(float(raw_ts))
        except OverflowError as e:
            raise ValueError(f"activity timestamp out of range: {raw_ts!r}") from e
        if event_time > 10**12:
            event_time //= 1000
        if not 0 <= event_time <= _MAX_EVENT_TIME:
            raise ValueError(f"activity timestamp out of range: {raw_ts!r}")

        kind = _text(response.get("type")).lower()
        side_raw = _text(response.get("side")).lower()
        side = side_raw if kind == "trade" and side_raw in ("buy", "sell") else None

        return cls(
            kind=kind,
            event_time=event_time,
            key=activity_key(response),
            side=side,
            price=_float(response.get("price")),
            notional_amount=_float(response.get("usdcSize")),
            share_size=_float(response.get("size")),
            market_title=_text(response.get("title")),
            outcome=_text(response.get("outcome")),
            market_slug=_text(response.get("slug")),
            event_slug=_text(response.get("eventSlug")),
            transaction_id=_text(response.get("transactionHash")),
            trader_name=_text(response.get("name") or response.get("pseudonym")),
        )
