# -*- coding: utf-8 -*-
"""Activity push styler: BUY / SELL / REDEEM messages as Telegram HTML."""

from __future__ import annotations

from datetime import datetime, timezone
from html import escape

from polymarket_activity_notifier.models.activity import ActivityEvent
from polymarket_activity_notifier.notifications.stylers.i18n import PushStrings, push_strings
from polymarket_activity_notifier.notifications.types import MessageRenderer

BATCH_SEPARATOR = "\n\n" + "─" * 12 + "\n\n"

_PROFILE_URL = "https://polymarket.com/profile/{address}"
_MARKET_URL = "https://polymarket.com/event/{slug}"
_TX_URL = "https://polygonscan.com/tx/{tx}"


class ActivityMessageStyler(MessageRenderer):
    """Pure renderer for activity events. Returns None for kinds it does not know."""

    def render(
        self,
        event: ActivityEvent,
        display_name: str,
        address: str,
        language: str,
    ) -> str | None:
        strings = push_strings(language)
        if event.kind == "trade" and event.side == "buy":
            return self._render_buy(event, display_name, address, strings)
        if event.kind == "trade" and event.side == "sell":
            return self._render_sell(event, display_name, address, strings)
        if event.kind == "redeem":
            return self._render_redeem(event, display_name, address, strings)
        return None

    def _render_buy(
        self, event: ActivityEvent, display_name: str, address: str, s: PushStrings
    ) -> str:
        lines = [
            self._header(s.buy, display_name, address),
            "",
            *self._market_lines(event, s),
            "",
            f"💵 {s.cost}: {self._format_usd(event.notional_amount)}",
            f"🎫 {s.shares}: {event.share_size:.1f}",
        ]
        if event.share_size:
            payoff = self._format_usd(event.share_size - event.notional_amount)
            pct = (
                f" (+{((event.share_size / event.notional_amount) - 1) * 100:.1f}%)"
                if event.notional_amount
                else ""
            )
            lines.append(f"✨ {s.if_win}: {payoff}{pct}")
        lines.extend(self._footer(event, s))
        return "\n".join(lines)

    def _render_sell(
        self, event: ActivityEvent, display_name: str, address: str, s: PushStrings
    ) -> str:
        lines = [
            self._header(s.sell, display_name, address),
            "",
            *self._market_lines(event, s),
            "",
            f"💵 {s.received}: {self._format_usd(event.notional_amount)}",
            f"🎫 {s.shares}: {event.share_size:.1f}",
            *self._footer(event, s),
        ]
        return "\n".join(lines)

    def _render_redeem(
        self, event: ActivityEvent, display_name: str, address: str, s: PushStrings
    ) -> str:
        lines = [
            self._header(s.redeem, display_name, address),
            "",
            f"📊 {escape(event.market_title or s.unknown)}",
            f"💵 {s.redeemed}: {self._format_usd(event.notional_amount)}",
            *self._footer(event, s),
        ]
        return "\n".join(lines)

    @staticmethod
    def _header(title: str, display_name: str, address: str) -> str:
        url = _PROFILE_URL.format(address=address)
        return f'<b>{escape(title)}</b> | <a href="{escape(url)}">{escape(display_name)}</a>'

    @staticmethod
    def _market_lines(event: ActivityEvent, s: PushStrings) -> list[str]:
        return [
            f"📊 {escape(event.market_title or s.unknown)}",
            f"🎯 <b>{escape(event.outcome)}</b> @ {event.price * 100:.1f}%",
        ]

    def _footer(self, event: ActivityEvent, s: PushStrings) -> list[str]:
        links: list[str] = []
        if event.link_slug:
            url = _MARKET_URL.format(slug=event.link_slug)
            links.append(f'<a href="{escape(url)}">{escape(s.market)}</a>')
        if event.transaction_id:
            url = _TX_URL.format(tx=event.transaction_id)
            links.append(f'<a href="{escape(url)}">{escape(s.tx)}</a>')
        footer = ["", f"⏰ {self._format_timestamp(event.event_time)}"]
        if links:
            footer.append("🔗 " + " | ".join(links))
        return footer

    @staticmethod
    def _format_usd(amount: float) -> str:
        """Format as $1,234.56 (negative values as -$1,234.56)."""
        sign = "-" if amount < 0 else ""
        return f"{sign}${abs(amount):,.2f}"

    @staticmethod
    def _format_timestamp(ts: int) -> str:
        """Format epoch seconds as YYYY-MM-DD HH:MM:SS UTC."""
        return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
