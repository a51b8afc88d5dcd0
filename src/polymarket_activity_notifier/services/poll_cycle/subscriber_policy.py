# -*- coding: utf-8 -*-
"""Per-subscriber delivery policy: push kinds, no backfill, amount threshold, category filter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Literal

from polymarket_activity_notifier.models.activity import ActivityEvent
from polymarket_activity_notifier.models.subscription import SubscriberConfig, SubscriberRef
from polymarket_activity_notifier.utils.validation import mask_address

SkipReason = Literal["kind", "backfill", "threshold", "category"]


@dataclass(frozen=True, slots=True)
class ChatTarget:
    """One chat watching one address, with the settings needed to filter and render."""

    chat_id: int
    display_name: str
    added_at: int | None
    config: SubscriberConfig


def push_kinds(*, push_redeem: bool) -> frozenset[str]:
    """Event kinds that are notified at all."""
    return frozenset({"trade", "redeem"}) if push_redeem else frozenset({"trade"})


def build_chat_targets(
    address: str,
    refs: Iterable[SubscriberRef],
    config_for: Callable[[int], SubscriberConfig],
) -> list[ChatTarget]:
    """Collapse subscription rows into one target per chat (first row of a chat wins)."""
    targets: dict[int, ChatTarget] = {}
    for ref in refs:
        if ref.chat_id in targets:
            continue
        targets[ref.chat_id] = ChatTarget(
            chat_id=ref.chat_id,
            display_name=ref.alias or mask_address(address),
            added_at=ref.added_at,
            config=config_for(ref.chat_id),
        )
    return list(targets.values())


def skip_reason(
    event: ActivityEvent,
    target: ChatTarget,
    *,
    kinds: frozenset[str],
) -> SkipReason | None:
    """Return why the event must not reach this chat, or None if it qualifies."""
    if event.kind not in kinds:
        return "kind"
    if event.kind == "trade" and event.side is None:
        return "kind"
    if target.added_at is not None and event.event_time <= target.added_at:
        return "backfill"
    threshold = target.config.min_amount
    if threshold > 0 and event.notional_amount < threshold:
        return "threshold"
    category_filter = target.config.category_filter
    if category_filter is not None and not category_filter.allows(event.category):
        return "category"
    return None
