# -*- coding: utf-8 -*-
"""Unit tests for per-subscriber delivery policy."""

from __future__ import annotations

from collections.abc import Callable

from polymarket_activity_notifier.models.activity import ActivityEvent
from polymarket_activity_notifier.models.subscription import (
    CategoryFilter,
    SubscriberConfig,
    SubscriberRef,
)
from polymarket_activity_notifier.services.poll_cycle.subscriber_policy import (
    ChatTarget,
    build_chat_targets,
    push_kinds,
    skip_reason,
)

_TRADES = push_kinds(push_redeem=False)


def _target(**config: object) -> ChatTarget:
    return ChatTarget(
        chat_id=1,
        display_name="whale",
        added_at=1000,
        config=SubscriberConfig(**config),  # type: ignore[arg-type]
    )


def test_threshold_boundary(event_factory: Callable[..., ActivityEvent]) -> None:
    target = _target(min_amount=50)

    assert skip_reason(event_factory(1500, usdcSize=49.99), target, kinds=_TRADES) == "threshold"
    assert skip_reason(event_factory(1500, usdcSize=50.00), target, kinds=_TRADES) is None


def test_zero_threshold_disables_amount_filter(event_factory: Callable[..., ActivityEvent]) -> None:
    target = _target(min_amount=0)
    assert skip_reason(event_factory(1500, usdcSize=0.01), target, kinds=_TRADES) is None


def test_category_include_filter(event_factory: Callable[..., ActivityEvent]) -> None:
    target = _target(category_filter=CategoryFilter.create("include", ["nba"]))

    nba = event_factory(1500, slug="nba-lakers-vs-celtics")
    epl = event_factory(1501, slug="epl-arsenal-vs-chelsea")

    assert skip_reason(nba, target, kinds=_TRADES) is None
    assert skip_reason(epl, target, kinds=_TRADES) == "category"


def test_category_exclude_filter(event_factory: Callable[..., ActivityEvent]) -> None:
    target = _target(category_filter=CategoryFilter.create("exclude", ["nba"]))
    assert skip_reason(event_factory(1500, slug="nba-x"), target, kinds=_TRADES) == "category"
    assert skip_reason(event_factory(1500, slug="epl-x"), target, kinds=_TRADES) is None


def test_no_backfill_at_or_before_added_at(event_factory: Callable[..., ActivityEvent]) -> None:
    target = _target()
    assert skip_reason(event_factory(900), target, kinds=_TRADES) == "backfill"
    assert skip_reason(event_factory(1000), target, kinds=_TRADES) == "backfill"
    assert skip_reason(event_factory(1001), target, kinds=_TRADES) is None


def test_redeem_follows_push_policy(event_factory: Callable[..., ActivityEvent]) -> None:
    redeem = event_factory(1500, type="REDEEM", side=None)
    target = _target()

    assert skip_reason(redeem, target, kinds=_TRADES) == "kind"
    assert skip_reason(redeem, target, kinds=push_kinds(push_redeem=True)) is None


def test_other_kinds_are_never_pushed(event_factory: Callable[..., ActivityEvent]) -> None:
    split = event_factory(1500, type="SPLIT")
    assert skip_reason(split, _target(), kinds=push_kinds(push_redeem=True)) == "kind"


def test_build_chat_targets_first_row_per_chat_wins(address: str) -> None:
    refs = [
        SubscriberRef(chat_id=1, alias="", added_at=10),
        SubscriberRef(chat_id=2, alias="big", added_at=20),
        SubscriberRef(chat_id=1, alias="dup", added_at=5),
    ]
    configs = {2: SubscriberConfig(language="zh")}

    targets = build_chat_targets(address, refs, lambda c: configs.get(c, SubscriberConfig()))

    assert [(t.chat_id, t.display_name, t.added_at) for t in targets] == [
        (1, "0x2d27...7706", 10),
        (2, "big", 20),
    ]
    assert targets[1].config.language == "zh"
