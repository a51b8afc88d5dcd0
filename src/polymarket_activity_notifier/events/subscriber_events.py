# -*- coding: utf-8 -*-
"""Subscriber-side change signals (bubus BaseEvent)."""

from __future__ import annotations

from typing import Literal

from bubus import BaseEvent  # type: ignore[import-untyped]

SubscriberChangeKind = Literal["subscriptions", "config"]


class SubscriberChangedEvent(BaseEvent[None]):
    """Emitted when the command layer changed a chat's subscriptions or config.

    Best-effort: the subscription cache re-reads that chat on receipt; a lost
    event is healed by the next full reload.
    """

    chat_id: int
    kind: SubscriberChangeKind
