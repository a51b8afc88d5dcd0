# -*- coding: utf-8 -*-
"""Event bus and event types."""

from polymarket_activity_notifier.events.bus import get_event_bus, set_event_bus
from polymarket_activity_notifier.events.subscriber_events import (
    SubscriberChangedEvent,
    SubscriberChangeKind,
)

__all__ = ["get_event_bus", "set_event_bus", "SubscriberChangedEvent", "SubscriberChangeKind"]
