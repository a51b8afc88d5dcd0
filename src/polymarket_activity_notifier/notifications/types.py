"""Notification renderer protocol."""

from __future__ import annotations

from typing import Protocol

from polymarket_activity_notifier.models.activity import ActivityEvent


class MessageRenderer(Protocol):
    """Render one activity event into a message body for one subscriber."""

    def render(
        self,
        event: ActivityEvent,
        display_name: str,
        address: str,
        language: str,
    ) -> str | None:
        """Return the message text, or None if the event kind is not notifiable.

        Args:
            event: Normalized activity event.
            display_name: Subscriber's alias for the address, or a shortened address.
            address: Watched address (used for the profile link).
            language: Subscriber language tag ("en", "zh").
        """
        ...
