"""PendingMessage: a rendered notification waiting for delivery within one cycle."""

from __future__ import annotations

from dataclasses import dataclass

from polymarket_activity_notifier.utils.dedupe import delivery_key


@dataclass(frozen=True, slots=True)
class PendingMessage:
    """Ephemeral; discarded at the end of the cycle."""

    chat_id: int
    text: str
    event_time: int
    address: str
    event_key: str

    @property
    def delivery_key(self) -> str:
        return delivery_key(self.chat_id, self.event_key)
