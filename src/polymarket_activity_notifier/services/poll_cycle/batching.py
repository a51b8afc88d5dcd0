"""Group pending messages into outbound batches per (chat, address)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from polymarket_activity_notifier.models.pending_message import PendingMessage
from polymarket_activity_notifier.notifications.stylers.activity_styler import BATCH_SEPARATOR


@dataclass(frozen=True, slots=True)
class MessageBatch:
    """Up to batch_size messages for one chat and one address, oldest first."""

    chat_id: int
    address: str
    messages: tuple[PendingMessage, ...]

    @property
    def text(self) -> str:
        return BATCH_SEPARATOR.join(m.text for m in self.messages)

    @property
    def earliest_event_time(self) -> int:
        return min(m.event_time for m in self.messages)

    @property
    def delivery_keys(self) -> list[str]:
        return [m.delivery_key for m in self.messages]


def build_batches(messages: Iterable[PendingMessage], batch_size: int) -> list[MessageBatch]:
    """Group messages by (chat, address) in order of first appearance and chunk them.

    Input order is preserved inside each group, so chronologically sorted input
    yields batches whose events never go backwards for a chat+address pair.
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")
    groups: dict[tuple[int, str], list[PendingMessage]] = {}
    for message in messages:
        groups.setdefault((message.chat_id, message.address), []).append(message)

    batches: list[MessageBatch] = []
    for (chat_id, address), group in groups.items():
        for i in range(0, len(group), batch_size):
            batches.append(
                MessageBatch(
                    chat_id=chat_id,
                    address=address,
                    messages=tuple(group[i : i + batch_size]),
                )
            )
    return batches
