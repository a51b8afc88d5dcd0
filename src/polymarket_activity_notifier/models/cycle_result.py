"""CycleResult: counters reported by one poll cycle."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class CycleResult:
    """Counters reported by one poll cycle.

    ``notifications_sent`` counts events delivered (a batch of five events
    counts five); ``batches_sent`` counts outbound messages.
    """

    total_subscriptions: int = 0
    addresses_checked: int = 0
    events_processed: int = 0
    notifications_sent: int = 0
    addresses_failed: int = 0
    batches_sent: int = 0
    batches_failed: int = 0
    duration_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
