"""Poll cycle orchestration."""

from polymarket_activity_notifier.services.poll_cycle.batching import MessageBatch, build_batches
from polymarket_activity_notifier.services.poll_cycle.poll_cycle import PollCycleService
from polymarket_activity_notifier.services.poll_cycle.subscriber_policy import (
    ChatTarget,
    build_chat_targets,
    push_kinds,
    skip_reason,
)

__all__ = [
    "ChatTarget",
    "MessageBatch",
    "PollCycleService",
    "build_batches",
    "build_chat_targets",
    "push_kinds",
    "skip_reason",
]
