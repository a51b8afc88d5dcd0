"""Message stylers."""

from polymarket_activity_notifier.notifications.stylers.activity_styler import (
    BATCH_SEPARATOR,
    ActivityMessageStyler,
)
from polymarket_activity_notifier.notifications.stylers.i18n import (
    PUSH_STRINGS,
    PushStrings,
    push_strings,
)

__all__ = [
    "ActivityMessageStyler",
    "BATCH_SEPARATOR",
    "PUSH_STRINGS",
    "PushStrings",
    "push_strings",
]
