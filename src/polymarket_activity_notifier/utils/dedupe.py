"""Deduplication keys for activity events and deliveries."""

from __future__ import annotations

from typing import Any


def activity_key(a: dict[str, Any]) -> str:
    """Return a stable key to identify an activity item (for deduplication).

    Prefers transaction hash, then a composite of timestamp|type|slug|outcome|side|size|usdcSize.
    """
    tx = a.get("transactionHash") or a.get("txHash")
    if isinstance(tx, str) and tx.strip():
        return f"tx:{tx.strip().lower()}"

    parts = [
        a.get("timestamp"),
        a.get("type"),
        a.get("slug"),
        a.get("outcome"),
        a.get("side"),
        a.get("size"),
        a.get("usdcSize"),
    ]
    return "cmp:" + "|".join("" if p is None else str(p) for p in parts)


def delivery_key(chat_id: int, event_key: str) -> str:
    """Key recording that an event was delivered to one chat."""
    return f"{chat_id}:{event_key}"
