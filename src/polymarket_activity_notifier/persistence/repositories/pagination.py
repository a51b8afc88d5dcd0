"""Offset-cursor pagination shared by the chat-keyed stores."""

from __future__ import annotations

from collections.abc import Iterable


def paginate_chat_ids(
    chat_ids: Iterable[int],
    *,
    cursor: str | None,
    limit: int,
) -> tuple[list[int], str | None]:
    """Return a page of sorted chat ids and the cursor of the next page (None when done).

    The cursor is the decimal offset into the sorted id list.
    """
    if limit <= 0:
        raise ValueError("limit must be positive")
    ordered = sorted(chat_ids)
    start = int(cursor) if cursor else 0
    page = ordered[start : start + limit]
    end = start + len(page)
    return page, (str(end) if end < len(ordered) else None)
