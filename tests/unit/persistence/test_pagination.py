# -*- coding: utf-8 -*-
"""Unit tests for chat-id pagination."""

from __future__ import annotations

import pytest

from polymarket_activity_notifier.persistence.repositories.pagination import paginate_chat_ids


def test_paginate_walks_sorted_ids_until_cursor_is_none() -> None:
    ids = [30, 10, 20, 50, 40]
    pages: list[list[int]] = []
    cursor: str | None = None
    while True:
        page, cursor = paginate_chat_ids(ids, cursor=cursor, limit=2)
        pages.append(page)
        if cursor is None:
            break
    assert pages == [[10, 20], [30, 40], [50]]


def test_paginate_exact_multiple_has_no_trailing_empty_page() -> None:
    page, cursor = paginate_chat_ids([1, 2], cursor=None, limit=2)
    assert page == [1, 2]
    assert cursor is None


def test_paginate_rejects_non_positive_limit() -> None:
    with pytest.raises(ValueError):
        paginate_chat_ids([1], cursor=None, limit=0)
