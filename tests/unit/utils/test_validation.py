# -*- coding: utf-8 -*-
"""Unit tests for validation helpers."""

from __future__ import annotations

import pytest

from polymarket_activity_notifier.utils.validation import (
    is_hex_address,
    mask_address,
    normalize_address,
    to_unix_seconds,
)


def test_is_hex_address_accepts_42_char_hex() -> None:
    assert is_hex_address("0x2d27b6e21b3d4d7c9a43fdf58f12345678907706")
    assert not is_hex_address("0x2d27")
    assert not is_hex_address("0xZZ27b6e21b3d4d7c9a43fdf58f12345678907706")
    assert not is_hex_address(None)


def test_normalize_address_strips_and_lowercases() -> None:
    assert normalize_address("  0xABCdef  ") == "0xabcdef"


def test_mask_address_keeps_prefix_and_suffix() -> None:
    assert mask_address("0x2d27b6e21b3d4d7c9a43fdf58f12345678907706") == "0x2d27...7706"
    assert mask_address("0x12") == "***"
    assert mask_address(None) == "***"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1_700_000_000, 1_700_000_000),
        (1_700_000_000_123, 1_700_000_000),
        ("1700000000", 1_700_000_000),
        (None, None),
        (0, None),
        (-5, None),
        (True, None),
        ("not-a-number", None),
    ],
)
def test_to_unix_seconds(value: object, expected: int | None) -> None:
    assert to_unix_seconds(value) == expected
