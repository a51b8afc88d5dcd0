"""Validation helpers for addresses and timestamps."""

from __future__ import annotations

from typing import Any


def is_hex_address(addr: Any) -> bool:
    """Return True if addr is a valid 0x wallet address (42 chars)."""
    if not isinstance(addr, str):
        return False
    s = addr.strip()
    if len(s) != 42:
        return False
    if not s.lower().startswith("0x"):
        return False
    try:
        int(s[2:], 16)
        return True
    except ValueError:
        return False


def normalize_address(addr: str) -> str:
    """Return the canonical (stripped, lowercase) form of a wallet address."""
    return addr.strip().lower()


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging and display (e.g. 0x1234...abcd)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"


def to_unix_seconds(value: Any) -> int | None:
    """Coerce a timestamp in seconds or milliseconds to integer unix seconds.

    Returns None for missing, non-numeric or non-positive values.
    """
    if value is None or isinstance(value, bool):
        return None
    try:
        ts = int(float(value))
    except (TypeError, ValueError):
        return None
    if ts <= 0:
        return None
    if ts > 10**12:
        ts //= 1000
    return ts
