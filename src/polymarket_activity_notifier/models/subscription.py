"""Subscriber-side records: who watches which address, and per-chat settings.

Both are written by the command layer and only read here.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, cast

from polymarket_activity_notifier.utils.validation import normalize_address, to_unix_seconds

Language = Literal["en", "zh"]
FilterMode = Literal["include", "exclude"]
SUPPORTED_LANGUAGES: tuple[Language, ...] = ("en", "zh")


@dataclass(frozen=True, slots=True)
class Subscription:
    """One watched address of one chat."""

    address: str
    """Normalized lowercase 0x address."""
    alias: str = ""
    added_at: int | None = None
    """Unix seconds when the subscription was created; None for legacy rows."""

    @classmethod
    def create(cls, address: str, alias: str = "", added_at: Any = None) -> Subscription:
        address = normalize_address(address)
        if not address:
            raise ValueError("address must be non-empty")
        return cls(address=address, alias=(alias or "").strip(), added_at=to_unix_seconds(added_at))

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Subscription:
        """Build from a stored record ({address, alias, addedAt}; addedAt may be milliseconds)."""
        return cls.create(
            str(record.get("address") or ""),
            str(record.get("alias") or ""),
            record.get("addedAt", record.get("added_at")),
        )

    def to_record(self) -> dict[str, Any]:
        return {"address": self.address, "alias": self.alias, "addedAt": self.added_at}


@dataclass(frozen=True, slots=True)
class CategoryFilter:
    """Include/exclude list of market categories (first slug segment)."""

    mode: FilterMode
    categories: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def create(cls, mode: str, categories: Any) -> CategoryFilter:
        mode = (mode or "").strip().lower()
        if mode not in ("include", "exclude"):
            raise ValueError(f"unknown category filter mode: {mode!r}")
        cats = frozenset(
            str(c).strip().lower() for c in (categories or []) if str(c).strip()
        )
        return cls(mode=cast(FilterMode, mode), categories=cats)

    def allows(self, category: str) -> bool:
        """Return True if an event with this category passes the filter.

        An empty category set disables the filter.
        """
        if not self.categories:
            return True
        matched = category.lower() in self.categories
        return matched if self.mode == "include" else not matched


@dataclass(frozen=True, slots=True)
class SubscriberConfig:
    """Per-chat delivery settings."""

    language: Language = "en"
    min_amount: float = 10.0
    """Minimum notional (USDC) to notify; 0 disables the threshold."""
    category_filter: CategoryFilter | None = None

    @classmethod
    def from_record(
        cls,
        record: dict[str, Any],
        *,
        default_language: Language = "en",
        default_min_amount: float = 10.0,
    ) -> SubscriberConfig:
        """Build from a stored record ({lang, threshold, filter{mode, categories}})."""
        lang = str(record.get("lang") or record.get("language") or default_language).lower()
        language: Language = cast(Language, lang) if lang in SUPPORTED_LANGUAGES else default_language

        raw_threshold = record.get("threshold", record.get("min_amount"))
        min_amount = default_min_amount if raw_threshold is None else max(0.0, float(raw_threshold))

        category_filter: CategoryFilter | None = None
        raw_filter = record.get("filter")
        if isinstance(raw_filter, dict):
            category_filter = CategoryFilter.create(
                str(raw_filter.get("mode") or ""),
                raw_filter.get("categories"),
            )
        return cls(language=language, min_amount=min_amount, category_filter=category_filter)

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {"lang": self.language, "threshold": self.min_amount}
        if self.category_filter is not None:
            record["filter"] = {
                "mode": self.category_filter.mode,
                "categories": sorted(self.category_filter.categories),
            }
        return record


@dataclass(frozen=True, slots=True)
class SubscriberRef:
    """A chat watching an address, as seen by the poll cycle."""

    chat_id: int
    alias: str
    added_at: int | None
