"""WatermarkState: persisted per-address low-water marks plus recent delivery keys."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class WatermarkState:
    """Snapshot of the watermark store.

    ``last_seen`` maps address -> last processed event time (unix seconds).
    ``tie_keys`` maps address -> event keys already processed at exactly that
    time, so same-second arrivals can be told apart from repeats.
    ``recent_ids`` holds delivery keys, oldest first.
    """

    last_seen: dict[str, int] = field(default_factory=dict)
    recent_ids: tuple[str, ...] = ()
    tie_keys: dict[str, tuple[str, ...]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "lastSeen": dict(self.last_seen),
            "recentIds": list(self.recent_ids),
        }
        if self.tie_keys:
            data["tieKeys"] = {a: list(keys) for a, keys in self.tie_keys.items()}
        return data

    def copy(self) -> WatermarkState:
        return WatermarkState(
            last_seen=dict(self.last_seen),
            recent_ids=self.recent_ids,
            tie_keys=dict(self.tie_keys),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WatermarkState:
        raw_last = data.get("lastSeen") or {}
        raw_ids = data.get("recentIds") or []
        raw_ties = data.get("tieKeys") or {}
        if (
            not isinstance(raw_last, dict)
            or not isinstance(raw_ids, list)
            or not isinstance(raw_ties, dict)
        ):
            raise ValueError("watermark document has an unexpected shape")
        tie_keys: dict[str, tuple[str, ...]] = {}
        for address, keys in raw_ties.items():
            if not isinstance(keys, list):
                raise ValueError("watermark tieKeys entries must be lists")
            if keys:
                tie_keys[str(address).lower()] = tuple(str(k) for k in keys)
        return cls(
            last_seen={str(k).lower(): int(v) for k, v in raw_last.items()},
            recent_ids=tuple(str(x) for x in raw_ids),
            tie_keys=tie_keys,
        )
