# -*- coding: utf-8 -*-
"""Unit tests for JSON file repositories."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from polymarket_activity_notifier.exceptions import StorageError
from polymarket_activity_notifier.models.subscription import CategoryFilter, SubscriberConfig, Subscription
from polymarket_activity_notifier.models.watermark import WatermarkState
from polymarket_activity_notifier.persistence.repositories.json_file import (
    JsonFileConfigRepository,
    JsonFileSubscriptionRepository,
    JsonFileWatermarkRepository,
)


async def test_subscription_repository_reads_command_layer_records(tmp_path: Path, address: str) -> None:
    path = tmp_path / "subscriptions.json"
    path.write_text(
        json.dumps(
            {
                "100": [{"address": address.upper().replace("0X", "0x"), "alias": "a", "addedAt": 1_700_000_000_000}],
                "200": [{"alias": "broken row"}, {"address": address}],
                "300": [],
            }
        ),
        encoding="utf-8",
    )
    repo = JsonFileSubscriptionRepository(path)

    ids, cursor = await repo.list_chat_ids(limit=10)
    assert ids == [100, 200]
    assert cursor is None

    [sub] = await repo.get(100)
    assert sub.address == address
    assert sub.added_at == 1_700_000_000

    assert [s.address for s in await repo.get(200)] == [address]


async def test_subscription_repository_save_writes_atomically(tmp_path: Path, address: str) -> None:
    path = tmp_path / "nested" / "subscriptions.json"
    repo = JsonFileSubscriptionRepository(path)

    await repo.save(5, [Subscription.create(address, "", 10)])
    await repo.save(6, [Subscription.create(address, "x", 20)])
    await repo.delete(5)

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data == {"6": [{"address": address, "alias": "x", "addedAt": 20}]}
    assert not (path.parent / "subscriptions.json.tmp").exists()


async def test_config_repository_round_trip_and_defaults(tmp_path: Path) -> None:
    path = tmp_path / "configs.json"
    path.write_text(json.dumps({"1": {"threshold": 50}, "2": "garbage"}), encoding="utf-8")
    repo = JsonFileConfigRepository(path, default_language="zh", default_min_amount=10)

    assert await repo.get(1) == SubscriberConfig(language="zh", min_amount=50)
    assert await repo.get(2) is None
    assert await repo.get(3) is None

    config = SubscriberConfig(
        language="en",
        min_amount=0,
        category_filter=CategoryFilter.create("include", ["nba"]),
    )
    await repo.save(3, config)
    assert await repo.get(3) == config
    assert (await repo.list_chat_ids(limit=10))[0] == [1, 2, 3]


async def test_watermark_repository_missing_file_is_empty(tmp_path: Path) -> None:
    repo = JsonFileWatermarkRepository(tmp_path / "watermarks.json")
    assert await repo.load() == WatermarkState()


async def test_watermark_repository_round_trip(tmp_path: Path) -> None:
    repo = JsonFileWatermarkRepository(tmp_path / "watermarks.json")
    state = WatermarkState(
        last_seen={"0xabc": 1500},
        recent_ids=("1:tx:0x1", "2:tx:0x1"),
        tie_keys={"0xabc": ("tx:0x1",)},
    )

    await repo.save(state)

    assert await JsonFileWatermarkRepository(tmp_path / "watermarks.json").load() == state


async def test_watermark_repository_malformed_file_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "watermarks.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        await JsonFileWatermarkRepository(path).load()


async def test_failed_replace_keeps_previous_document(tmp_path: Path) -> None:
    path = tmp_path / "watermarks.json"
    repo = JsonFileWatermarkRepository(path)
    old = WatermarkState(last_seen={"0xabc": 1}, recent_ids=())
    await repo.save(old)

    with patch(
        "polymarket_activity_notifier.persistence.repositories.json_file.document.os.replace",
        side_effect=OSError("disk full"),
    ):
        with pytest.raises(StorageError):
            await repo.save(WatermarkState(last_seen={"0xabc": 2}, recent_ids=()))

    assert await repo.load() == old
