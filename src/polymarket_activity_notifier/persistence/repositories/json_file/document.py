# -*- coding: utf-8 -*-
"""JSON document on disk with atomic replace (write *.tmp, then os.replace)."""

from __future__ import annotations

import asyncio
import json
import os
from pathlib import Path
from typing import Any

from polymarket_activity_notifier.exceptions import StorageError


class JsonDocument:
    """One JSON object stored in a single file.

    Reads of a missing file return an empty dict. Writes are all-or-nothing:
    the payload goes to a sibling ``*.tmp`` file which then replaces the target,
    so a crash mid-write leaves the previous document in place. Blocking file
    I/O runs in a worker thread.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read_sync(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        with self._path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("top-level JSON value is not an object")
        return data

    def _write_sync(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, separators=(",", ":"))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self._path)

    async def read(self) -> dict[str, Any]:
        """Return the stored object ({} when the file does not exist).

        Raises:
            StorageError: If the file cannot be read or is not a JSON object.
        """
        try:
            return await asyncio.to_thread(self._read_sync)
        except (OSError, ValueError) as e:
            raise StorageError(
                f"Failed to read {self._path}", path=str(self._path), cause=e
            ) from e

    async def write(self, data: dict[str, Any]) -> None:
        """Atomically replace the stored object.

        Raises:
            StorageError: If the file cannot be written.
        """
        try:
            await asyncio.to_thread(self._write_sync, data)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(
                f"Failed to write {self._path}", path=str(self._path), cause=e
            ) from e

    async def update(self, chat_id: int, record: Any | None) -> None:
        """Read-modify-write one chat entry (None removes it). Serialized per document."""
        async with self._lock:
            data = await self.read()
            if record is None:
                data.pop(str(chat_id), None)
            else:
                data[str(chat_id)] = record
            await self.write(data)
