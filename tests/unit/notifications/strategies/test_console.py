# -*- coding: utf-8 -*-
"""Unit tests for ConsoleNotifier."""

from __future__ import annotations

import pytest

from polymarket_activity_notifier.config import Settings
from polymarket_activity_notifier.notifications.strategies import ConsoleNotifier


async def test_console_prints_message(settings: Settings, capsys: pytest.CaptureFixture[str]) -> None:
    notifier = ConsoleNotifier(settings)
    await notifier.initialize()

    assert await notifier.send(7, "hello") is True
    assert "[chat 7]\nhello" in capsys.readouterr().out


async def test_console_refuses_when_stopped(settings: Settings) -> None:
    notifier = ConsoleNotifier(settings)

    assert await notifier.send(7, "hello") is False
    await notifier.initialize()
    await notifier.shutdown()
    assert await notifier.send(7, "hello") is False


async def test_console_refuses_when_disabled() -> None:
    notifier = ConsoleNotifier(Settings(console={"enabled": False}))
    await notifier.initialize()

    assert await notifier.send(7, "hello") is False
