# -*- coding: utf-8 -*-
"""Unit tests for configure_logging."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

from polymarket_activity_notifier.config import Settings
from polymarket_activity_notifier.logging.config import NOISY_LOGGERS, configure_logging


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    noisy_levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    for name, noisy_level in noisy_levels.items():
        logging.getLogger(name).setLevel(noisy_level)
    structlog.reset_defaults()


@pytest.mark.usefixtures("restore_logging")
def test_third_party_loggers_are_quieted() -> None:
    configure_logging(Settings(logging={"log_to_console": True, "third_party_level": "ERROR"}))

    for name in NOISY_LOGGERS:
        assert logging.getLogger(name).level == logging.ERROR


@pytest.mark.usefixtures("restore_logging")
def test_root_level_follows_console_level() -> None:
    configure_logging(Settings(logging={"log_to_console": True, "console_level": "DEBUG"}))

    assert logging.getLogger().level == logging.DEBUG
    assert structlog.is_configured()
