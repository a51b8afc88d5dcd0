# -*- coding: utf-8 -*-
"""Telegram notification strategy (async)."""

from __future__ import annotations

import asyncio
import time
import structlog
from typing import Any, Callable, Optional, TYPE_CHECKING

from telegram import Bot, LinkPreviewOptions
from telegram.error import (
    BadRequest,
    ChatMigrated,
    Forbidden,
    NetworkError,
    RetryAfter,
    TelegramError,
    TimedOut,
)
from telegram.request import HTTPXRequest

from polymarket_activity_notifier.exceptions import (
    MissingRequiredConfigError,
    NotificationDeliveryError,
)
from polymarket_activity_notifier.notifications.strategies.base import BaseNotificationStrategy

if TYPE_CHECKING:
    from polymarket_activity_notifier.config.config import Settings


class TelegramNotifier(BaseNotificationStrategy):
    """Send messages to Telegram chats using python-telegram-bot."""

    def __init__(
        self,
        settings: "Settings",
        *,
        bot: Optional[Bot] = None,
        sleep: Callable[[float], Any] = asyncio.sleep,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        super().__init__(settings)
        self._logger = get_logger(logger_name or self.__class__.__name__)

        cfg = self.settings.telegram
        if not cfg.api_key:
            raise MissingRequiredConfigError("TELEGRAM__API_KEY")

        self.token: str = str(cfg.api_key)
        self.messages_per_minute = cfg.messages_per_minute
        self.max_retries = cfg.max_retries
        self.backoff_base_seconds = cfg.backoff_base_seconds

        self.connect_timeout = cfg.connect_timeout
        self.read_timeout = cfg.read_timeout
        self.write_timeout = cfg.write_timeout
        self.pool_timeout = cfg.pool_timeout

        self._bot: Optional[Bot] = bot
        self._sleep = sleep
        self._running = False
        self._message_timestamps: list[float] = []

    @property
    def is_running(self) -> bool:
        return self._running

    async def initialize(self) -> None:
        if self._running:
            self._logger.warning("telegram_already_running")
            return

        if self._bot is None:
            request = HTTPXRequest(
                connect_timeout=self.connect_timeout,
                read_timeout=self.read_timeout,
                write_timeout=self.write_timeout,
                pool_timeout=self.pool_timeout,
            )
            self._bot = Bot(token=self.token, request=request)

        self._running = True

    async def shutdown(self) -> None:
        if not self._running:
            return

        self._bot = None
        self._running = False

    async def send(self, chat_id: int, text: str) -> bool:
        if not self._running or self._bot is None:
            self._logger.warning("telegram_not_running_cannot_send", telegram_chat_id=chat_id)
            return False

        await self._apply_rate_limit()
        target_chat_id = chat_id
        last_transport_error: Optional[Exception] = None
        for attempt in range(1, self.max_retries + 1):
            backoff = min(60.0, self.backoff_base_seconds * (2 ** (attempt - 1)))
            try:
                await self._bot.send_message(
                    chat_id=target_chat_id,
                    text=text,
                    parse_mode="HTML",
                    link_preview_options=LinkPreviewOptions(is_disabled=True),
                )
                self._message_timestamps.append(time.time())
                return True
            except RetryAfter as exc:
                retry_after = exc.retry_after
                retry_seconds = (
                    retry_after.total_seconds()
                    if hasattr(retry_after, "total_seconds")
                    else float(retry_after)
                )
                self._logger.warning(
                    "telegram_rate_limit_retry_after",
                    telegram_chat_id=chat_id,
                    retry_seconds=retry_seconds,
                )
                await self._sleep(retry_seconds)
            except ChatMigrated as exc:
                # Group upgraded to a supergroup; the old id no longer accepts messages.
                self._logger.info(
                    "telegram_chat_migrated",
                    telegram_chat_id=chat_id,
                    telegram_new_chat_id=exc.new_chat_id,
                )
                target_chat_id = exc.new_chat_id
            # BadRequest subclasses NetworkError, so it must be matched first.
            except (BadRequest, Forbidden) as exc:
                self._logger.error(
                    "telegram_fatal_error",
                    telegram_chat_id=chat_id,
                    error_type=type(exc).__name__,
                    error_message=str(exc),
                )
                return False
            except (NetworkError, TimedOut) as exc:
                last_transport_error = exc
                self._logger.warning(
                    "telegram_network_error_retry",
                    telegram_chat_id=chat_id,
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    backoff_seconds=backoff,
                )
                if attempt < self.max_retries:
                    await self._sleep(backoff)
            except TelegramError as exc:
                last_transport_error = None
                self._logger.warning(
                    "telegram_error_retry",
                    telegram_chat_id=chat_id,
                    error_type=type(exc).__name__,
                    attempt=attempt,
                    max_retries=self.max_retries,
                    backoff_seconds=backoff,
                )
                if attempt < self.max_retries:
                    await self._sleep(backoff)

        if last_transport_error is not None:
            raise NotificationDeliveryError(
                f"Telegram transport failed after {self.max_retries} attempts",
                chat_id=chat_id,
                cause=last_transport_error,
            ) from last_transport_error

        self._logger.error("telegram_max_retries_exceeded_message_dropped", telegram_chat_id=chat_id)
        return False

    async def _apply_rate_limit(self) -> None:
        if self.messages_per_minute <= 0:
            return

        now = time.time()
        window_start = now - 60
        self._message_timestamps = [t for t in self._message_timestamps if t >= window_start]
        if len(self._message_timestamps) >= self.messages_per_minute:
            sleep_time = 60 - (now - self._message_timestamps[0])
            if sleep_time > 0:
                self._logger.debug("telegram_rate_limit_wait", sleep_seconds=sleep_time)
                await self._sleep(sleep_time)
