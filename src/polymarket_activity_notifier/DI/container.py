# -*- coding: utf-8 -*-
"""Dependency injection container (dependency-injector)."""

from __future__ import annotations

from pathlib import Path

from dependency_injector import containers, providers

from polymarket_activity_notifier.config import Settings, get_settings
from polymarket_activity_notifier.events.bus import get_event_bus
from polymarket_activity_notifier.clients.data_api import DataApiClient
from polymarket_activity_notifier.clients.http import AsyncHttpClient
from polymarket_activity_notifier.notifications.strategies.base import BaseNotificationStrategy
from polymarket_activity_notifier.notifications.strategies.console import ConsoleNotifier
from polymarket_activity_notifier.notifications.strategies.telegram import TelegramNotifier
from polymarket_activity_notifier.notifications.stylers.activity_styler import ActivityMessageStyler
from polymarket_activity_notifier.persistence.repositories.json_file import (
    JsonFileConfigRepository,
    JsonFileSubscriptionRepository,
    JsonFileWatermarkRepository,
)
from polymarket_activity_notifier.services.poll_cycle import PollCycleService
from polymarket_activity_notifier.services.scheduler import PollScheduler
from polymarket_activity_notifier.services.subscription_cache import SubscriptionCache
from polymarket_activity_notifier.services.watermark import WatermarkStore


def _storage_path(settings: Settings, file_field: str) -> Path:
    """Resolve a storage file (e.g. "subscriptions_file") under storage.data_dir."""
    storage = settings.storage
    return Path(storage.data_dir) / getattr(storage, file_field)


def _build_notifier(settings: Settings) -> BaseNotificationStrategy:
    """Telegram when enabled, otherwise the console dry run."""
    if settings.telegram.enabled:
        return TelegramNotifier(settings=settings)
    return ConsoleNotifier(settings=settings)


class Container(containers.DeclarativeContainer):
    """Application container. Wires settings, HTTP client, stores, cache, poll cycle, scheduler."""

    config = providers.Callable(get_settings)

    http_client = providers.Singleton(
        AsyncHttpClient,
        settings=config,
    )

    data_api_client = providers.Singleton(
        DataApiClient,
        http_client=http_client,
        settings=config,
    )

    event_bus = providers.Callable(get_event_bus)

    subscription_repository = providers.Singleton(
        JsonFileSubscriptionRepository,
        path=providers.Callable(_storage_path, config, "subscriptions_file"),
    )

    config_repository = providers.Singleton(
        JsonFileConfigRepository,
        path=providers.Callable(_storage_path, config, "configs_file"),
        default_language=config.provided.defaults.language,
        default_min_amount=config.provided.defaults.min_amount,
    )

    watermark_repository = providers.Singleton(
        JsonFileWatermarkRepository,
        path=providers.Callable(_storage_path, config, "watermarks_file"),
    )

    subscription_cache = providers.Singleton(
        SubscriptionCache,
        subscription_repository=subscription_repository,
        config_repository=config_repository,
        settings=config,
    )

    watermark_store = providers.Singleton(
        WatermarkStore,
        repository=watermark_repository,
        settings=config,
    )

    message_styler = providers.Singleton(ActivityMessageStyler)

    notifier = providers.Singleton(_build_notifier, config)

    poll_cycle_service = providers.Singleton(
        PollCycleService,
        cache=subscription_cache,
        watermark_store=watermark_store,
        data_api=data_api_client,
        notifier=notifier,
        renderer=message_styler,
        settings=config,
    )

    poll_scheduler = providers.Singleton(
        PollScheduler,
        poll_cycle=poll_cycle_service,
        cache=subscription_cache,
        watermark_store=watermark_store,
        settings=config,
    )
