"""Configuration subpackage."""

from polymarket_activity_notifier.config.config import (
    ApiSettings,
    AppSettings,
    ConsoleNotificationSettings,
    LoggingSettings,
    SchedulerSettings,
    ServerSettings,
    Settings,
    StorageSettings,
    SubscriberDefaultsSettings,
    TelegramNotificationSettings,
    get_settings,
)

__all__ = [
    "ApiSettings",
    "AppSettings",
    "ConsoleNotificationSettings",
    "LoggingSettings",
    "SchedulerSettings",
    "ServerSettings",
    "Settings",
    "StorageSettings",
    "SubscriberDefaultsSettings",
    "TelegramNotificationSettings",
    "get_settings",
]
