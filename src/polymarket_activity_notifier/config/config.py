# -*- coding: utf-8 -*-
"""Configuration loaded from environment via Pydantic Settings.

Nested env vars use <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, SCHEDULER__INTERVAL_SECONDS.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal, Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """General application configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    app_name: str = "polymarket-activity-notifier"
    service_name: Optional[str] = None
    service_version: Optional[str] = None
    environment: Literal["development", "test", "production"] = "development"


class LoggingSettings(BaseSettings):
    """Structured logging configuration for structlog/stdlib/Logfire."""

    model_config = SettingsConfigDict(extra="ignore")

    console_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    file_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    logfire_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    log_to_console: bool = True
    log_to_file: bool = False
    log_file_path: str = "logs/activity_notifier.log"
    # TimedRotatingFileHandler: when to rotate (S/M/H/D/W0–W6/midnight), interval, backups to keep
    log_file_when: Literal[
        "S", "M", "H", "D", "W0", "W1", "W2", "W3", "W4", "W5", "W6", "midnight"
    ] = "midnight"
    log_file_interval: int = 1
    log_file_backup_count: int = 30
    log_file_utc: bool = True

    # httpx (python-telegram-bot) logs every request at INFO
    third_party_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    # Main output format: JSONRenderer if True, ConsoleRenderer if False
    json_format: bool = False

    logfire_enabled: bool = False
    logfire_token: Optional[str] = None


class ApiSettings(BaseSettings):
    """Configuration for the Polymarket Data API (activity feed)."""

    model_config = SettingsConfigDict(extra="ignore")

    data_api_host: str = Field(
        default="https://data-api.polymarket.com",
        description="Polymarket Data API base URL.",
    )
    timeout_seconds: float = Field(
        default=8.0,
        ge=1.0,
        le=120.0,
        description="HTTP request timeout in seconds.",
    )
    max_retries: int = Field(
        default=2,
        ge=1,
        le=20,
        description="Maximum number of attempts for a failed request.",
    )
    activity_page_size: int = Field(
        default=100,
        ge=1,
        le=500,
        description="Items requested per /activity page.",
    )
    activity_max_pages: int = Field(
        default=3,
        ge=1,
        le=20,
        description="Upper bound on /activity pages fetched per address and cycle.",
    )


class TelegramNotificationSettings(BaseSettings):
    """Telegram delivery (from env TELEGRAM__*)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = False
    api_key: Optional[str] = Field(default=None, description="Telegram bot API key.")
    messages_per_minute: int = Field(default=1200, ge=1, le=1800)
    max_retries: int = Field(default=2, ge=1, le=20)
    backoff_base_seconds: float = Field(default=0.5, ge=0.1, le=60.0)
    connect_timeout: float = Field(default=5.0, ge=0.1, le=60.0)
    read_timeout: float = Field(default=5.0, ge=0.1, le=120.0)
    write_timeout: float = Field(default=5.0, ge=0.1, le=120.0)
    pool_timeout: float = Field(default=5.0, ge=0.1, le=60.0)


class ConsoleNotificationSettings(BaseSettings):
    """Console (dry-run) delivery, used when Telegram is disabled."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True


class SchedulerSettings(BaseSettings):
    """Poll cycle cadence, fan-out and delivery pacing."""

    model_config = SettingsConfigDict(extra="ignore")

    interval_seconds: float = Field(default=10.0, ge=1.0, le=3600.0)
    min_delay_seconds: float = Field(default=1.0, ge=0.0, le=60.0)
    fetch_concurrency: int = Field(default=8, ge=1, le=64)
    fetch_timeout_seconds: float = Field(default=20.0, ge=1.0, le=300.0)
    send_timeout_seconds: float = Field(default=10.0, ge=1.0, le=120.0)
    send_delay_min_seconds: float = Field(default=0.1, ge=0.0, le=10.0)
    send_delay_max_seconds: float = Field(default=0.2, ge=0.0, le=10.0)
    batch_size: int = Field(default=5, ge=1, le=20)
    tie_margin_seconds: int = Field(
        default=1,
        ge=0,
        le=60,
        description="Seconds subtracted from the watermark when building the fetch lower bound.",
    )
    push_redeem: bool = Field(
        default=False,
        description="Also notify REDEEM activity (BUY/SELL trades are always pushed).",
    )

    @model_validator(mode="after")
    def _check_send_delay_range(self) -> SchedulerSettings:
        if self.send_delay_max_seconds < self.send_delay_min_seconds:
            raise ValueError("send_delay_max_seconds must be >= send_delay_min_seconds")
        return self


class StorageSettings(BaseSettings):
    """Durable stores: subscriptions, configs and watermarks."""

    model_config = SettingsConfigDict(extra="ignore")

    data_dir: str = "data"
    subscriptions_file: str = "subscriptions.json"
    configs_file: str = "configs.json"
    watermarks_file: str = "watermarks.json"
    page_size: int = Field(default=1000, ge=1, le=10000)
    recent_ids_cap: int = Field(default=1000, ge=1, le=100000)
    orphan_ttl_days: int = Field(default=90, ge=1, le=3650)


class SubscriberDefaultsSettings(BaseSettings):
    """Per-chat settings applied when a chat has no stored config."""

    model_config = SettingsConfigDict(extra="ignore")

    language: Literal["en", "zh"] = "en"
    min_amount: float = Field(default=10.0, ge=0.0)


class ServerSettings(BaseSettings):
    """Inbound HTTP surface (health, ensure, notify, check)."""

    model_config = SettingsConfigDict(extra="ignore")

    enabled: bool = True
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


class Settings(BaseSettings):
    """Root application configuration.

    Groups all sub-configurations so the rest of the code does not
    read environment variables directly. Nested overrides use
    <section>__<key>, e.g. LOGGING__CONSOLE_LEVEL, TELEGRAM__API_KEY.
    """

    model_config = SettingsConfigDict(
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app: AppSettings = Field(default_factory=AppSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    api: ApiSettings = Field(default_factory=ApiSettings)
    telegram: TelegramNotificationSettings = Field(default_factory=TelegramNotificationSettings)
    console: ConsoleNotificationSettings = Field(default_factory=ConsoleNotificationSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    storage: StorageSettings = Field(default_factory=StorageSettings)
    defaults: SubscriberDefaultsSettings = Field(default_factory=SubscriberDefaultsSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    @classmethod
    def from_env(cls, **overrides: Any) -> Settings:
        """Build settings from environment (and .env), with optional overrides.

        Nested overrides can be passed as flat keys or nested dicts, e.g.:
        - from_env(scheduler__interval_seconds=30)
        - from_env(scheduler={"interval_seconds": 30})

        Returns:
            A new Settings instance.
        """
        return cls(**overrides)


@lru_cache
def get_settings() -> Settings:
    """Return a single cached instance of Settings.

    Typical usage:

        from polymarket_activity_notifier.config import get_settings

        settings = get_settings()
        interval = settings.scheduler.interval_seconds
    """
    return Settings()
