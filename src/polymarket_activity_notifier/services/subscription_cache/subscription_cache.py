# -*- coding: utf-8 -*-
"""SubscriptionCache: in-memory mirror of who watches what and per-chat settings."""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, get_args

import structlog

from polymarket_activity_notifier.events.subscriber_events import (
    SubscriberChangedEvent,
    SubscriberChangeKind,
)
from polymarket_activity_notifier.models.subscription import (
    SubscriberConfig,
    SubscriberRef,
    Subscription,
)

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from polymarket_activity_notifier.config import Settings
    from polymarket_activity_notifier.persistence.repositories.interfaces import (
        IConfigRepository,
        ISubscriptionRepository,
    )

_KINDS: tuple[str, ...] = get_args(SubscriberChangeKind)


class SubscriptionCache:
    """Read-side cache over the subscription and config stores.

    Bulk-loaded once on cold start, then refreshed per chat on invalidation.
    Every mutation builds a new dict and swaps it in with one assignment, so a
    poll cycle that grabbed the previous map keeps a consistent (at most one
    tick stale) view.
    """

    def __init__(
        self,
        subscription_repository: ISubscriptionRepository,
        config_repository: IConfigRepository,
        settings: Settings,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            subscription_repository: Durable subscription store (read only here).
            config_repository: Durable per-chat config store (read only here).
            settings: Application settings (uses settings.storage.page_size and settings.defaults).
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._subscription_repo = subscription_repository
        self._config_repo = config_repository
        self._settings = settings
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._subscriptions: dict[int, tuple[Subscription, ...]] = {}
        self._configs: dict[int, SubscriberConfig] = {}
        self._loaded = False
        self._event_bus: EventBus | None = None
        self._default_config = SubscriberConfig(
            language=settings.defaults.language,
            min_amount=settings.defaults.min_amount,
        )

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    async def load_all(self) -> None:
        """Hydrate both maps from the durable stores, page by page.

        Raises:
            StorageError: If a store cannot be read; the previous contents are kept.
        """
        page_size = self._settings.storage.page_size
        subscriptions: dict[int, tuple[Subscription, ...]] = {}
        cursor: str | None = None
        while True:
            chat_ids, cursor = await self._subscription_repo.list_chat_ids(
                cursor=cursor, limit=page_size
            )
            for chat_id in chat_ids:
                subs = await self._subscription_repo.get(chat_id)
                if subs:
                    subscriptions[chat_id] = tuple(subs)
            if cursor is None:
                break

        configs: dict[int, SubscriberConfig] = {}
        cursor = None
        while True:
            chat_ids, cursor = await self._config_repo.list_chat_ids(
                cursor=cursor, limit=page_size
            )
            for chat_id in chat_ids:
                config = await self._config_repo.get(chat_id)
                if config is not None:
                    configs[chat_id] = config
            if cursor is None:
                break

        self._subscriptions = subscriptions
        self._configs = configs
        self._loaded = True
        self._logger.info(
            "subscription_cache_loaded",
            subscription_cache_chats=len(subscriptions),
            subscription_cache_subscriptions=self.total_subscriptions(),
            subscription_cache_configs=len(configs),
        )

    async def invalidate(self, chat_id: int, kind: str) -> None:
        """Re-read one chat's subscriptions or config and replace (or drop) its entry.

        Raises:
            ValueError: If kind is not "subscriptions" or "config".
        """
        if kind not in _KINDS:
            raise ValueError(f"unknown invalidation kind: {kind!r}")

        if kind == "subscriptions":
            subs = await self._subscription_repo.get(chat_id)
            updated_subs = dict(self._subscriptions)
            if subs:
                updated_subs[chat_id] = tuple(subs)
            else:
                updated_subs.pop(chat_id, None)
            self._subscriptions = updated_subs
            count = len(subs)
        else:
            config = await self._config_repo.get(chat_id)
            updated_configs = dict(self._configs)
            if config is not None:
                updated_configs[chat_id] = config
            else:
                updated_configs.pop(chat_id, None)
            self._configs = updated_configs
            count = 0 if config is None else 1

        self._logger.debug(
            "subscription_cache_invalidated",
            subscription_cache_chat_id=chat_id,
            subscription_cache_kind=kind,
            subscription_cache_entries=count,
        )

    def all_grouped_by_address(self) -> dict[str, list[SubscriberRef]]:
        """Return address -> subscribers, one SubscriberRef per subscription row (fresh structure)."""
        grouped: dict[str, list[SubscriberRef]] = {}
        for chat_id, subs in self._subscriptions.items():
            for sub in subs:
                grouped.setdefault(sub.address, []).append(
                    SubscriberRef(chat_id=chat_id, alias=sub.alias, added_at=sub.added_at)
                )
        return grouped

    def subscriptions_by_chat(self) -> dict[int, tuple[Subscription, ...]]:
        """Return chat -> subscriptions, ordered by chat id (fresh dict)."""
        return {chat_id: self._subscriptions[chat_id] for chat_id in sorted(self._subscriptions)}

    def total_subscriptions(self) -> int:
        return sum(len(subs) for subs in self._subscriptions.values())

    def config_for(self, chat_id: int) -> SubscriberConfig:
        """Return the chat's config, or the configured defaults when the chat has none."""
        return self._configs.get(chat_id, self._default_config)

    def subscribe(self, event_bus: Any) -> None:
        """Refresh entries on SubscriberChangedEvent."""
        self._event_bus = event_bus
        event_bus.on(SubscriberChangedEvent, self._on_subscriber_changed)
        self._logger.debug("subscription_cache_subscribed")

    def unsubscribe(self) -> None:
        """Stop listening for SubscriberChangedEvent."""
        if self._event_bus is None:
            return
        key = SubscriberChangedEvent.__name__
        handlers = getattr(self._event_bus, "handlers", {})
        if key in handlers:
            handlers[key] = [h for h in handlers[key] if h != self._on_subscriber_changed]
        self._event_bus = None
        self._logger.debug("subscription_cache_unsubscribed")

    async def _on_subscriber_changed(self, event: SubscriberChangedEvent) -> None:
        try:
            await self.invalidate(event.chat_id, event.kind)
        except Exception as e:
            self._logger.warning(
                "subscription_cache_invalidate_failed",
                subscription_cache_chat_id=event.chat_id,
                subscription_cache_kind=event.kind,
                error_type=type(e).__name__,
                error_message=str(e),
            )
