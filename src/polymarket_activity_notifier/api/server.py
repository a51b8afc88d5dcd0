# -*- coding: utf-8 -*-
"""Inbound HTTP surface (aiohttp.web): health, ensure, notify, manual check and subscription listing."""

from __future__ import annotations

import json
import time
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Optional

import structlog
from aiohttp import web

from polymarket_activity_notifier.events.subscriber_events import (
    SubscriberChangedEvent,
    SubscriberChangeKind,
)

if TYPE_CHECKING:
    from bubus import EventBus  # type: ignore[import-untyped]

    from polymarket_activity_notifier.services.poll_cycle import PollCycleService
    from polymarket_activity_notifier.services.scheduler import PollScheduler
    from polymarket_activity_notifier.services.subscription_cache import SubscriptionCache

_NOTIFY_KINDS: dict[str, SubscriberChangeKind] = {
    "sub": "subscriptions",
    "subscriptions": "subscriptions",
    "config": "config",
}

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


class NotifierApi:
    """Request handlers. Every request also wakes the scheduler (see ``wake_middleware``)."""

    def __init__(
        self,
        scheduler: PollScheduler,
        poll_cycle: PollCycleService,
        event_bus: Any,
        cache: SubscriptionCache,
        *,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: Optional[str] = None,
    ) -> None:
        self._scheduler = scheduler
        self._poll_cycle = poll_cycle
        self._cache = cache
        self._event_bus: EventBus = event_bus
        self._logger = get_logger(logger_name or self.__class__.__name__)

    @web.middleware
    async def wake_middleware(self, request: web.Request, handler: Handler) -> web.StreamResponse:
        self._scheduler.ensure_running()
        return await handler(request)

    async def health(self, request: web.Request) -> web.Response:
        """GET /health"""
        return web.json_response({"status": "ok", "timestamp": int(time.time() * 1000)})

    async def ensure(self, request: web.Request) -> web.Response:
        """GET /ensure (the middleware already armed the scheduler)."""
        return web.json_response({"success": True, "running": self._scheduler.is_running})

    async def notify(self, request: web.Request) -> web.Response:
        """POST /notify {"chatId": int, "type": "sub" | "subscriptions" | "config"}"""
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return web.json_response({"error": "invalid json body"}, status=400)
        if not isinstance(body, dict):
            return web.json_response({"error": "body must be an object"}, status=400)

        chat_id = body.get("chatId")
        kind = _NOTIFY_KINDS.get(str(body.get("type") or ""))
        if isinstance(chat_id, bool) or not isinstance(chat_id, int):
            return web.json_response({"error": "chatId must be an integer"}, status=400)
        if kind is None:
            return web.json_response(
                {"error": "type must be one of: sub, subscriptions, config"}, status=400
            )

        self._event_bus.dispatch(SubscriberChangedEvent(chat_id=chat_id, kind=kind))
        self._logger.debug("api_notify_dispatched", api_chat_id=chat_id, api_kind=kind)
        return web.json_response({"success": True})

    async def check(self, request: web.Request) -> web.Response:
        """GET /check: run one cycle now and return its counters."""
        result = await self._poll_cycle.run_cycle()
        return web.json_response(result.to_dict())

    async def subscriptions(self, request: web.Request) -> web.Response:
        """GET /subscriptions: every cached subscription as {chatId, address, alias, addedAt}."""
        if not self._cache.is_loaded:
            return web.json_response({"error": "subscriptions not loaded yet"}, status=503)
        rows = [
            {"chatId": chat_id, **sub.to_record()}
            for chat_id, subs in self._cache.subscriptions_by_chat().items()
            for sub in subs
        ]
        return web.json_response(rows)


def create_app(
    scheduler: PollScheduler,
    poll_cycle: PollCycleService,
    event_bus: Any,
    cache: SubscriptionCache,
) -> web.Application:
    """Build the aiohttp application with routes and the wake-up middleware."""
    api = NotifierApi(scheduler, poll_cycle, event_bus, cache)
    app = web.Application(middlewares=[api.wake_middleware])
    app.router.add_get("/health", api.health)
    app.router.add_get("/ensure", api.ensure)
    app.router.add_post("/notify", api.notify)
    app.router.add_get("/check", api.check)
    app.router.add_get("/subscriptions", api.subscriptions)
    return app
