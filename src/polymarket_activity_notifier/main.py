# -*- coding: utf-8 -*-
"""
Entry point for the activity notifier.

Orchestrates: logging, settings, container, notifier, cache and watermark hydrate,
scheduler, HTTP server, shutdown (SIGINT/SIGTERM or CancelledError).
Flow per tick: scheduler -> poll cycle -> Data API -> styler -> notifier -> watermark store.

Run with: python -m polymarket_activity_notifier.main
"""
from __future__ import annotations

import asyncio
import signal
import structlog
from typing import Any

from aiohttp import web

from polymarket_activity_notifier.DI import Container
from polymarket_activity_notifier.api import create_app
from polymarket_activity_notifier.config import get_settings
from polymarket_activity_notifier.exceptions import StorageError
from polymarket_activity_notifier.logging.config import configure_logging


def _setup_signals(shutdown_event: asyncio.Event) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            pass  # Windows has no add_signal_handler


async def _start_server(container: Container, logger: Any) -> web.AppRunner | None:
    settings = get_settings()
    if not settings.server.enabled:
        return None
    app = create_app(
        container.poll_scheduler(),
        container.poll_cycle_service(),
        container.event_bus(),
        container.subscription_cache(),
    )
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, settings.server.host, settings.server.port)
    await site.start()
    logger.info(
        "main_server_started",
        server_host=settings.server.host,
        server_port=settings.server.port,
    )
    return runner


async def run() -> None:
    configure_logging()
    logger = structlog.get_logger("main")
    settings = get_settings()

    container = Container()
    notifier = container.notifier()
    cache = container.subscription_cache()
    store = container.watermark_store()
    scheduler = container.poll_scheduler()
    http_client = container.http_client()
    event_bus = container.event_bus()

    await notifier.initialize()
    try:
        await cache.load_all()
        await store.load()
    except StorageError as e:
        # The scheduler retries hydration on its first tick.
        logger.warning("main_initial_load_failed", error_message=str(e), storage_path=e.path)
    cache.subscribe(event_bus)

    shutdown_event = asyncio.Event()
    _setup_signals(shutdown_event)

    scheduler.ensure_running()
    runner = await _start_server(container, logger)
    logger.info(
        "main_started",
        scheduler_interval_seconds=settings.scheduler.interval_seconds,
        notifier=type(notifier).__name__,
        subscriptions=cache.total_subscriptions(),
    )

    try:
        await shutdown_event.wait()
    finally:
        logger.info("main_shutdown_started")
        if runner is not None:
            await runner.cleanup()
        await scheduler.stop()
        cache.unsubscribe()
        await event_bus.stop()
        await http_client.aclose()
        await notifier.shutdown()
        logger.info("main_shutdown_complete")


def main() -> None:
    asyncio.run(run())


__all__ = ["run", "main"]

if __name__ == "__main__":
    main()
