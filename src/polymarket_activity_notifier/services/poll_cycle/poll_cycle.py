# -*- coding: utf-8 -*-
"""PollCycleService: one fetch / filter / fan-out / deliver / commit pass over all watched addresses."""

from __future__ import annotations

import asyncio
import random
import time
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any

import structlog
from structlog.contextvars import bound_contextvars

from polymarket_activity_notifier.models.activity import ActivityEvent
from polymarket_activity_notifier.models.cycle_result import CycleResult
from polymarket_activity_notifier.models.pending_message import PendingMessage
from polymarket_activity_notifier.models.subscription import SubscriberRef
from polymarket_activity_notifier.services.poll_cycle.batching import MessageBatch, build_batches
from polymarket_activity_notifier.services.poll_cycle.subscriber_policy import (
    build_chat_targets,
    push_kinds,
    skip_reason,
)
from polymarket_activity_notifier.utils.dedupe import delivery_key
from polymarket_activity_notifier.utils.validation import mask_address

if TYPE_CHECKING:
    from polymarket_activity_notifier.clients.data_api import DataApiClient
    from polymarket_activity_notifier.config import Settings
    from polymarket_activity_notifier.notifications.strategies.base import (
        BaseNotificationStrategy,
    )
    from polymarket_activity_notifier.notifications.types import MessageRenderer
    from polymarket_activity_notifier.services.subscription_cache import SubscriptionCache
    from polymarket_activity_notifier.services.watermark import WatermarkStore


@dataclass(slots=True)
class _AddressOutcome:
    """What one address contributed to the cycle."""

    address: str
    staged_watermark: int | None = None
    messages: list[PendingMessage] = field(default_factory=list)
    processed: list[tuple[int, str]] = field(default_factory=list)
    """(event time, event key) of every event selected this cycle, oldest first."""
    failed: bool = False

    @property
    def events_processed(self) -> int:
        return len(self.processed)

    def keys_at(self, event_time: int) -> list[str]:
        return [key for ts, key in self.processed if ts == event_time]


@dataclass(slots=True)
class _DeliveryReport:
    batches_sent: int = 0
    batches_failed: int = 0
    notifications_sent: int = 0
    delivered_ids: list[str] = field(default_factory=list)
    earliest_failed: dict[str, int] = field(default_factory=dict)
    """address -> earliest event time of a batch that was not delivered."""


class PollCycleService:
    """Runs poll cycles. At most one cycle is in flight at a time.

    A cycle never raises: fetch failures skip the address, send failures hold
    back that address's watermark so the events are retried next cycle, and a
    failed commit is logged (the next cycle re-reads the previous watermarks).
    """

    def __init__(
        self,
        cache: SubscriptionCache,
        watermark_store: WatermarkStore,
        data_api: DataApiClient,
        notifier: BaseNotificationStrategy,
        renderer: MessageRenderer,
        settings: Settings,
        *,
        sleep: Callable[[float], Any] = asyncio.sleep,
        clock: Callable[[], float] = time.time,
        rng: random.Random | None = None,
        get_logger: Callable[[str], Any] = structlog.get_logger,
        logger_name: str | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            cache: Subscription/config cache (address grouping and per-chat config).
            watermark_store: Per-address watermarks and recent delivery keys.
            data_api: Activity feed client.
            notifier: Delivery strategy (Telegram or console).
            renderer: Turns one event into message text for one chat.
            settings: Application settings (uses settings.scheduler).
            sleep: Awaitable sleep used for pacing between sends (injected for tests).
            clock: Returns current unix time in seconds (injected for tests).
            rng: Random source for send jitter.
            get_logger: Logger factory (injected) with default of structlog.get_logger.
            logger_name: Optional logger name (defaults to class name).
        """
        self._cache = cache
        self._store = watermark_store
        self._data_api = data_api
        self._notifier = notifier
        self._renderer = renderer
        self._settings = settings
        self._sleep = sleep
        self._clock = clock
        self._rng = rng or random.Random()
        self._logger = get_logger(logger_name or self.__class__.__name__)
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._lock.locked()

    async def run_cycle(self) -> CycleResult:
        """Run one cycle, waiting for an in-flight one to finish first."""
        async with self._lock:
            started = time.monotonic()
            try:
                result = await self._run_cycle()
            except Exception as e:
                self._logger.exception(
                    "poll_cycle_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                result = CycleResult()
            return replace(result, duration_seconds=round(time.monotonic() - started, 3))

    async def _ensure_loaded(self) -> bool:
        """Hydrate the cache and watermarks if needed; False when they cannot be read."""
        try:
            if not self._cache.is_loaded:
                await self._cache.load_all()
            if not self._store.is_loaded:
                await self._store.load()
        except Exception as e:
            self._logger.error(
                "poll_cycle_state_unavailable",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False
        return True

    async def _run_cycle(self) -> CycleResult:
        # Without persisted watermarks every address would look new.
        if not await self._ensure_loaded():
            return CycleResult()

        grouped = self._cache.all_grouped_by_address()
        total_subscriptions = sum(len(refs) for refs in grouped.values())
        if not grouped:
            return CycleResult()

        valid_addresses = set(grouped)
        recent_ids = self._store.get_recent_ids()
        now = int(self._clock())
        semaphore = asyncio.Semaphore(self._settings.scheduler.fetch_concurrency)

        outcomes = await asyncio.gather(
            *(
                self._process_address(
                    address,
                    refs,
                    semaphore=semaphore,
                    recent_ids=recent_ids,
                    now=now,
                )
                for address, refs in grouped.items()
            )
        )

        pending = sorted(
            (m for outcome in outcomes for m in outcome.messages),
            key=lambda m: m.event_time,
        )
        batches = build_batches(pending, self._settings.scheduler.batch_size)
        report = await self._deliver(batches)

        updates, tie_keys = self._watermark_updates(outcomes, report.earliest_failed)
        try:
            await self._store.commit(
                updates, report.delivered_ids, valid_addresses, tie_keys=tie_keys
            )
        except Exception as e:
            self._logger.error(
                "poll_cycle_commit_failed",
                poll_cycle_updates=len(updates),
                poll_cycle_delivered_ids=len(report.delivered_ids),
                error_type=type(e).__name__,
                error_message=str(e),
            )

        result = CycleResult(
            total_subscriptions=total_subscriptions,
            addresses_checked=len(grouped),
            events_processed=sum(o.events_processed for o in outcomes),
            notifications_sent=report.notifications_sent,
            addresses_failed=sum(1 for o in outcomes if o.failed),
            batches_sent=report.batches_sent,
            batches_failed=report.batches_failed,
        )
        self._logger.info(
            "poll_cycle_completed",
            poll_cycle_subscriptions=result.total_subscriptions,
            poll_cycle_addresses=result.addresses_checked,
            poll_cycle_addresses_failed=result.addresses_failed,
            poll_cycle_events=result.events_processed,
            poll_cycle_pending=len(pending),
            poll_cycle_notifications_sent=result.notifications_sent,
            poll_cycle_batches_failed=result.batches_failed,
        )
        return result

    async def _process_address(
        self,
        address: str,
        refs: list[SubscriberRef],
        *,
        semaphore: asyncio.Semaphore,
        recent_ids: frozenset[str],
        now: int,
    ) -> _AddressOutcome:
        outcome = _AddressOutcome(address=address)
        scheduler = self._settings.scheduler
        with bound_contextvars(poll_cycle_address_masked=mask_address(address)):
            last_seen = self._store.get(address)
            if last_seen > 0:
                lower_bound = max(0, last_seen - scheduler.tie_margin_seconds)
            else:
                added = [r.added_at for r in refs if r.added_at]
                if not added:
                    # Legacy rows without a creation time: start from now, fetch next cycle.
                    self._logger.info("poll_cycle_watermark_initialized", poll_cycle_watermark=now)
                    outcome.staged_watermark = now
                    return outcome
                lower_bound = min(added)

            async with semaphore:
                try:
                    events = await asyncio.wait_for(
                        self._data_api.fetch_activity(address, lower_bound),
                        timeout=scheduler.fetch_timeout_seconds,
                    )
                except Exception as e:
                    self._logger.warning(
                        "poll_cycle_fetch_failed",
                        poll_cycle_lower_bound=lower_bound,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    outcome.failed = True
                    return outcome

            try:
                fresh = self._select_new(events, last_seen, self._store.get_tie_keys(address))
                messages = self._fan_out(address, refs, fresh, recent_ids)
            except Exception as e:
                # Nothing is staged, so the address is retried from the same watermark.
                self._logger.exception(
                    "poll_cycle_address_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
                outcome.failed = True
                return outcome

            if not fresh:
                return outcome
            outcome.processed = [(e.event_time, e.key) for e in fresh]
            outcome.staged_watermark = fresh[-1].event_time
            outcome.messages = messages
            self._logger.debug(
                "poll_cycle_address_processed",
                poll_cycle_events=len(fresh),
                poll_cycle_pending=len(messages),
            )
        return outcome

    def _fan_out(
        self,
        address: str,
        refs: list[SubscriberRef],
        fresh: list[ActivityEvent],
        recent_ids: frozenset[str],
    ) -> list[PendingMessage]:
        """Render one message per (event, chat) pair that passes the chat's filters."""
        messages: list[PendingMessage] = []
        if not fresh:
            return messages
        kinds = push_kinds(push_redeem=self._settings.scheduler.push_redeem)
        targets = build_chat_targets(address, refs, self._cache.config_for)
        for event in fresh:
            for target in targets:
                if skip_reason(event, target, kinds=kinds) is not None:
                    continue
                if delivery_key(target.chat_id, event.key) in recent_ids:
                    continue
                text = self._renderer.render(
                    event,
                    target.display_name,
                    address,
                    target.config.language,
                )
                if not text:
                    continue
                messages.append(
                    PendingMessage(
                        chat_id=target.chat_id,
                        text=text,
                        event_time=event.event_time,
                        address=address,
                        event_key=event.key,
                    )
                )
        return messages

    @staticmethod
    def _select_new(
        events: list[ActivityEvent],
        last_seen: int,
        known_ties: frozenset[str],
    ) -> list[ActivityEvent]:
        """New events after the watermark, first occurrence per key, oldest first.

        Events in the watermark's own second are kept unless their key was
        already processed at that second.
        """
        seen_keys: set[str] = set()
        fresh: list[ActivityEvent] = []
        for event in events:
            if event.event_time < last_seen:
                continue
            if event.event_time == last_seen and event.key in known_ties:
                continue
            if event.key in seen_keys:
                continue
            seen_keys.add(event.key)
            fresh.append(event)
        fresh.sort(key=lambda e: e.event_time)
        return fresh

    async def _deliver(self, batches: list[MessageBatch]) -> _DeliveryReport:
        scheduler = self._settings.scheduler
        report = _DeliveryReport()
        for index, batch in enumerate(batches):
            if index > 0:
                await self._sleep(
                    self._rng.uniform(
                        scheduler.send_delay_min_seconds, scheduler.send_delay_max_seconds
                    )
                )
            delivered = False
            try:
                delivered = await asyncio.wait_for(
                    self._notifier.send(batch.chat_id, batch.text),
                    timeout=scheduler.send_timeout_seconds,
                )
            except Exception as e:
                self._logger.warning(
                    "poll_cycle_send_failed",
                    poll_cycle_chat_id=batch.chat_id,
                    poll_cycle_address_masked=mask_address(batch.address),
                    poll_cycle_batch_size=len(batch.messages),
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            if delivered:
                report.batches_sent += 1
                report.notifications_sent += len(batch.messages)
                report.delivered_ids.extend(batch.delivery_keys)
                continue

            report.batches_failed += 1
            earliest = batch.earliest_event_time
            current = report.earliest_failed.get(batch.address)
            if current is None or earliest < current:
                report.earliest_failed[batch.address] = earliest
            self._logger.info(
                "poll_cycle_batch_not_delivered",
                poll_cycle_chat_id=batch.chat_id,
                poll_cycle_address_masked=mask_address(batch.address),
                poll_cycle_batch_size=len(batch.messages),
            )
        return report

    def _watermark_updates(
        self,
        outcomes: list[_AddressOutcome],
        earliest_failed: dict[str, int],
    ) -> tuple[dict[str, int], dict[str, list[str]]]:
        """Candidate watermark per address, held just below its earliest undelivered event.

        Also returns the keys of the events processed at exactly that candidate,
        which the store keeps to recognise same-second repeats.
        """
        updates: dict[str, int] = {}
        tie_keys: dict[str, list[str]] = {}
        for outcome in outcomes:
            target = outcome.staged_watermark
            if target is None:
                continue
            failed_at = earliest_failed.get(outcome.address)
            if failed_at is not None:
                target = min(target, failed_at - 1)
            if target < self._store.get(outcome.address):
                continue
            updates[outcome.address] = target
            keys = outcome.keys_at(target)
            if keys:
                tie_keys[outcome.address] = keys
        return updates, tie_keys
