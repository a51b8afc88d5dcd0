"""Scheduling driver."""

from polymarket_activity_notifier.services.scheduler.poll_scheduler import PollScheduler

__all__ = ["PollScheduler"]
