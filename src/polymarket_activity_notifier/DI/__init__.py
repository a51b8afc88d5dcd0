"""Dependency injection."""

from polymarket_activity_notifier.DI.container import Container

__all__ = ["Container"]
