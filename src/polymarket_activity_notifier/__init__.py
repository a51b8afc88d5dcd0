"""Polymarket activity notifier: pushes followed addresses' trades to Telegram chats."""

__version__ = "0.1.0"
