"""Notifier adapters implementing :class:`NotifierPort`."""

from __future__ import annotations

from .channel import ChannelNotifier, format_message
from .logging_notifier import LoggingNotifier

__all__ = ["ChannelNotifier", "LoggingNotifier", "format_message"]
