"""Adapters connecting the logger core to streams, chat services and threads."""

from __future__ import annotations

from .clock import SystemClock
from .delivery import SlackClient
from .encoders import encode_json, encode_text, select_encoder
from .notifiers import ChannelNotifier, LoggingNotifier, format_message
from .output import MemoryOutput, RichConsoleOutput, StreamOutput
from .queue import QueueAdapter

__all__ = [
    "ChannelNotifier",
    "LoggingNotifier",
    "MemoryOutput",
    "QueueAdapter",
    "RichConsoleOutput",
    "SlackClient",
    "StreamOutput",
    "SystemClock",
    "encode_json",
    "encode_text",
    "format_message",
    "select_encoder",
]
