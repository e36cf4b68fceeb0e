"""Domain entities and value objects used by the notifying logger."""

from __future__ import annotations

from .encoding import OutputEncoding
from .levels import LogLevel, parse_level
from .record import RESERVED_KEYS, LogRecord

__all__ = [
    "LogLevel",
    "LogRecord",
    "OutputEncoding",
    "RESERVED_KEYS",
    "parse_level",
]
