"""Ordered log levels used for record classification and notifier gating.

Purpose
-------
Offer a domain-specific representation of log severities that augments the
stdlib levels with ordering, icons, and lenient parsing helpers.

Contents
--------
* :class:`LogLevel` enum with comparison operators and conversion helpers.
* :func:`parse_level` lenient parser used by the configuration layer.
* ``_ICON_TABLE`` / ``_CODE_TABLE`` presentation metadata.

System Role
-----------
Comparison between levels is the only gating mechanism between the logger
core and its notifiers: a record reaches a notifier when
``record.level >= registration.min_level``.
"""

from __future__ import annotations

import logging
from enum import Enum


class LogLevel(Enum):
    """Enumerated logging levels ordered by severity.

    Examples
    --------
    >>> LogLevel.INFO < LogLevel.ERROR
    True
    >>> LogLevel.compare(LogLevel.CRITICAL, LogLevel.WARNING)
    1
    >>> sorted([LogLevel.ERROR, LogLevel.DEBUG])[0] is LogLevel.DEBUG
    True
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value >= other.value

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured logging payloads."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the unicode icon visualizing the level on chat channels and consoles."""

        return _ICON_TABLE[self]

    @property
    def code(self) -> str:
        """Return the fixed-width four letter abbreviation of the level."""

        return _CODE_TABLE[self]

    def to_python_level(self) -> int:
        """Return the :mod:`logging` constant matching this level."""

        return getattr(logging, self.name)

    @staticmethod
    def compare(a: "LogLevel", b: "LogLevel") -> int:
        """Return ``-1``, ``0`` or ``1`` when ``a`` is below, equal to, or above ``b``."""

        return (a.value > b.value) - (a.value < b.value)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_python_level(cls, level: int) -> "LogLevel":
        """Translate a stdlib logging level integer into :class:`LogLevel`."""
        return cls.from_numeric(level)

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` corresponding to ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc


_ALIASES = {
    "WARN": "WARNING",
    "FATAL": "CRITICAL",
    "PANIC": "CRITICAL",
    "TRACE": "DEBUG",
}
# Level names used by other logging ecosystems mapped onto our members.

_ICON_TABLE = {
    LogLevel.DEBUG: "🐞",
    LogLevel.INFO: "ℹ",
    LogLevel.WARNING: "⚠",
    LogLevel.ERROR: "✖",
    LogLevel.CRITICAL: "☠",
}

_CODE_TABLE = {
    LogLevel.DEBUG: "DEBG",
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARN",
    LogLevel.ERROR: "ERRO",
    LogLevel.CRITICAL: "CRIT",
}


def parse_level(text: str | None, default: LogLevel = LogLevel.INFO) -> LogLevel:
    """Return the level named by ``text`` or ``default`` when it is unknown.

    Environment variables and config files frequently carry typos or empty
    values; unlike :meth:`LogLevel.from_name` this helper never raises.

    Examples
    --------
    >>> parse_level("warn") is LogLevel.WARNING
    True
    >>> parse_level("verbose") is LogLevel.INFO
    True
    >>> parse_level("", default=LogLevel.ERROR) is LogLevel.ERROR
    True
    """

    if not text or not text.strip():
        return default
    try:
        return LogLevel.from_name(text)
    except ValueError:
        return default


__all__ = ["LogLevel", "parse_level"]
