"""Domain record describing one finalized structured log event.

Purpose
-------
Provide an immutable representation of a log record shared by the primary
output encoders and every notifier.

Contents
--------
* :class:`LogRecord` frozen dataclass with flattening helpers.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer; builders in :mod:`lib_log_notify.logger` accumulate
fields and produce a :class:`LogRecord` exactly once, at finalize time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

from .encoding import OutputEncoding
from .levels import LogLevel

RESERVED_KEYS: tuple[str, ...] = ("service", "level", "time", "message")
"""Top-level keys of the flattened payload; fields never override them."""


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Immutable record handed to the primary output and the notifiers.

    Attributes
    ----------
    service:
        Service/application name configured on the logger.
    timestamp:
        Wall-clock time of finalize in timezone-aware UTC.
    level:
        :class:`LogLevel` severity used for notifier gating.
    message:
        Message passed to ``finalize``.
    fields:
        Read-only mapping of accumulated fields in insertion order.
    encoding:
        :class:`OutputEncoding` of the logger that produced the record.

    Examples
    --------
    >>> record = LogRecord(
    ...     service='svc',
    ...     timestamp=datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc),
    ...     level=LogLevel.INFO,
    ...     message='hello',
    ...     fields={'b': 2, 'a': 1},
    ... )
    >>> record.to_dict()['level']
    'info'
    >>> [key for key, _ in record.sorted_fields()]
    ['a', 'b']
    """

    service: str
    timestamp: datetime
    level: LogLevel
    message: str
    fields: Mapping[str, Any] = field(default_factory=dict)
    encoding: OutputEncoding = OutputEncoding.JSON

    def __post_init__(self) -> None:
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def sorted_fields(self) -> list[tuple[str, Any]]:
        """Return the non-reserved fields ordered lexicographically by name."""

        return sorted(
            ((key, value) for key, value in self.fields.items() if key not in RESERVED_KEYS),
            key=lambda item: item[0],
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the flattened payload with ISO8601 timestamp.

        Fields named like a reserved key are dropped so the record envelope
        cannot be spoofed through caller data.
        """

        data: dict[str, Any] = {key: value for key, value in self.fields.items() if key not in RESERVED_KEYS}
        data.update(
            {
                "service": self.service,
                "level": self.level.severity,
                "time": self.timestamp.isoformat(),
                "message": self.message,
            }
        )
        return data


__all__ = ["LogRecord", "RESERVED_KEYS"]
