"""Encoders turning :class:`LogRecord` objects into primary-output lines.

Why
---
The logger core selects one encoding at construction time. Keeping the
renderers here lets the JSON stream, the text console, and the tests share a
single data contract.

Contents
--------
* :func:`encode_json` – one JSON object per record, sorted keys.
* :func:`encode_text` – single human-readable line.
* :func:`select_encoder` – map :class:`OutputEncoding` to its encoder.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from lib_log_notify.domain.encoding import OutputEncoding
from lib_log_notify.domain.record import LogRecord


def encode_json(record: LogRecord) -> str:
    """Return ``record`` as a compact JSON object.

    Values that JSON cannot represent natively are rendered with ``str``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_notify.domain.levels import LogLevel
    >>> record = LogRecord('svc', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.INFO, 'hi', {'foo': 'bar'})
    >>> encode_json(record)
    '{"foo": "bar", "level": "info", "message": "hi", "service": "svc", "time": "2025-09-30T12:00:00+00:00"}'
    """

    return json.dumps(record.to_dict(), sort_keys=True, default=str, ensure_ascii=False)


def encode_text(record: LogRecord) -> str:
    """Return ``record`` as a single console line with sorted ``key=value`` pairs.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_notify.domain.levels import LogLevel
    >>> record = LogRecord('svc', datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc), LogLevel.WARNING, 'disk', {'pct': 93})
    >>> encode_text(record)
    '2025-09-30T12:00:00+00:00 WARNING  svc: disk pct=93'
    """

    fields = "".join(f" {key}={_render(value)}" for key, value in record.sorted_fields())
    head = f"{record.timestamp.isoformat()} {record.level.name:<8} {_render(record.service)}"
    return f"{head}: {_render(record.message)}{fields}"


def _render(value: Any) -> str:
    text = str(value)
    return text.replace("\n", "\\n")


_ENCODERS: dict[OutputEncoding, Callable[[LogRecord], str]] = {
    OutputEncoding.JSON: encode_json,
    OutputEncoding.TEXT: encode_text,
}


def select_encoder(encoding: OutputEncoding) -> Callable[[LogRecord], str]:
    """Return the encoder registered for ``encoding``."""

    return _ENCODERS[encoding]


__all__ = ["encode_json", "encode_text", "select_encoder"]
