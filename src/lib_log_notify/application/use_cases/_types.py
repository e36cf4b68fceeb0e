"""Shared type aliases for the finalize pipeline."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypedDict

from lib_log_notify.domain.record import LogRecord
from lib_log_notify.errors import NotifyError

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None
Emitter = Callable[[str, dict[str, Any]], None]
Encoder = Callable[[LogRecord], str]


class FanOutResult(TypedDict):
    """Outcome of offering one record to the registered notifiers."""

    notified: list[str]
    errors: list[NotifyError]


class FinalizeResult(TypedDict):
    """Diagnostics returned by :meth:`RecordBuilder.finalize`.

    ``ok`` is ``True`` when the record was written and no notifier failed.
    ``queued`` is ``True`` when notifier delivery was handed to the
    background worker; ``notified``/``errors`` are empty in that case.
    """

    ok: bool
    written: bool
    queued: bool
    notified: list[str]
    errors: list[NotifyError]


__all__ = ["DiagnosticHook", "Emitter", "Encoder", "FanOutResult", "FinalizeResult"]
