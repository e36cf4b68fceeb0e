"""Use case committing a finalized record to the primary output and notifiers.

Purpose
-------
Implement the finalize sequence of the logger core: encode and write the
record to the primary output, then offer it to the gated notifier fan-out
either inline or through a background dispatcher.

Contents
--------
* :func:`create_finalize_record` factory returning the per-record callable.
* :func:`write_fallback` last-resort reporting when the primary output fails.

System Role
-----------
Application-layer orchestrator invoked by :class:`lib_log_notify.logger.NotifyLogger`
for every :meth:`RecordBuilder.finalize` call.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import TextIO

from lib_log_notify.application.ports.output import OutputPort
from lib_log_notify.domain.record import LogRecord

from ._types import Emitter, Encoder, FanOutResult, FinalizeResult

logger = logging.getLogger(__name__)

Dispatcher = Callable[[LogRecord], bool]
"""Hands a record to a background worker; returns ``False`` when it was dropped."""


def create_finalize_record(
    *,
    output: OutputPort,
    encoder: Encoder,
    fan_out: Callable[[LogRecord], FanOutResult],
    emit: Emitter,
    dispatcher: Dispatcher | None = None,
    fallback_stream: Callable[[], TextIO] | None = None,
) -> Callable[[LogRecord], FinalizeResult]:
    """Build the callable executed for every finalized record.

    Parameters
    ----------
    output:
        Primary sink implementing :class:`OutputPort`.
    encoder:
        Function turning a record into the configured encoding.
    fan_out:
        Gated notifier fan-out built by :func:`build_fan_out`.
    emit:
        Guarded diagnostic emitter.
    dispatcher:
        Optional background dispatcher; when given, notifier delivery happens
        off the caller's thread and ``finalize`` never waits for it.
    fallback_stream:
        Returns the stream used when ``output`` fails; defaults to the
        current ``sys.stderr``.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from lib_log_notify.domain import LogLevel
    >>> class Memory:
    ...     def __init__(self):
    ...         self.lines = []
    ...     def write(self, payload, *, level):
    ...         self.lines.append(payload)
    >>> memory = Memory()
    >>> finalize = create_finalize_record(
    ...     output=memory,
    ...     encoder=lambda record: record.message,
    ...     fan_out=lambda record: {'notified': ['pager'], 'errors': []},
    ...     emit=lambda name, payload: None,
    ... )
    >>> record = LogRecord('svc', datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.ERROR, 'boom')
    >>> result = finalize(record)
    >>> result['ok'], result['notified'], memory.lines
    (True, ['pager'], ['boom'])
    """

    stream_factory = fallback_stream or (lambda: sys.stderr)

    def finalize(record: LogRecord) -> FinalizeResult:
        written = _write_primary(record)
        if dispatcher is not None:
            accepted = dispatcher(record)
            emit("queued" if accepted else "queue_full", {"level": record.level.name, "service": record.service})
            return {"ok": written and accepted, "written": written, "queued": accepted, "notified": [], "errors": []}
        outcome = fan_out(record)
        return {
            "ok": written and not outcome["errors"],
            "written": written,
            "queued": False,
            "notified": outcome["notified"],
            "errors": outcome["errors"],
        }

    def _write_primary(record: LogRecord) -> bool:
        try:
            payload = encoder(record)
            output.write(payload, level=record.level)
        except Exception as exc:  # noqa: BLE001
            logger.error("Primary output failed for %s record", record.level.name, exc_info=exc)
            write_fallback(stream_factory(), record, exc)
            emit("output_failed", {"level": record.level.name, "service": record.service, "exception": repr(exc)})
            return False
        emit("emitted", {"level": record.level.name, "service": record.service})
        return True

    return finalize


def write_fallback(stream: TextIO, record: LogRecord, exc: BaseException) -> None:
    """Report a failed primary write on ``stream`` without ever raising."""

    try:
        stream.write(
            f"lib_log_notify: primary output failed ({type(exc).__name__}: {exc}); "
            f"dropped {record.level.severity} record from {record.service}: {record.message}\n"
        )
        stream.flush()
    except Exception:  # noqa: BLE001
        # Nowhere left to report to.
        return


__all__ = ["Dispatcher", "create_finalize_record", "write_fallback"]
