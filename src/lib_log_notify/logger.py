"""Logger core: structured records that escalate to notification channels.

Purpose
-------
Expose the entry point host applications construct once and pass around:
:class:`NotifyLogger` hands out :class:`RecordBuilder` objects; finalizing a
builder writes the record to the primary output and offers it to every
registered notifier whose threshold the record meets.

Contents
--------
* :class:`NotifyLogger` - validated composition of output, encoder and
  notifier registrations.
* :class:`RecordBuilder` - single-use, chainable field accumulator.

System Role
-----------
Composition point between the domain (:mod:`lib_log_notify.domain`), the
finalize use case, and the adapters. There is no module-level
logger instance; callers inject the :class:`NotifyLogger` they built.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from lib_log_notify.adapters.encoders import select_encoder
from lib_log_notify.adapters.output import StreamOutput
from lib_log_notify.adapters.clock import SystemClock
from lib_log_notify.adapters.queue import QueueAdapter
from lib_log_notify.application.ports import ClockPort, NotifierPort, OutputPort
from lib_log_notify.application.use_cases import (
    FinalizeResult,
    NotifierRegistration,
    build_diagnostic_emitter,
    build_fan_out,
    create_finalize_record,
    register_notifiers,
)
from lib_log_notify.application.use_cases._types import DiagnosticHook
from lib_log_notify.domain import LogLevel, LogRecord, OutputEncoding
from lib_log_notify.errors import ConfigurationError

DISPATCH_MODES: tuple[str, str] = ("inline", "queue")


class RecordBuilder:
    """Accumulate fields for one record until :meth:`finalize` commits it.

    Builders are not shared between threads; each call to
    :meth:`NotifyLogger.new_record` returns a fresh instance.

    Examples
    --------
    >>> from lib_log_notify.adapters.output import MemoryOutput
    >>> memory = MemoryOutput()
    >>> log = NotifyLogger('svc', output=memory)
    >>> result = log.info().field('foo', 'a').field('foo', 'b').finalize('hello')
    >>> result['written'], '"foo": "b"' in memory.lines[0]
    (True, True)
    """

    __slots__ = ("_commit", "_level", "_fields", "_finalized")

    def __init__(self, level: LogLevel, commit: Callable[[LogLevel, str, dict[str, Any]], FinalizeResult]) -> None:
        self._level = level
        self._commit = commit
        self._fields: dict[str, Any] = {}
        self._finalized = False

    @property
    def level(self) -> LogLevel:
        return self._level

    def field(self, name: str, value: Any) -> "RecordBuilder":
        """Set ``name`` to ``value``; a later call with the same name wins."""
        self._ensure_open()
        if not isinstance(name, str) or not name:
            raise ValueError("field name must be a non-empty string")
        self._fields[name] = value
        return self

    def fields(self, values: Mapping[str, Any] | None = None, /, **extra: Any) -> "RecordBuilder":
        """Set several fields at once; keyword arguments override ``values``."""
        for name, value in {**dict(values or {}), **extra}.items():
            self.field(name, value)
        return self

    def finalize(self, message: str) -> FinalizeResult:
        """Freeze the record, write it, and offer it to the notifiers.

        Returns
        -------
        FinalizeResult
            ``written`` reports the primary output outcome; ``errors`` lists
            the :class:`~lib_log_notify.errors.NotifyError` raised by failing
            notifiers. Nothing is raised for either kind of failure.

        Raises
        ------
        RuntimeError
            When the builder was already finalized.
        """
        self._ensure_open()
        self._finalized = True
        return self._commit(self._level, str(message), self._fields)

    def _ensure_open(self) -> None:
        if self._finalized:
            raise RuntimeError("record already finalized; request a new builder")


class NotifyLogger:
    """Structured logger fanning qualifying records out to notifiers.

    Parameters
    ----------
    service:
        Service/application name stamped on every record; must be non-empty.
    encoding:
        :class:`OutputEncoding` (or its name) used for the primary output.
    notifiers:
        Ordered notifiers (or pre-built :class:`NotifierRegistration` pairs).
        Each notifier's ``min_level`` is captured at construction.
    output:
        Primary sink; defaults to :class:`StreamOutput` on ``sys.stdout``.
    clock:
        Timestamp provider; defaults to :class:`SystemClock`.
    dispatch:
        ``"inline"`` runs notifiers synchronously in registration order before
        ``finalize`` returns. ``"queue"`` delivers on a background thread:
        ``finalize`` never waits for notifiers, no ordering is guaranteed
        across records, and :meth:`close` drains what is pending.
    queue_maxsize / queue_full_policy:
        Capacity and full-queue behaviour (``"block"`` or ``"drop"``) of the
        background worker in queue mode.
    diagnostic:
        Optional ``(name, payload)`` callback receiving pipeline milestones.

    Raises
    ------
    ConfigurationError
        For an empty service name, unknown encoding or dispatch mode, or a
        notifier that does not satisfy :class:`NotifierPort`.
    """

    def __init__(
        self,
        service: str,
        encoding: OutputEncoding | str = OutputEncoding.JSON,
        notifiers: Iterable[NotifierPort | NotifierRegistration] = (),
        *,
        output: OutputPort | None = None,
        clock: ClockPort | None = None,
        dispatch: str = "inline",
        queue_maxsize: int = 2048,
        queue_full_policy: str = "block",
        diagnostic: DiagnosticHook = None,
    ) -> None:
        if not isinstance(service, str) or not service.strip():
            raise ConfigurationError("service name must be a non-empty string")
        self._service = service.strip()
        self._encoding = _coerce_encoding(encoding)
        if dispatch not in DISPATCH_MODES:
            raise ConfigurationError(f"dispatch must be one of {DISPATCH_MODES}, got {dispatch!r}")
        self._registrations = register_notifiers(notifiers)
        self._output: OutputPort = output if output is not None else StreamOutput()
        self._clock: ClockPort = clock if clock is not None else SystemClock()

        emit = build_diagnostic_emitter(diagnostic)
        fan_out = build_fan_out(self._registrations, emit)
        self._queue: QueueAdapter | None = None
        if dispatch == "queue":
            try:
                self._queue = QueueAdapter(
                    worker=fan_out,
                    maxsize=queue_maxsize,
                    drop_policy=queue_full_policy,
                    diagnostic=diagnostic,
                )
            except ValueError as exc:
                raise ConfigurationError(str(exc)) from exc
            self._queue.start()
        self._close_lock = threading.Lock()
        self._closed = False
        encoder = select_encoder(self._encoding)
        self._finalize_inline = create_finalize_record(output=self._output, encoder=encoder, fan_out=fan_out, emit=emit)
        self._finalize = self._finalize_inline
        if self._queue is not None:
            self._finalize = create_finalize_record(
                output=self._output,
                encoder=encoder,
                fan_out=fan_out,
                emit=emit,
                dispatcher=self._queue.put,
            )

    @property
    def service(self) -> str:
        return self._service

    @property
    def encoding(self) -> OutputEncoding:
        return self._encoding

    @property
    def registrations(self) -> tuple[NotifierRegistration, ...]:
        """Return the frozen notifier registrations in invocation order."""

        return self._registrations

    @property
    def dispatch(self) -> str:
        return "queue" if self._queue is not None else "inline"

    def new_record(self, level: LogLevel | str) -> RecordBuilder:
        """Return a fresh builder for a record at ``level``."""
        return RecordBuilder(_coerce_level(level), self._commit)

    def debug(self) -> RecordBuilder:
        return self.new_record(LogLevel.DEBUG)

    def info(self) -> RecordBuilder:
        return self.new_record(LogLevel.INFO)

    def warning(self) -> RecordBuilder:
        return self.new_record(LogLevel.WARNING)

    def error(self) -> RecordBuilder:
        return self.new_record(LogLevel.ERROR)

    def critical(self) -> RecordBuilder:
        return self.new_record(LogLevel.CRITICAL)

    def close(self, *, timeout: float | None = None) -> None:
        """Drain and stop background delivery; a no-op in inline mode.

        Records finalized after ``close`` are delivered inline.
        """
        with self._close_lock:
            if self._queue is not None and not self._closed:
                self._queue.stop(drain=True, timeout=timeout)
                self._finalize = self._finalize_inline
            self._closed = True

    def wait_until_idle(self, timeout: float | None = None) -> bool:
        """Wait for queued deliveries to finish; always ``True`` inline."""
        if self._queue is None:
            return True
        return self._queue.wait_until_idle(timeout)

    def __enter__(self) -> "NotifyLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _commit(self, level: LogLevel, message: str, fields: dict[str, Any]) -> FinalizeResult:
        record = LogRecord(
            service=self._service,
            timestamp=self._clock.now(),
            level=level,
            message=message,
            fields=fields,
            encoding=self._encoding,
        )
        return self._finalize(record)


def _coerce_encoding(encoding: OutputEncoding | str) -> OutputEncoding:
    if isinstance(encoding, OutputEncoding):
        return encoding
    if isinstance(encoding, str):
        try:
            return OutputEncoding.from_name(encoding)
        except ValueError as exc:
            raise ConfigurationError(str(exc)) from exc
    raise ConfigurationError(f"encoding must be an OutputEncoding or its name, got {encoding!r}")


def _coerce_level(level: LogLevel | str) -> LogLevel:
    if isinstance(level, LogLevel):
        return level
    return LogLevel.from_name(level)


__all__ = ["DISPATCH_MODES", "NotifyLogger", "RecordBuilder"]
