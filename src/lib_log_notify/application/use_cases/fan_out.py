"""Gated, failure-isolated fan-out of records to notifiers.

Purpose
-------
Offer a finalized record to every registered notifier whose threshold is met,
in registration order, so that one failing notifier never prevents the next
one from running.

Contents
--------
* :class:`NotifierRegistration` – frozen (notifier, threshold) pair.
* :func:`register_notifiers` – validate and freeze the logger's notifier set.
* :func:`build_fan_out` – factory returning the per-record fan-out callable.
* :func:`build_diagnostic_emitter` – guard around the optional diagnostic hook.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from lib_log_notify.application.ports.notifier import NotifierPort
from lib_log_notify.domain.levels import LogLevel
from lib_log_notify.domain.record import LogRecord
from lib_log_notify.errors import ConfigurationError, NotifyError

from ._types import DiagnosticHook, Emitter, FanOutResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NotifierRegistration:
    """Pair a notifier with the threshold captured when it was registered."""

    notifier: NotifierPort
    min_level: LogLevel

    @property
    def name(self) -> str:
        """Return a short label used in diagnostics."""

        return notifier_name(self.notifier)

    def accepts(self, record: LogRecord) -> bool:
        """Return ``True`` when ``record`` meets the registered threshold."""

        return record.level >= self.min_level


def notifier_name(notifier: object) -> str:
    """Return the ``name`` attribute of ``notifier`` or its class name."""

    name = getattr(notifier, "name", None)
    return name if isinstance(name, str) and name else type(notifier).__name__


def register_notifiers(notifiers: Iterable[NotifierPort | NotifierRegistration]) -> tuple[NotifierRegistration, ...]:
    """Freeze ``notifiers`` into registrations, failing fast on invalid entries.

    Examples
    --------
    >>> class Pager:
    ...     min_level = LogLevel.ERROR
    ...     def notify(self, record):
    ...         pass
    >>> [reg.min_level for reg in register_notifiers([Pager()])]
    [<LogLevel.ERROR: 40>]
    >>> register_notifiers([object()])
    Traceback (most recent call last):
    ...
    lib_log_notify.errors.ConfigurationError: notifier #0 (object) must provide min_level and notify(record)
    """

    registrations: list[NotifierRegistration] = []
    for index, entry in enumerate(notifiers):
        if isinstance(entry, NotifierRegistration):
            registrations.append(entry)
            continue
        if not isinstance(entry, NotifierPort):
            raise ConfigurationError(f"notifier #{index} ({type(entry).__name__}) must provide min_level and notify(record)")
        level = entry.min_level
        if not isinstance(level, LogLevel):
            raise ConfigurationError(f"notifier #{index} ({type(entry).__name__}) min_level must be a LogLevel, got {level!r}")
        registrations.append(NotifierRegistration(notifier=entry, min_level=level))
    return tuple(registrations)


def build_diagnostic_emitter(diagnostic: DiagnosticHook) -> Emitter:
    """Return a callable that forwards milestones to ``diagnostic`` safely."""

    def emit(name: str, payload: dict[str, Any]) -> None:
        if diagnostic is None:
            return
        try:
            diagnostic(name, payload)
        except Exception as exc:  # noqa: BLE001
            logger.error("Diagnostic hook raised while reporting %s", name, exc_info=exc)

    return emit


def build_fan_out(
    registrations: tuple[NotifierRegistration, ...],
    emit: Emitter,
) -> Callable[[LogRecord], FanOutResult]:
    """Return the fan-out callable bound to ``registrations``.

    The registrations tuple is never mutated, so concurrent callers iterate it
    without locking.
    """

    def fan_out(record: LogRecord) -> FanOutResult:
        notified: list[str] = []
        errors: list[NotifyError] = []
        for registration in registrations:
            if not registration.accepts(record):
                continue
            error = _deliver(registration, record)
            if error is None:
                notified.append(registration.name)
                emit("notified", {"notifier": registration.name, "level": record.level.name})
                continue
            errors.append(error)
            logger.warning("Notifier %s failed to deliver record: %s", registration.name, error)
            emit(
                "notify_failed",
                {"notifier": registration.name, "level": record.level.name, "exception": repr(error.cause or error)},
            )
        return {"notified": notified, "errors": errors}

    return fan_out


def _deliver(registration: NotifierRegistration, record: LogRecord) -> NotifyError | None:
    try:
        registration.notifier.notify(record)
    except NotifyError as exc:
        return exc
    except Exception as exc:  # noqa: BLE001
        error = NotifyError(f"{registration.name} raised {type(exc).__name__}: {exc}", notifier=registration.name)
        error.__cause__ = exc
        return error
    return None


__all__ = [
    "NotifierRegistration",
    "build_diagnostic_emitter",
    "build_fan_out",
    "notifier_name",
    "register_notifiers",
]
