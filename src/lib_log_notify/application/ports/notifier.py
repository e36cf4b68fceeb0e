"""Notifier port describing escalation of records to human-facing channels.

Purpose
-------
Define the narrow capability the logger core depends on when fanning records
out to chat services, mail gateways, webhooks, or any other channel.

Contents
--------
* :class:`NotifierPort` – runtime-checkable protocol exposing ``min_level``
  and ``notify``.

System Role
-----------
The logger core holds a sequence of :class:`NotifierPort` values and never
concrete types; adapters in :mod:`lib_log_notify.adapters.notifiers` plug in
without leaking implementation details upstream.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_notify.domain.levels import LogLevel
from lib_log_notify.domain.record import LogRecord


@runtime_checkable
class NotifierPort(Protocol):
    """Deliver one record to one external channel.

    Why
    ---
    Gating is owned by the logger core; a notifier only needs to know how to
    render and deliver a record. Failures are reported by raising
    :class:`~lib_log_notify.errors.NotifyError`, never by returning flags.

    Examples
    --------
    >>> class Recorder:
    ...     min_level = LogLevel.ERROR
    ...     def notify(self, record):
    ...         pass
    >>> isinstance(Recorder(), NotifierPort)
    True
    """

    @property
    def min_level(self) -> LogLevel:
        """Minimum severity at which the notifier wants to be invoked."""

    def notify(self, record: LogRecord) -> None:
        """Deliver ``record``; raise ``NotifyError`` when delivery fails."""


__all__ = ["NotifierPort"]
