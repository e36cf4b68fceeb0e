"""Notifier escalating records into a stdlib :mod:`logging` logger."""

from __future__ import annotations

import logging

from lib_log_notify.application.ports.notifier import NotifierPort
from lib_log_notify.domain.levels import LogLevel
from lib_log_notify.domain.record import LogRecord
from lib_log_notify.errors import ConfigurationError

from .channel import format_message


class LoggingNotifier(NotifierPort):
    """Forward qualifying records to ``logger`` at their own level.

    Handy for local runs where no chat service is configured: escalations end
    up wherever the host application routes its stdlib logging.
    """

    def __init__(self, min_level: LogLevel, logger: logging.Logger | None = None, *, name: str = "logging") -> None:
        if not isinstance(min_level, LogLevel):
            raise ConfigurationError(f"min_level must be a LogLevel, got {min_level!r}")
        self._min_level = min_level
        self._logger = logger or logging.getLogger("lib_log_notify.escalations")
        self.name = name

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    def notify(self, record: LogRecord) -> None:
        if record.level < self._min_level:
            return
        self._logger.log(record.level.to_python_level(), "%s", format_message(record))


__all__ = ["LoggingNotifier"]
