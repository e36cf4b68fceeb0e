"""Structured logging façade with severity-gated chat notifications.

Construct one :class:`NotifyLogger` per service and pass it to the code that
logs::

    slack = ChannelNotifier(LogLevel.ERROR, "#ops", SlackClient(token))
    log = NotifyLogger("billing", OutputEncoding.JSON, [slack])
    log.error().field("order", 42).finalize("charge failed")

Every record is written to the primary output; records at or above a
notifier's threshold are additionally delivered to that notifier.
"""

from __future__ import annotations

from .adapters import (
    ChannelNotifier,
    LoggingNotifier,
    MemoryOutput,
    RichConsoleOutput,
    SlackClient,
    StreamOutput,
    format_message,
)
from .application.ports import ClockPort, DeliveryClientPort, NotifierPort, OutputPort
from .application.use_cases import FinalizeResult, NotifierRegistration
from .domain import LogLevel, LogRecord, OutputEncoding, parse_level
from .errors import ClientError, ConfigurationError, LogNotifyError, NotifyError
from .logger import NotifyLogger, RecordBuilder
from .pagination import Pagination, compute_totals, normalize

__all__ = [
    "ChannelNotifier",
    "ClientError",
    "ClockPort",
    "ConfigurationError",
    "DeliveryClientPort",
    "FinalizeResult",
    "LogLevel",
    "LogNotifyError",
    "LogRecord",
    "LoggingNotifier",
    "MemoryOutput",
    "NotifierPort",
    "NotifierRegistration",
    "NotifyError",
    "NotifyLogger",
    "OutputEncoding",
    "OutputPort",
    "Pagination",
    "RecordBuilder",
    "RichConsoleOutput",
    "SlackClient",
    "StreamOutput",
    "compute_totals",
    "format_message",
    "normalize",
    "parse_level",
]
