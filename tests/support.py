"""Fakes shared by the test-suite."""

from __future__ import annotations

import threading
from datetime import datetime, timezone

from lib_log_notify.domain import LogLevel, LogRecord

FIXED_TIME = datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    def now(self) -> datetime:
        return FIXED_TIME


class RecordingNotifier:
    """Notifier fake remembering every record it was handed."""

    def __init__(self, min_level: LogLevel, *, name: str = "recorder", fail_with: Exception | None = None) -> None:
        self._min_level = min_level
        self.name = name
        self.fail_with = fail_with
        self.records: list[LogRecord] = []
        self._lock = threading.Lock()

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    def notify(self, record: LogRecord) -> None:
        with self._lock:
            self.records.append(record)
        if self.fail_with is not None:
            raise self.fail_with


class RecordingClient:
    def __init__(self, *, fail_with: Exception | None = None) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail_with = fail_with

    def send(self, channel: str, text: str) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self.sent.append((channel, text))


def make_record(level: LogLevel = LogLevel.INFO, message: str = "hello", **fields: object) -> LogRecord:
    return LogRecord(service="svc", timestamp=FIXED_TIME, level=level, message=message, fields=fields)
