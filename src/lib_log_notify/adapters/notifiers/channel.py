"""Channel notifier delivering records as chat messages.

Purpose
-------
Translate a :class:`LogRecord` into one human-readable text message and hand
it to a named channel through an injected delivery client (Slack, Mattermost,
an in-house chat bridge...).

Contents
--------
* :func:`format_message` - deterministic message template.
* :class:`ChannelNotifier` - :class:`NotifierPort` implementation.

System Role
-----------
One outbound ``client.send`` per qualifying record. Failures are wrapped in
:class:`NotifyError` and never retried; the logger core isolates them.
"""

from __future__ import annotations

from typing import Any

from lib_log_notify.application.ports.delivery import DeliveryClientPort
from lib_log_notify.application.ports.notifier import NotifierPort
from lib_log_notify.domain.levels import LogLevel
from lib_log_notify.domain.record import LogRecord
from lib_log_notify.errors import ConfigurationError, NotifyError


def format_message(record: LogRecord, *, title: str | None = None) -> str:
    """Render ``record`` as a chat message.

    The first line combines service, level and message; every field follows
    on its own ``key=value`` line in lexicographic key order so identical
    records always produce identical messages.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> record = LogRecord(
    ...     'billing', datetime(2025, 9, 30, tzinfo=timezone.utc), LogLevel.ERROR, 'charge failed',
    ...     {'order': 42, 'customer': 'c-7'},
    ... )
    >>> print(format_message(record))
    ✖ [billing] ERROR: charge failed
    customer=c-7
    order=42
    >>> print(format_message(record, title='prod').splitlines()[0])
    ✖ [billing/prod] ERROR: charge failed
    """

    source = record.service if not title else f"{record.service}/{title}"
    lines = [f"{record.level.icon} [{source}] {record.level.name}: {record.message}"]
    lines.extend(f"{key}={_render(value)}" for key, value in record.sorted_fields())
    return "\n".join(lines)


def _render(value: Any) -> str:
    return str(value).replace("\n", " ")


class ChannelNotifier(NotifierPort):
    """Deliver qualifying records to one channel through a delivery client.

    Parameters
    ----------
    min_level:
        Minimum severity that triggers a message.
    channel:
        Destination identifier (``#ops``, ``C0123ABC``); must be non-empty and
        free of whitespace.
    client:
        Shared :class:`DeliveryClientPort`. The notifier never closes it.
    title:
        Optional suffix appended to the service name in the message header
        (e.g. the deployment environment).
    name:
        Label used in diagnostics; defaults to ``"channel:<channel>"``.
    """

    def __init__(
        self,
        min_level: LogLevel,
        channel: str,
        client: DeliveryClientPort,
        *,
        title: str | None = None,
        name: str | None = None,
    ) -> None:
        if not isinstance(min_level, LogLevel):
            raise ConfigurationError(f"min_level must be a LogLevel, got {min_level!r}")
        if not isinstance(channel, str) or not channel.strip():
            raise ConfigurationError("channel must be a non-empty string")
        if any(char.isspace() for char in channel.strip()):
            raise ConfigurationError(f"channel must not contain whitespace: {channel!r}")
        if not callable(getattr(client, "send", None)):
            raise ConfigurationError(f"client {type(client).__name__} must provide send(channel, text)")
        self._min_level = min_level
        self._channel = channel.strip()
        self._client = client
        self._title = title
        self.name = name or f"channel:{self._channel}"

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    @property
    def channel(self) -> str:
        return self._channel

    def notify(self, record: LogRecord) -> None:
        """Send ``record`` to the channel; raise :class:`NotifyError` on failure."""
        if record.level < self._min_level:
            return
        text = format_message(record, title=self._title)
        try:
            self._client.send(self._channel, text)
        except Exception as exc:
            raise NotifyError(
                f"delivery to {self._channel} failed: {exc}",
                notifier=self.name,
                channel=self._channel,
            ) from exc


__all__ = ["ChannelNotifier", "format_message"]
