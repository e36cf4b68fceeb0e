"""Exception taxonomy shared by the logger core, notifiers and delivery clients.

Contents
--------
* :class:`LogNotifyError` – package base class.
* :class:`ConfigurationError` – invalid construction arguments (fail fast).
* :class:`ClientError` – a delivery client could not hand over a message.
* :class:`NotifyError` – a notifier failed to deliver one record.
"""

from __future__ import annotations


class LogNotifyError(Exception):
    """Base class for every error raised by :mod:`lib_log_notify`."""


class ConfigurationError(LogNotifyError, ValueError):
    """Raised at construction time when arguments are invalid."""


class ClientError(LogNotifyError):
    """Raised by delivery clients when the remote service rejects a message.

    Parameters
    ----------
    message:
        Human readable description.
    code:
        Optional machine readable error code reported by the remote service
        (e.g. Slack's ``channel_not_found`` or ``ratelimited``).
    """

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.code = code


class NotifyError(LogNotifyError):
    """Wrap the failure of a single notifier invocation.

    The original exception is available via ``__cause__`` and :attr:`cause`.

    Examples
    --------
    >>> try:
    ...     raise NotifyError("delivery failed", notifier="slack", channel="#ops") from ClientError("boom")
    ... except NotifyError as exc:
    ...     (exc.notifier, exc.channel, type(exc.cause).__name__)
    ('slack', '#ops', 'ClientError')
    """

    def __init__(self, message: str, *, notifier: str, channel: str | None = None) -> None:
        super().__init__(message)
        self.notifier = notifier
        self.channel = channel

    @property
    def cause(self) -> BaseException | None:
        """Return the underlying exception that triggered this error."""

        return self.__cause__


__all__ = ["ClientError", "ConfigurationError", "LogNotifyError", "NotifyError"]
