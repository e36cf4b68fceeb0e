"""Environment-driven configuration for :class:`NotifyLogger`.

Purpose
-------
Resolve logger settings from environment variables (optionally seeded from a
nearby ``.env`` file) and wire a ready-to-use :class:`NotifyLogger`.

Contents
--------
* :func:`enable_dotenv` / :func:`should_use_dotenv` - ``.env`` loading policy.
* :class:`LoggerSettings` and :func:`load_settings` - validated settings.
* :func:`build_logger` - composition helper used by the CLI.

Environment variables
---------------------
``LOG_SERVICE`` (required), ``LOG_ENCODING`` (``json``/``text``),
``LOG_DISPATCH`` (``inline``/``queue``), ``SLACK_TOKEN``, ``SLACK_CHANNEL``,
``SLACK_LEVEL`` (lenient level name, defaults to ``info``).
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv

from lib_log_notify.adapters.delivery.slack import SlackClient
from lib_log_notify.adapters.notifiers.channel import ChannelNotifier
from lib_log_notify.application.ports import NotifierPort, OutputPort
from lib_log_notify.domain.encoding import OutputEncoding
from lib_log_notify.domain.levels import LogLevel, parse_level
from lib_log_notify.errors import ConfigurationError
from lib_log_notify.logger import DISPATCH_MODES, NotifyLogger

DOTENV_ENV_VAR = "LIB_LOG_NOTIFY_USE_DOTENV"
_TRUTHY = {"1", "true", "yes", "on"}

_DOTENV_STATE: dict[str, Path | None] = {"loaded": None}


def should_use_dotenv(*, explicit: bool | None = None, env_value: str | None = None) -> bool:
    """Decide whether ``.env`` loading is enabled.

    An explicit CLI flag wins; otherwise the ``LIB_LOG_NOTIFY_USE_DOTENV``
    toggle decides; the default is off.

    Examples
    --------
    >>> should_use_dotenv(explicit=False, env_value="1")
    False
    >>> should_use_dotenv(env_value="yes")
    True
    >>> should_use_dotenv()
    False
    """

    if explicit is not None:
        return explicit
    if env_value is None:
        return False
    return env_value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    Returns the resolved path of the loaded file, or ``None`` when no file was
    found walking up from ``search_from`` (defaults to the working directory).
    """

    if search_from is not None:
        found = _find_upwards(search_from)
    else:
        located = find_dotenv(usecwd=True)
        found = Path(located) if located else None
    if found is None:
        return None
    resolved = found.resolve()
    load_dotenv(resolved, override=False)
    _DOTENV_STATE["loaded"] = resolved
    return resolved


def loaded_dotenv() -> Path | None:
    """Return the ``.env`` path loaded by :func:`enable_dotenv`, if any."""

    return _DOTENV_STATE["loaded"]


def _find_upwards(start: Path) -> Path | None:
    current = start.resolve()
    for directory in (current, *current.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    _DOTENV_STATE["loaded"] = None


@dataclass(frozen=True, slots=True)
class LoggerSettings:
    """Validated inputs for :func:`build_logger`."""

    service: str
    encoding: OutputEncoding = OutputEncoding.JSON
    dispatch: str = "inline"
    slack_token: str | None = None
    slack_channel: str | None = None
    slack_level: LogLevel = LogLevel.INFO

    def __post_init__(self) -> None:
        if not self.service or not self.service.strip():
            raise ConfigurationError("LOG_SERVICE must be set to a non-empty service name")
        if self.dispatch not in DISPATCH_MODES:
            raise ConfigurationError(f"LOG_DISPATCH must be one of {DISPATCH_MODES}, got {self.dispatch!r}")
        if bool(self.slack_token) != bool(self.slack_channel):
            raise ConfigurationError("SLACK_TOKEN and SLACK_CHANNEL must be configured together")

    @property
    def slack_enabled(self) -> bool:
        return bool(self.slack_token and self.slack_channel)


def load_settings(environ: Mapping[str, str] | None = None, **overrides: Any) -> LoggerSettings:
    """Build :class:`LoggerSettings` from ``environ`` (defaults to ``os.environ``).

    Keyword ``overrides`` (``service``, ``encoding``, ``dispatch``...) take
    precedence over environment values when not ``None``.

    Examples
    --------
    >>> settings = load_settings({"LOG_SERVICE": "billing", "LOG_ENCODING": "text", "SLACK_LEVEL": "warn"})
    >>> settings.service, settings.encoding.value, settings.slack_level.name
    ('billing', 'text', 'WARNING')
    """

    env = os.environ if environ is None else environ
    values: dict[str, Any] = {
        "service": _clean(env.get("LOG_SERVICE")) or "",
        "encoding": _clean(env.get("LOG_ENCODING")) or OutputEncoding.JSON.value,
        "dispatch": (_clean(env.get("LOG_DISPATCH")) or "inline").lower(),
        "slack_token": _clean(env.get("SLACK_TOKEN")),
        "slack_channel": _clean(env.get("SLACK_CHANNEL")),
        "slack_level": parse_level(env.get("SLACK_LEVEL")),
    }
    values.update({key: value for key, value in overrides.items() if value is not None})

    encoding = values["encoding"]
    if not isinstance(encoding, OutputEncoding):
        try:
            values["encoding"] = OutputEncoding.from_name(str(encoding))
        except ValueError as exc:
            raise ConfigurationError(f"LOG_ENCODING: {exc}") from exc
    level = values["slack_level"]
    if not isinstance(level, LogLevel):
        values["slack_level"] = parse_level(str(level))
    return LoggerSettings(**values)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def build_logger(
    settings: LoggerSettings,
    *,
    output: OutputPort | None = None,
    slack_web_client: Any | None = None,
    extra_notifiers: Iterable[NotifierPort] = (),
) -> NotifyLogger:
    """Compose a :class:`NotifyLogger` from ``settings``.

    The Slack notifier (when configured) is registered first, followed by
    ``extra_notifiers`` in the given order.
    """

    notifiers: list[NotifierPort] = []
    if settings.slack_enabled:
        client = SlackClient(settings.slack_token, web_client=slack_web_client)
        notifiers.append(ChannelNotifier(settings.slack_level, settings.slack_channel or "", client, name="slack"))
    notifiers.extend(extra_notifiers)
    return NotifyLogger(
        settings.service,
        settings.encoding,
        notifiers,
        output=output,
        dispatch=settings.dispatch,
    )


__all__ = [
    "DOTENV_ENV_VAR",
    "LoggerSettings",
    "build_logger",
    "enable_dotenv",
    "load_settings",
    "loaded_dotenv",
    "should_use_dotenv",
]
