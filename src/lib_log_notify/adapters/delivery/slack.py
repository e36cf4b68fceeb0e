"""Slack delivery client implementing :class:`DeliveryClientPort`.

Purpose
-------
Post rendered notifier messages to Slack channels through
``slack_sdk.WebClient.chat_postMessage``.

Contents
--------
* :class:`SlackClient` - thin wrapper translating Slack failures into
  :class:`~lib_log_notify.errors.ClientError`.

System Role
-----------
Shared collaborator of :class:`~lib_log_notify.adapters.notifiers.ChannelNotifier`.
``slack_sdk`` is optional (``pip install lib_log_notify[slack]``); callers may
inject any object exposing ``chat_postMessage`` instead.
"""

from __future__ import annotations

from typing import Any

from lib_log_notify.application.ports.delivery import DeliveryClientPort
from lib_log_notify.errors import ClientError, ConfigurationError


def _default_web_client(token: str, timeout: int) -> Any:
    """Build a ``slack_sdk.WebClient``, raising if the SDK is unavailable."""
    try:
        from slack_sdk import WebClient
    except ImportError as exc:
        raise ConfigurationError("slack_sdk is not installed; install lib_log_notify[slack]") from exc
    return WebClient(token=token, timeout=timeout)


class SlackClient(DeliveryClientPort):
    """Send text messages to Slack.

    Parameters
    ----------
    token:
        Bot token (``xoxb-...``); required unless ``web_client`` is given.
    web_client:
        Pre-configured client exposing ``chat_postMessage(channel=, text=)``.
    timeout:
        Request timeout in seconds handed to the SDK.

    Examples
    --------
    >>> class FakeWebClient:
    ...     def __init__(self):
    ...         self.posts = []
    ...     def chat_postMessage(self, *, channel, text):
    ...         self.posts.append((channel, text))
    ...         return {'ok': True}
    >>> web = FakeWebClient()
    >>> SlackClient(web_client=web).send('#ops', 'disk full')
    >>> web.posts
    [('#ops', 'disk full')]
    """

    def __init__(self, token: str | None = None, *, web_client: Any | None = None, timeout: int = 10) -> None:
        if web_client is None:
            if not token or not token.strip():
                raise ConfigurationError("Slack token must not be empty")
            web_client = _default_web_client(token.strip(), timeout)
        self._web_client = web_client

    def send(self, channel: str, text: str) -> None:
        """Post ``text`` to ``channel``; raise :class:`ClientError` on failure."""
        try:
            response = self._web_client.chat_postMessage(channel=channel, text=text)
        except Exception as exc:
            code = _error_code(exc)
            raise ClientError(f"Slack rejected message for {channel}: {code or exc}", code=code) from exc
        if _response_field(response, "ok") is False:
            code = _response_field(response, "error")
            raise ClientError(f"Slack rejected message for {channel}: {code}", code=code)


def _error_code(exc: Exception) -> str | None:
    """Return the Slack error code carried by ``SlackApiError`` responses."""
    response = getattr(exc, "response", None)
    if response is None:
        return None
    code = _response_field(response, "error")
    return code if isinstance(code, str) else None


def _response_field(response: Any, key: str) -> Any:
    try:
        return response[key]
    except (KeyError, TypeError):
        return None


__all__ = ["SlackClient"]
