from __future__ import annotations

import logging

import pytest

from lib_log_notify.adapters.notifiers import ChannelNotifier, LoggingNotifier, format_message
from lib_log_notify.application.ports import NotifierPort
from lib_log_notify.domain import LogLevel
from lib_log_notify.errors import ClientError, ConfigurationError, NotifyError
from tests.support import RecordingClient, make_record


def test_format_message_is_deterministic_and_sorted() -> None:
    record = make_record(LogLevel.ERROR, "charge failed", order=42, customer="c-7")
    assert format_message(record) == "✖ [svc] ERROR: charge failed\ncustomer=c-7\norder=42"
    assert format_message(record) == format_message(make_record(LogLevel.ERROR, "charge failed", customer="c-7", order=42))


def test_format_message_without_fields_is_single_line() -> None:
    assert format_message(make_record(LogLevel.WARNING, "slow")) == "⚠ [svc] WARNING: slow"


def test_format_message_omits_reserved_fields() -> None:
    record = make_record(LogLevel.ERROR, "boom", service="spoofed", time="never", job="nightly")
    assert format_message(record) == "✖ [svc] ERROR: boom\njob=nightly"


def test_channel_notifier_sends_once_per_record() -> None:
    client = RecordingClient()
    notifier = ChannelNotifier(LogLevel.WARNING, "#ops", client)

    notifier.notify(make_record(LogLevel.ERROR, "boom", job="nightly"))

    assert client.sent == [("#ops", "✖ [svc] ERROR: boom\njob=nightly")]
    assert isinstance(notifier, NotifierPort)
    assert notifier.min_level is LogLevel.WARNING
    assert notifier.name == "channel:#ops"


def test_channel_notifier_ignores_records_below_threshold() -> None:
    client = RecordingClient()
    ChannelNotifier(LogLevel.ERROR, "#ops", client).notify(make_record(LogLevel.INFO))
    assert client.sent == []


def test_channel_notifier_wraps_client_failures() -> None:
    cause = ClientError("rate limited", code="ratelimited")
    notifier = ChannelNotifier(LogLevel.INFO, "#ops", RecordingClient(fail_with=cause), name="slack")

    with pytest.raises(NotifyError) as excinfo:
        notifier.notify(make_record(LogLevel.ERROR))

    assert excinfo.value.cause is cause
    assert excinfo.value.notifier == "slack"
    assert excinfo.value.channel == "#ops"


def test_channel_notifier_includes_title() -> None:
    client = RecordingClient()
    ChannelNotifier(LogLevel.INFO, "alerts", client, title="prod").notify(make_record(LogLevel.INFO, "up"))
    assert client.sent[0][1] == "ℹ [svc/prod] INFO: up"


@pytest.mark.parametrize("channel", ["", "   ", "#ops room"])
def test_channel_notifier_rejects_malformed_channels(channel: str) -> None:
    with pytest.raises(ConfigurationError, match="channel"):
        ChannelNotifier(LogLevel.INFO, channel, RecordingClient())


def test_channel_notifier_requires_send_capability() -> None:
    with pytest.raises(ConfigurationError, match="send"):
        ChannelNotifier(LogLevel.INFO, "#ops", object())  # type: ignore[arg-type]


def test_channel_notifier_requires_level_threshold() -> None:
    with pytest.raises(ConfigurationError, match="min_level"):
        ChannelNotifier("error", "#ops", RecordingClient())  # type: ignore[arg-type]


def test_logging_notifier_forwards_at_record_level(caplog: pytest.LogCaptureFixture) -> None:
    target = logging.getLogger("tests.escalations")
    notifier = LoggingNotifier(LogLevel.WARNING, target)

    with caplog.at_level(logging.DEBUG, logger="tests.escalations"):
        notifier.notify(make_record(LogLevel.INFO, "quiet"))
        notifier.notify(make_record(LogLevel.CRITICAL, "loud"))

    assert [(entry.levelno, entry.getMessage()) for entry in caplog.records] == [
        (logging.CRITICAL, "☠ [svc] CRITICAL: loud"),
    ]
