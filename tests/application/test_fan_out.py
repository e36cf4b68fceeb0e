from __future__ import annotations

import itertools

import pytest

from lib_log_notify.application.use_cases.fan_out import (
    NotifierRegistration,
    build_diagnostic_emitter,
    build_fan_out,
    register_notifiers,
)
from lib_log_notify.domain import LogLevel
from lib_log_notify.errors import ConfigurationError, NotifyError
from tests.support import RecordingNotifier, make_record

ORDERED_LEVELS = list(LogLevel)


class _Diagnostics:
    def __init__(self) -> None:
        self.calls: list[tuple[str, dict]] = []

    def __call__(self, name: str, payload: dict) -> None:
        self.calls.append((name, payload))

    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.mark.parametrize("lower, higher", list(itertools.combinations(ORDERED_LEVELS, 2)))
def test_threshold_gates_lower_levels(lower: LogLevel, higher: LogLevel) -> None:
    notifier = RecordingNotifier(higher)
    fan_out = build_fan_out(register_notifiers([notifier]), build_diagnostic_emitter(None))

    fan_out(make_record(lower))
    assert notifier.records == []

    fan_out(make_record(higher))
    assert [record.level for record in notifier.records] == [higher]


@pytest.mark.parametrize("threshold", ORDERED_LEVELS)
def test_records_at_or_above_threshold_are_delivered(threshold: LogLevel) -> None:
    notifier = RecordingNotifier(threshold)
    fan_out = build_fan_out(register_notifiers([notifier]), build_diagnostic_emitter(None))

    for level in ORDERED_LEVELS:
        fan_out(make_record(level))

    assert [record.level for record in notifier.records] == [level for level in ORDERED_LEVELS if level >= threshold]


def test_failing_notifier_does_not_block_later_ones(notify_error: NotifyError) -> None:
    first = RecordingNotifier(LogLevel.INFO, name="first", fail_with=notify_error)
    second = RecordingNotifier(LogLevel.INFO, name="second")
    diagnostics = _Diagnostics()
    fan_out = build_fan_out(register_notifiers([first, second]), build_diagnostic_emitter(diagnostics))

    outcome = fan_out(make_record(LogLevel.ERROR))

    assert len(first.records) == 1
    assert len(second.records) == 1
    assert outcome["notified"] == ["second"]
    assert outcome["errors"] == [notify_error]
    assert diagnostics.names() == ["notify_failed", "notified"]


def test_unexpected_exceptions_are_wrapped_in_notify_error() -> None:
    boom = RuntimeError("socket closed")
    notifier = RecordingNotifier(LogLevel.DEBUG, name="flaky", fail_with=boom)
    fan_out = build_fan_out(register_notifiers([notifier]), build_diagnostic_emitter(None))

    outcome = fan_out(make_record())

    (error,) = outcome["errors"]
    assert isinstance(error, NotifyError)
    assert error.notifier == "flaky"
    assert error.cause is boom


def test_notifiers_run_in_registration_order() -> None:
    calls: list[str] = []

    class Ordered:
        min_level = LogLevel.DEBUG

        def __init__(self, name: str) -> None:
            self.name = name

        def notify(self, record) -> None:
            calls.append(self.name)

    fan_out = build_fan_out(register_notifiers([Ordered("a"), Ordered("b"), Ordered("c")]), build_diagnostic_emitter(None))
    fan_out(make_record())
    assert calls == ["a", "b", "c"]


def test_register_notifiers_captures_threshold_at_registration() -> None:
    notifier = RecordingNotifier(LogLevel.WARNING)
    registrations = register_notifiers([notifier])
    notifier._min_level = LogLevel.DEBUG

    assert registrations[0].min_level is LogLevel.WARNING
    assert not registrations[0].accepts(make_record(LogLevel.INFO))


def test_register_notifiers_accepts_explicit_registrations() -> None:
    notifier = RecordingNotifier(LogLevel.DEBUG)
    registration = NotifierRegistration(notifier=notifier, min_level=LogLevel.CRITICAL)
    assert register_notifiers([registration]) == (registration,)


def test_register_notifiers_rejects_objects_without_capability() -> None:
    with pytest.raises(ConfigurationError, match="must provide min_level"):
        register_notifiers([object()])


def test_register_notifiers_rejects_non_level_thresholds() -> None:
    class Broken:
        min_level = "error"

        def notify(self, record) -> None:
            pass

    with pytest.raises(ConfigurationError, match="must be a LogLevel"):
        register_notifiers([Broken()])


def test_diagnostic_emitter_swallows_hook_errors(caplog: pytest.LogCaptureFixture) -> None:
    def explode(name: str, payload: dict) -> None:
        raise RuntimeError("hook broke")

    emit = build_diagnostic_emitter(explode)
    emit("emitted", {})

    assert "Diagnostic hook raised" in caplog.text
