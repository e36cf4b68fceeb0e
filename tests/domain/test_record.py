from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from lib_log_notify.domain import LogLevel, LogRecord, OutputEncoding


def test_record_normalises_timestamp_to_utc() -> None:
    local = timezone(timedelta(hours=2))
    record = LogRecord("svc", datetime(2025, 9, 23, 14, 0, tzinfo=local), LogLevel.INFO, "msg")
    assert record.timestamp == datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)
    assert record.timestamp.tzinfo is timezone.utc


def test_record_requires_timezone_aware_timestamp() -> None:
    with pytest.raises(ValueError, match="timezone-aware"):
        LogRecord("svc", datetime(2025, 9, 23, 12, 0), LogLevel.INFO, "msg")


def test_record_fields_are_read_only_copies() -> None:
    source = {"foo": "bar"}
    record = LogRecord("svc", datetime(2025, 9, 23, tzinfo=timezone.utc), LogLevel.INFO, "msg", source)
    source["foo"] = "changed"
    assert record.fields["foo"] == "bar"
    with pytest.raises(TypeError):
        record.fields["foo"] = "x"  # type: ignore[index]


def test_record_is_frozen() -> None:
    record = LogRecord("svc", datetime(2025, 9, 23, tzinfo=timezone.utc), LogLevel.INFO, "msg")
    with pytest.raises(AttributeError):
        record.message = "other"  # type: ignore[misc]


def test_to_dict_flattens_fields_and_protects_reserved_keys() -> None:
    record = LogRecord(
        "svc",
        datetime(2025, 9, 23, tzinfo=timezone.utc),
        LogLevel.ERROR,
        "boom",
        {"service": "spoofed", "order": 7},
    )
    assert record.to_dict() == {
        "service": "svc",
        "level": "error",
        "time": "2025-09-23T00:00:00+00:00",
        "message": "boom",
        "order": 7,
    }


def test_sorted_fields_orders_lexicographically() -> None:
    record = LogRecord("svc", datetime(2025, 9, 23, tzinfo=timezone.utc), LogLevel.INFO, "msg", {"zeta": 1, "alpha": 2, "mid": 3})
    assert [name for name, _ in record.sorted_fields()] == ["alpha", "mid", "zeta"]
    assert list(record.fields) == ["zeta", "alpha", "mid"]


@pytest.mark.parametrize("name, expected", [("json", OutputEncoding.JSON), (" TEXT ", OutputEncoding.TEXT)])
def test_output_encoding_from_name(name: str, expected: OutputEncoding) -> None:
    assert OutputEncoding.from_name(name) is expected


def test_output_encoding_rejects_unknown() -> None:
    with pytest.raises(ValueError, match="Unsupported output encoding"):
        OutputEncoding.from_name("yaml")


def test_sorted_fields_skip_reserved_keys() -> None:
    record = LogRecord(
        "svc",
        datetime(2025, 9, 23, tzinfo=timezone.utc),
        LogLevel.INFO,
        "msg",
        {"level": "critical", "message": "fake", "order": 7},
    )
    assert record.sorted_fields() == [("order", 7)]
