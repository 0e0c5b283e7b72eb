from __future__ import annotations

import math
from datetime import UTC, datetime

from pyweelo.normalize import normalize_timestamp_seconds, safe_float, safe_int, to_datetime


def test_safe_float_rejects_unreadable_values() -> None:
    assert safe_float("12.5") == 12.5
    assert safe_float(3) == 3.0
    assert safe_float(None) is None
    assert safe_float("") is None
    assert safe_float("abc") is None
    assert safe_float(True) is None
    assert safe_float(math.nan) is None
    assert safe_float(math.inf) is None


def test_safe_int_truncates() -> None:
    assert safe_int("7.9") == 7
    assert safe_int(None) is None


def test_normalize_timestamp_milliseconds_to_seconds() -> None:
    assert normalize_timestamp_seconds(1_770_928_447_000) == 1_770_928_447
    assert normalize_timestamp_seconds(1_770_928_447) == 1_770_928_447
    assert normalize_timestamp_seconds(0) is None
    assert normalize_timestamp_seconds(-5) is None


def test_to_datetime_accepts_epoch_and_iso() -> None:
    expected = datetime.fromtimestamp(1_770_928_447, tz=UTC)
    assert to_datetime(1_770_928_447) == expected
    assert to_datetime("1770928447000") == expected
    assert to_datetime("2026-01-15T10:30:00Z") == datetime(2026, 1, 15, 10, 30, tzinfo=UTC)


def test_to_datetime_assumes_utc_for_naive_values() -> None:
    assert to_datetime(datetime(2026, 1, 15, 10, 30)) == datetime(2026, 1, 15, 10, 30, tzinfo=UTC)
    assert to_datetime("2026-01-15T10:30:00") == datetime(2026, 1, 15, 10, 30, tzinfo=UTC)


def test_to_datetime_unreadable_is_none() -> None:
    assert to_datetime("not a date") is None
    assert to_datetime("") is None
    assert to_datetime(None) is None
