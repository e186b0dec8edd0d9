"""Unit tests for blitztime/clock/instants.py"""

from datetime import datetime, timedelta, timezone

from blitztime.clock.instants import NEVER, dump_duration, load_datetime, load_duration, utc_now


def test_load_datetime_is_utc() -> None:
    instant = load_datetime(0)
    assert instant == datetime(1970, 1, 1, tzinfo=timezone.utc)
    assert instant.tzinfo is timezone.utc


def test_load_fractional_seconds() -> None:
    assert load_datetime(1.5) == datetime(1970, 1, 1, 0, 0, 1, 500_000, tzinfo=timezone.utc)
    assert load_duration(2.25) == timedelta(seconds=2, milliseconds=250)


def test_dump_duration() -> None:
    assert dump_duration(timedelta(minutes=1, milliseconds=500)) == 60.5


def test_never_is_after_any_real_instant() -> None:
    assert NEVER > utc_now()
    assert NEVER > load_datetime(32_503_680_000)  # year 3000
