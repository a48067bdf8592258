"""Tests for UTC timestamp helpers and their storage format."""

from datetime import UTC, datetime, timedelta, timezone

from eisenboard.adapters.sqlite.utils import format_timestamp, parse_datetime
from eisenboard.utils.timestamps import next_timestamp, now_utc


def test_now_utc_is_aware():
    assert now_utc().tzinfo is UTC


def test_next_timestamp_moves_past_future_previous():
    future = now_utc() + timedelta(hours=1)
    assert next_timestamp(future) == future + timedelta(microseconds=1)


def test_next_timestamp_without_previous():
    before = now_utc()
    assert next_timestamp() >= before


def test_format_timestamp_fixed_precision_utc():
    local = datetime(2026, 5, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(local) == "2026-05-01T10:00:00.000000+00:00"


def test_format_timestamp_sorts_lexically():
    a = datetime(2026, 5, 1, 12, 0, 0, tzinfo=UTC)
    b = a + timedelta(microseconds=1)
    assert format_timestamp(a) < format_timestamp(b)


def test_parse_datetime_variants():
    assert parse_datetime(None) is None
    assert parse_datetime("2026-05-01T10:00:00Z") == datetime(2026, 5, 1, 10, tzinfo=UTC)
    assert parse_datetime("2026-05-01T10:00:00").tzinfo is UTC
