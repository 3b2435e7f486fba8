"""
Tests for calendar-day helpers.
"""

from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from visa_tracker.dates import (
    days_between,
    format_local_date,
    iter_days,
    parse_to_local_day_start,
    to_date_key,
)
from visa_tracker.exceptions import InvalidDateError


@pytest.mark.parametrize(
    "value",
    [
        "2024-03-01",
        "2024-03-01T00:00:00.000Z",
        "2024-03-01T23:30:00-08:00",
        "2024-03-01T00:30:00+14:00",
        " 2024-03-01 ",
        date(2024, 3, 1),
        datetime(2024, 3, 1, 23, 59),
        datetime(2024, 3, 1, 0, 1, tzinfo=timezone(timedelta(hours=-11))),
    ],
)
def test_parse_keeps_calendar_day_without_timezone_shift(value):
    assert parse_to_local_day_start(value) == date(2024, 3, 1)


def test_parse_returns_plain_date_for_datetime():
    parsed = parse_to_local_day_start(datetime(2024, 3, 1, 12, tzinfo=UTC))
    assert type(parsed) is date


@pytest.mark.parametrize("value", ["", "yesterday", "2024-13-01", "2024-02-30", "01/03/2024", 20240301])
def test_parse_rejects_non_dates(value):
    with pytest.raises(InvalidDateError):
        parse_to_local_day_start(value)


def test_invalid_date_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_to_local_day_start("not a date")


def test_to_date_key_and_format():
    assert to_date_key(date(2024, 1, 5)) == "2024-01-05"
    assert format_local_date("2024-03-01T00:00:00Z") == "Mar 1, 2024"


def test_days_between_is_signed():
    assert days_between(date(2024, 1, 1), date(2024, 1, 31)) == 30
    assert days_between(date(2024, 1, 31), date(2024, 1, 1)) == -30
    assert days_between(date(2024, 2, 28), date(2024, 3, 1)) == 2  # leap year


def test_iter_days_is_inclusive():
    days = list(iter_days(date(2024, 2, 27), date(2024, 3, 1)))
    assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_iter_days_single_and_reversed():
    assert list(iter_days(date(2024, 1, 1), date(2024, 1, 1))) == [date(2024, 1, 1)]
    assert list(iter_days(date(2024, 1, 2), date(2024, 1, 1))) == []
