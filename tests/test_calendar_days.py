"""Tests for calendar day and time-of-day normalization."""
from datetime import date, datetime

import pytest

from venue_booking.core.exceptions import InvalidDateFormat, InvalidTimeRange
from venue_booking.services.calendar_days import (
    format_local_date,
    format_minutes,
    iter_days,
    month_bounds,
    month_days,
    parse_local_date,
    parse_time_of_day,
    weekday_index,
)


@pytest.mark.parametrize(
    "value",
    [
        "2025-06-10",
        # DST transitions in America and Europe
        "2025-03-09",
        "2025-03-30",
        "2025-11-02",
        "2025-10-26",
        # Year and month boundaries
        "2024-12-31",
        "2025-01-01",
        "2024-02-29",
        "2025-02-28",
    ],
)
def test_parse_format_keeps_the_same_day(value):
    """A day survives parsing and formatting unchanged."""
    assert format_local_date(parse_local_date(value)) == value


def test_parse_ignores_time_part():
    assert parse_local_date("2025-06-10T23:30:00Z") == date(2025, 6, 10)
    assert parse_local_date("2025-06-10 00:00:00+14:00") == date(2025, 6, 10)
    assert parse_local_date("2025-06-10T10:00") == date(2025, 6, 10)
    assert parse_local_date("2025-06-10T10:00:00.123-0500") == date(2025, 6, 10)


def test_parse_accepts_date_and_datetime():
    assert parse_local_date(date(2025, 1, 1)) == date(2025, 1, 1)
    assert parse_local_date(datetime(2025, 1, 1, 23, 59)) == date(2025, 1, 1)


@pytest.mark.parametrize(
    "value",
    [
        "",
        "abc",
        "2025-6-10",
        "10/06/2025",
        "2025-02-29",
        "2025-13-01",
        "2025-04-31",
        "2025-06-10Tgarbage",
        "2025-06-10 not a time",
        "2025-06-10T10",
        None,
        20250610,
    ],
)
def test_parse_rejects_invalid_dates(value):
    with pytest.raises(InvalidDateFormat):
        parse_local_date(value)


def test_weekday_index_is_sunday_first():
    assert weekday_index(date(2025, 6, 8)) == 0  # Sunday
    assert weekday_index(date(2025, 6, 9)) == 1  # Monday
    assert weekday_index(date(2025, 6, 14)) == 6  # Saturday


def test_iter_days_is_inclusive_across_year_end():
    days = list(iter_days(date(2024, 12, 30), date(2025, 1, 2)))
    assert [format_local_date(d) for d in days] == [
        "2024-12-30",
        "2024-12-31",
        "2025-01-01",
        "2025-01-02",
    ]


def test_iter_days_empty_when_end_before_start():
    assert list(iter_days(date(2025, 1, 2), date(2025, 1, 1))) == []


@pytest.mark.parametrize(
    "year,month,count",
    [(2025, 1, 31), (2024, 2, 29), (2025, 2, 28), (2025, 4, 30), (2025, 12, 31)],
)
def test_month_days_cover_the_whole_month(year, month, count):
    days = month_days(year, month)
    assert len(days) == count
    assert days[0] == date(year, month, 1)
    assert days[-1].month == month


def test_month_bounds_rejects_invalid_month():
    with pytest.raises(InvalidDateFormat):
        month_bounds(2025, 13)
    with pytest.raises(InvalidDateFormat):
        month_bounds(2025, 0)


@pytest.mark.parametrize(
    "value,minutes",
    [("00:00", 0), ("08:00", 480), ("8:30", 510), ("19:45", 1185), ("24:00", 1440)],
)
def test_parse_time_of_day(value, minutes):
    assert parse_time_of_day(value) == minutes


@pytest.mark.parametrize("value", ["", "8", "08:60", "24:01", "25:00", "08-00", None])
def test_parse_time_of_day_rejects_invalid(value):
    with pytest.raises(InvalidTimeRange):
        parse_time_of_day(value)


def test_end_of_day_only_allowed_as_end():
    with pytest.raises(InvalidTimeRange):
        parse_time_of_day("24:00", allow_end_of_day=False)


def test_format_minutes():
    assert format_minutes(0) == "00:00"
    assert format_minutes(570) == "09:30"
    assert format_minutes(1440) == "24:00"
