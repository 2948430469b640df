"""Tests for input clamping helpers."""

from __future__ import annotations

from todate.core.calendar.clamp import (
    clamp_calendar,
    clamp_school,
    days_in_month,
    iso_to_date_value,
    iso_to_datetime_local,
)
from todate.core.calendar.resolve import resolve_instant
from todate.core.contracts.date_value import DatetimeDate, DayDate, MonthDate


def test_clamp_school_pulls_fields_into_range() -> None:
    """School year ≥ 1 and period within the period type's count."""
    value = clamp_school(0, 9)
    assert (value.school_year, value.period) == (1, 4)
    assert clamp_school(2, 9, period_type="trimester").period == 3
    assert clamp_school(2, -1, period_type="semester").period == 1


def test_clamp_school_normalizes_optional_fields() -> None:
    """First sittings and blank notes are not stored."""
    assert clamp_school(2, 1, repeated_instance=1).repeated_instance is None
    assert clamp_school(2, 1, repeated_instance=2).repeated_instance == 2
    assert clamp_school(2, 1, note="   ").note is None
    assert clamp_school(2, 1, note=" gap ").note == "gap"


def test_clamp_calendar_precision() -> None:
    """The most precise kind the input supports is returned."""
    assert clamp_calendar(2021, 13) == MonthDate(year=2021, month=12)
    assert clamp_calendar(2021) == MonthDate(year=2021, month=1)
    assert clamp_calendar(2021, 2, 31) == DayDate(year=2021, month=2, day=28)
    assert clamp_calendar(2020, 2, 31) == DayDate(year=2020, month=2, day=29)


def test_clamp_calendar_keeps_years_resolvable() -> None:
    """Years outside 1..9999 are pulled in so resolution never raises."""
    low = clamp_calendar(0, 5)
    assert low == MonthDate(year=1, month=5)
    high = clamp_calendar(12000, 1, 1)
    assert high == DayDate(year=9999, month=1, day=1)
    assert clamp_calendar(-40, 2, 30) == DayDate(year=1, month=2, day=28)

    assert resolve_instant(low).year == 1
    assert resolve_instant(high).year == 9999


def test_clamp_calendar_with_time() -> None:
    """A time turns the value into an exact instant stored in UTC."""
    value = clamp_calendar(2021, 5, 6, "25:99", tz="UTC")
    assert value == DatetimeDate(iso="2021-05-06T23:59:00+00:00")

    paris = clamp_calendar(2021, 5, 6, "09:30", tz="Europe/Paris")
    assert paris == DatetimeDate(iso="2021-05-06T07:30:00+00:00")


def test_days_in_month() -> None:
    """Month lengths come from pendulum, leap years included."""
    assert days_in_month(2020, 2) == 29
    assert days_in_month(2021, 2) == 28
    assert days_in_month(2021, 4) == 30
    assert days_in_month(2021, 13) == 31


def test_iso_helpers() -> None:
    """Legacy ISO strings wrap as datetime values and render for time inputs."""
    assert iso_to_date_value("2021-05-06T07:08:00Z") == DatetimeDate(iso="2021-05-06T07:08:00Z")
    assert iso_to_datetime_local("2021-05-06T07:08:00+00:00", "UTC") == "2021-05-06T07:08"
    assert iso_to_datetime_local("2021-05-06T07:08:00+00:00", "Europe/Paris") == "2021-05-06T09:08"
