"""Input clamping for DateValues built from loose form input.

The resolution engine assumes in-range numbers. These helpers are what an
input layer calls before building a DateValue: they pull every field back into
its valid range instead of rejecting it.
"""

from __future__ import annotations

import pendulum

from todate.core.contracts.date_value import (
    DatetimeDate,
    DayDate,
    MonthDate,
    PeriodType,
    SchoolDate,
    periods_for,
)
from todate.core.settings import current_settings

MIN_YEAR = 1
MAX_YEAR = 9999


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in ``month`` of ``year``."""
    return pendulum.date(_clamp(year, MIN_YEAR, MAX_YEAR), _clamp(month, 1, 12), 1).days_in_month


def clamp_school(
    school_year: int,
    period: int,
    *,
    period_type: PeriodType = "quarter",
    repeated_instance: int | None = None,
    note: str | None = None,
) -> SchoolDate:
    """Build a :class:`SchoolDate` with every field pulled into range.

    ``repeated_instance`` is only kept when it refers to a later sitting (> 1);
    the first sitting is the default and is not stored.
    """
    return SchoolDate(
        school_year=max(1, school_year),
        period_type=period_type,
        period=_clamp(period, 1, periods_for(period_type)),
        repeated_instance=repeated_instance if repeated_instance and repeated_instance > 1 else None,
        note=note.strip() if note and note.strip() else None,
    )


def clamp_calendar(
    year: int,
    month: int = 0,
    day: int = 0,
    time: str | None = None,
    *,
    tz: str | None = None,
) -> MonthDate | DayDate | DatetimeDate:
    """Build the most precise calendar DateValue the input supports.

    - ``day`` and ``time`` given → ``datetime`` (``time`` as ``HH:MM``).
    - ``day`` given → ``day``.
    - otherwise → ``month`` (month 0 means "not given" and falls back to January).

    Year is clamped to 1..9999, month to 1..12 and day to the real length of
    that month.
    """
    year = _clamp(year, MIN_YEAR, MAX_YEAR)
    m = _clamp(month, 1, 12) if month > 0 else 1
    if day <= 0:
        return MonthDate(year=year, month=m)

    d = _clamp(day, 1, days_in_month(year, m))
    if time and time.strip():
        hour, _, minute = time.strip().partition(":")
        instant = pendulum.datetime(
            year,
            m,
            d,
            _clamp(int(hour) if hour.isdigit() else 0, 0, 23),
            _clamp(int(minute) if minute.isdigit() else 0, 0, 59),
            tz=tz or current_settings().timezone,
        )
        return DatetimeDate(iso=instant.in_timezone("UTC").isoformat())
    return DayDate(year=year, month=m, day=d)


def iso_to_date_value(iso: str) -> DatetimeDate:
    """Wrap a bare ISO string (legacy todates carry nothing else) as a DateValue."""
    return DatetimeDate(iso=iso)


def iso_to_datetime_local(iso: str, tz: str | None = None) -> str:
    """Return ``iso`` as ``YYYY-MM-DDTHH:mm`` wall-clock time in ``tz``."""
    instant = pendulum.parse(iso).in_timezone(tz or current_settings().timezone)  # type: ignore[union-attr]
    return instant.format("YYYY-MM-DD[T]HH:mm")


__all__ = [
    "clamp_calendar",
    "clamp_school",
    "days_in_month",
    "iso_to_date_value",
    "iso_to_datetime_local",
]
