"""
Calendar resolution: turn any DateValue into a sortable instant.

Every todate needs one canonical instant for sorting and storage, however
vague its recorded date is. This module provides that mapping:

- ``school``   → first day of the period in the calendar year the school year
  actually fell in, at noon.
- ``month``    → the 15th of the month (the midpoint), at noon.
- ``day``      → the day itself, at noon.
- ``datetime`` → the recorded instant, unchanged.

Noon is used for every coarse date so that converting between timezones can
never move the instant onto a neighbouring calendar day.

School-year offset
------------------
A school year does not map to ``reference_year + N - 1`` once real life gets
involved. :func:`school_year_offset` walks the years before ``N`` and adjusts
for each one that was repeated (+1), skipped (-1), or followed by a gap year
(+1). The checks are independent and additive, so a year listed in more than
one set contributes every matching adjustment.

Month arithmetic
----------------
Period starts are computed as "month index from January of the anchor year";
an index past December rolls into the next year, and a start day past the end
of a month rolls into the following month. Range ends advance by whole periods
the same way and step back one day.

The functions here never validate: callers clamp numeric fields first.
Calendar years must lie in 1..9999 (the range pendulum accepts), which is
what :mod:`todate.core.calendar.clamp` enforces for form input.
"""

from __future__ import annotations

from datetime import datetime
from typing import assert_never

import pendulum

from todate.core.contracts.date_value import (
    DateValue,
    DatetimeDate,
    DayDate,
    MonthDate,
    SchoolDate,
    months_per_period,
)
from todate.core.contracts.school import DEFAULT_SCHOOL_CONFIG, SchoolCalendarConfig
from todate.core.settings import current_settings, get_logger

logger = get_logger("todate.calendar")

NOON = 12
MONTH_MIDPOINT_DAY = 15


def _tz_name(tz: str | None) -> str:
    return tz if tz is not None else current_settings().timezone


def _roll_date(year: int, month_index: int, day: int) -> pendulum.Date:
    """Return the date ``day`` days into month ``month_index`` (0 = January of ``year``).

    Both the month index and the day are allowed to overflow; they roll
    forward into the following year/month.
    """
    first = pendulum.date(year, 1, 1).add(months=month_index)
    return first.add(days=day - 1)


def check_school_config(config: SchoolCalendarConfig | None) -> set[int]:
    """Log a WARNING if ``config`` lists a year in more than one adjustment set.

    Called once where a config enters the system (a view build, a CLI or API
    request), not per resolved value. Returns the overlapping years.
    """
    overlap = config.overlapping_years() if config is not None else set()
    if overlap:
        logger.warning(
            "School years listed in more than one of repeated/skipped/gap: %s",
            sorted(overlap),
        )
    return overlap


def school_year_offset(
    school_year: int,
    config: SchoolCalendarConfig,
    repeated_instance: int | None = None,
) -> int:
    """Return how many calendar years after ``reference_year`` school year ``N`` begins.

    Parameters
    ----------
    school_year:
        The 1-based school year ``N``.
    config:
        Supplies the repeated, skipped and gap-year sets.
    repeated_instance:
        For a repeated year, which sitting is meant. The second sitting lands
        one calendar year after the first.
    """
    offset = school_year - 1
    for index in range(1, school_year):
        if index in config.repeated_grades:
            offset += 1
        if index in config.skipped_grades:
            offset -= 1
        if index in config.gap_years:
            offset += 1

    if (
        school_year in config.repeated_grades
        and repeated_instance is not None
        and repeated_instance > 1
    ):
        offset += repeated_instance - 1
    return offset


def school_period_start(value: SchoolDate, config: SchoolCalendarConfig) -> pendulum.Date:
    """Return the calendar date on which the period of ``value`` begins."""
    year = config.reference_year + school_year_offset(
        value.school_year, config, value.repeated_instance
    )
    month_index = (config.start_month - 1) + (value.period - 1) * months_per_period(
        value.period_type
    )
    return _roll_date(year, month_index, config.start_day)


def school_period_range(
    value: SchoolDate, config: SchoolCalendarConfig
) -> tuple[pendulum.Date, pendulum.Date]:
    """Return the first and last calendar day of the period of ``value``.

    The end is the start advanced by one period's worth of months, minus a day
    (Year 1 Q1 from 1 Sep 2000 → 1 Sep 2000 .. 30 Nov 2000).
    """
    start = school_period_start(value, config)
    after = _roll_date(start.year, start.month - 1 + months_per_period(value.period_type), start.day)
    return start, after.subtract(days=1)


def resolve_instant(
    value: DateValue,
    config: SchoolCalendarConfig | None = None,
    *,
    tz: str | None = None,
) -> pendulum.DateTime:
    """Return the canonical sortable instant for ``value``.

    Parameters
    ----------
    value:
        Any of the four date kinds.
    config:
        School calendar used for ``school`` values. When omitted, Year 1 is
        taken to start on 1 September 2000, so vague dates still sort.
    tz:
        Timezone in which coarse dates are pinned to noon. Defaults to the
        ``TODATE_TIMEZONE`` setting.
    """
    zone = _tz_name(tz)
    match value:
        case SchoolDate():
            start = school_period_start(value, config or DEFAULT_SCHOOL_CONFIG)
            return pendulum.datetime(start.year, start.month, start.day, NOON, tz=zone)
        case MonthDate():
            return pendulum.datetime(value.year, value.month, MONTH_MIDPOINT_DAY, NOON, tz=zone)
        case DayDate():
            return pendulum.datetime(value.year, value.month, value.day, NOON, tz=zone)
        case DatetimeDate():
            return pendulum.parse(value.iso)  # type: ignore[return-value]
        case _:
            assert_never(value)


def resolve_iso(
    value: DateValue,
    config: SchoolCalendarConfig | None = None,
    *,
    tz: str | None = None,
) -> str:
    """Return the ISO-8601 string stored as a todate's sort key.

    ``datetime`` values return their literal string untouched.
    """
    if isinstance(value, DatetimeDate):
        return value.iso
    return resolve_instant(value, config, tz=tz).isoformat()


def fractional_year(instant: datetime) -> float:
    """Return ``instant`` as a year number plus the elapsed fraction of that year."""
    start = instant.replace(month=1, day=1, hour=0, minute=0, second=0, microsecond=0)
    end = start.replace(year=start.year + 1)
    return instant.year + (instant - start).total_seconds() / (end - start).total_seconds()


__all__ = [
    "check_school_config",
    "fractional_year",
    "resolve_instant",
    "resolve_iso",
    "school_period_range",
    "school_period_start",
    "school_year_offset",
]
