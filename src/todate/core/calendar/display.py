"""
Human-readable labels for DateValues.

Formatting goes through pendulum so month names follow the requested locale
(``"Sep 2000"``, ``"sept. 2000"``, ...). The token patterns are fixed; only the
names are localized.

School dates have two renderings:

- with a :class:`SchoolCalendarConfig`, the period becomes its calendar month
  range (``"Sep 2000–Nov 2000"``), collapsed to a single ``"Sep 2000"`` when
  both ends fall in the same month;
- without one, the label stays symbolic (``"Year 3, Q2"``).

Any free-text note is appended in parentheses.
"""

from __future__ import annotations

from typing import assert_never

import pendulum

from todate.core.contracts.date_value import (
    DateValue,
    DatetimeDate,
    DayDate,
    MonthDate,
    SchoolDate,
    period_label,
)
from todate.core.contracts.school import SchoolCalendarConfig
from todate.core.settings import current_settings

from .resolve import resolve_instant, school_period_range

MONTH_YEAR = "MMM YYYY"
DAY_DATE = "MMM D, YYYY"
DATE_TIME = "MMM D, YYYY h:mm A"
RANGE_DASH = "–"


def _with_note(label: str, note: str | None) -> str:
    if note and note.strip():
        return f"{label} ({note.strip()})"
    return label


def _school_label(value: SchoolDate, config: SchoolCalendarConfig | None, locale: str) -> str:
    if config is None:
        label = f"Year {value.school_year}, {period_label(value.period_type, value.period)}"
        return _with_note(label, value.note)

    start, end = school_period_range(value, config)
    start_str = start.format(MONTH_YEAR, locale=locale)
    end_str = end.format(MONTH_YEAR, locale=locale)
    label = start_str if start_str == end_str else f"{start_str}{RANGE_DASH}{end_str}"
    return _with_note(label, value.note)


def format_display(
    value: DateValue,
    *,
    locale: str | None = None,
    include_time: bool = False,
    school_config: SchoolCalendarConfig | None = None,
    tz: str | None = None,
) -> str:
    """Return the display label for ``value``.

    Parameters
    ----------
    locale:
        Locale for month names; defaults to ``TODATE_LOCALE``.
    include_time:
        Append the time of day to ``day`` values.
    school_config:
        When given, school dates render as calendar month ranges.
    tz:
        Timezone for ``datetime`` values; defaults to ``TODATE_TIMEZONE``.
    """
    cfg = current_settings()
    loc = locale or cfg.locale
    zone = tz or cfg.timezone

    match value:
        case SchoolDate():
            return _school_label(value, school_config, loc)
        case MonthDate():
            return pendulum.date(value.year, value.month, 1).format(MONTH_YEAR, locale=loc)
        case DayDate():
            if include_time:
                return resolve_instant(value, tz=zone).format(DATE_TIME, locale=loc)
            return pendulum.date(value.year, value.month, value.day).format(DAY_DATE, locale=loc)
        case DatetimeDate():
            instant = resolve_instant(value).in_timezone(zone)
            return instant.format(DATE_TIME, locale=loc)
        case _:
            assert_never(value)


def format_range(
    start: DateValue,
    end: DateValue | None = None,
    *,
    locale: str | None = None,
    include_time: bool = False,
    school_config: SchoolCalendarConfig | None = None,
    tz: str | None = None,
) -> str:
    """Return ``"<start> – <end>"`` for ranged todates, or just the start label."""
    labels = [
        format_display(
            v, locale=locale, include_time=include_time, school_config=school_config, tz=tz
        )
        for v in (start, end)
        if v is not None
    ]
    return f" {RANGE_DASH} ".join(labels)


__all__ = ["format_display", "format_range"]
