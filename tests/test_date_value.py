"""Tests for the DateValue union: parsing, legacy upgrade and JSON shape."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from todate.core.contracts.date_value import (
    DatetimeDate,
    DayDate,
    MonthDate,
    SchoolDate,
    dump_date_value,
    months_per_period,
    parse_date_value,
    period_label,
    periods_for,
)
from todate.core.contracts.school import SchoolCalendarConfig


def test_parse_each_kind() -> None:
    """The `kind` discriminator selects the matching model."""
    school = parse_date_value(
        {"kind": "school", "schoolYear": 2, "periodType": "trimester", "period": 3}
    ).unwrap()
    assert isinstance(school, SchoolDate)
    assert (school.school_year, school.period_type, school.period) == (2, "trimester", 3)

    assert parse_date_value({"kind": "month", "year": 2001, "month": 3}).unwrap() == MonthDate(
        year=2001, month=3
    )
    assert parse_date_value({"kind": "day", "year": 2001, "month": 3, "day": 4}).unwrap() == (
        DayDate(year=2001, month=3, day=4)
    )
    moment = parse_date_value({"kind": "datetime", "iso": "2021-05-06T07:08:00Z"}).unwrap()
    assert isinstance(moment, DatetimeDate) and moment.iso == "2021-05-06T07:08:00Z"


def test_legacy_quarter_is_upgraded() -> None:
    """`{"quarter": n}` becomes periodType=quarter, period=n."""
    value = parse_date_value({"kind": "school", "schoolYear": 2, "quarter": 3}).unwrap()
    assert isinstance(value, SchoolDate)
    assert value.period_type == "quarter"
    assert value.period == 3


def test_legacy_quarter_does_not_override_period() -> None:
    """When a current-shape period is present, the stale quarter is dropped."""
    value = parse_date_value(
        {"kind": "school", "schoolYear": 1, "periodType": "semester", "period": 2, "quarter": 4}
    ).unwrap()
    assert isinstance(value, SchoolDate)
    assert (value.period_type, value.period) == ("semester", 2)


def test_invalid_payload_returns_err() -> None:
    """Validation problems surface as an Err message, never an exception."""
    unknown = parse_date_value({"kind": "decade", "year": 1990})
    assert unknown.is_err()
    assert unknown.unwrap_err().startswith("invalid date value")

    missing = parse_date_value({"kind": "month", "year": 2001})
    assert missing.is_err()
    assert "month" in missing.unwrap_err()


def test_dump_uses_camel_case_and_note_alias() -> None:
    """Persisted JSON uses camelCase keys and `schoolYearNote`."""
    value = SchoolDate(school_year=3, period=2, repeated_instance=2, note="repeated")
    assert dump_date_value(value) == {
        "kind": "school",
        "schoolYear": 3,
        "periodType": "quarter",
        "period": 2,
        "repeatedInstance": 2,
        "schoolYearNote": "repeated",
    }
    assert dump_date_value(MonthDate(year=2001, month=3)) == {
        "kind": "month",
        "year": 2001,
        "month": 3,
    }


def test_note_accepts_both_spellings() -> None:
    """`schoolYearNote` (persisted) and `note` (short) both populate the note."""
    a = parse_date_value({"kind": "school", "schoolYear": 1, "schoolYearNote": "gap"}).unwrap()
    b = parse_date_value({"kind": "school", "schoolYear": 1, "note": "gap"}).unwrap()
    assert a == b
    assert isinstance(a, SchoolDate) and a.note == "gap"


def test_date_values_are_frozen() -> None:
    """DateValues are immutable once built."""
    value = MonthDate(year=2001, month=3)
    with pytest.raises(ValidationError):
        value.year = 2002  # type: ignore[misc]


def test_period_helpers() -> None:
    """Period counts, lengths and labels per period type."""
    assert [periods_for(p) for p in ("quarter", "trimester", "semester")] == [4, 3, 2]
    assert [months_per_period(p) for p in ("quarter", "trimester", "semester")] == [3, 4, 6]
    assert period_label("quarter", 2) == "Q2"
    assert period_label("trimester", 1) == "Tri 1"
    assert period_label("semester", 2) == "Sem 2"


def test_school_config_aliases_and_serialization() -> None:
    """Config accepts the export's `month`/`day` keys and dumps sorted year lists."""
    cfg = SchoolCalendarConfig.model_validate(
        {"referenceYear": 1998, "month": 8, "day": 15, "repeatedGrades": [4, 2, 2]}
    )
    assert (cfg.reference_year, cfg.start_month, cfg.start_day) == (1998, 8, 15)
    assert cfg.repeated_grades == frozenset({2, 4})

    dumped = cfg.model_dump(by_alias=True)
    assert dumped["startMonth"] == 8
    assert dumped["startDay"] == 15
    assert dumped["repeatedGrades"] == [2, 4]
    assert dumped["skippedGrades"] == []


def test_overlapping_years() -> None:
    """A year listed in two sets is reported."""
    cfg = SchoolCalendarConfig(
        reference_year=2000,
        repeated_grades=frozenset({1, 3}),
        skipped_grades=frozenset({3}),
        gap_years=frozenset({5}),
    )
    assert cfg.overlapping_years() == {3}
