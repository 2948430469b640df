"""DateValue — flexible-precision dates, from "Year 3, Q2" to an exact instant.

This module defines the tagged union every todate carries for its start (and
optional end):

- `SchoolDate`   : school year + period (quarter/trimester/semester).
- `MonthDate`    : calendar year + month.
- `DayDate`      : calendar year + month + day.
- `DatetimeDate` : a fully-specified ISO-8601 instant string.

The union is discriminated by ``kind`` and validated with a Pydantic v2
``TypeAdapter``. The persisted JSON shape uses camelCase keys
(``schoolYear``, ``periodType``, ``repeatedInstance``, ``schoolYearNote``);
Python code uses snake_case attributes. Both spellings are accepted on input.

Legacy payloads
---------------
Early exports stored school dates as ``{"kind": "school", "schoolYear": 2,
"quarter": 3}``. Such payloads are normalised to ``periodType="quarter"``,
``period=quarter`` during validation, so downstream code only ever sees the
current shape.

Ranges
------
The models deliberately carry no range constraints. Callers clamp numeric
fields (see :mod:`todate.core.calendar.clamp`) before handing values to the
resolution engine, which is total over whatever it receives.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    model_validator,
)
from pydantic.alias_generators import to_camel

from todate.core.result import Result, err, ok

PeriodType = Literal["quarter", "trimester", "semester"]

_PERIODS_PER_YEAR: dict[str, int] = {"quarter": 4, "trimester": 3, "semester": 2}
_MONTHS_PER_PERIOD: dict[str, int] = {"quarter": 3, "trimester": 4, "semester": 6}
_PERIOD_PREFIX: dict[str, str] = {"quarter": "Q", "trimester": "Tri ", "semester": "Sem "}


def periods_for(period_type: PeriodType) -> int:
    """Return how many periods a school year holds for ``period_type``."""
    return _PERIODS_PER_YEAR[period_type]


def months_per_period(period_type: PeriodType) -> int:
    """Return the calendar length of one period, in months."""
    return _MONTHS_PER_PERIOD[period_type]


def period_label(period_type: PeriodType, n: int) -> str:
    """Return the short label for period ``n`` (``Q2``, ``Tri 1``, ``Sem 2``)."""
    return f"{_PERIOD_PREFIX[period_type]}{n}"


class _DateModel(BaseModel):
    """Shared config: camelCase JSON, snake_case attributes, immutable."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class SchoolDate(_DateModel):
    """A period inside a numbered school year."""

    kind: Literal["school"] = "school"
    school_year: int = Field(description="1-based school year (grade) number")
    period_type: PeriodType = Field(default="quarter")
    period: int = Field(default=1, description="1-based period within the school year")
    repeated_instance: int | None = Field(
        default=None,
        description="Which sitting of a repeated year this refers to (1 = first).",
    )
    note: str | None = Field(
        default=None,
        validation_alias=AliasChoices("schoolYearNote", "note"),
        serialization_alias="schoolYearNote",
        description="Free text, e.g. 'repeated' or 'gap after Year 1'.",
    )

    @model_validator(mode="before")
    @classmethod
    def _upgrade_legacy_quarter(cls, data: Any) -> Any:
        """Map the legacy ``quarter`` field onto ``periodType``/``period``."""
        if not isinstance(data, Mapping) or "quarter" not in data:
            return data
        payload = dict(data)
        quarter = payload.pop("quarter")
        has_period = any(k in payload for k in ("period", "periodType", "period_type"))
        if not has_period and quarter is not None:
            payload["periodType"] = "quarter"
            payload["period"] = quarter
        return payload


class MonthDate(_DateModel):
    """A calendar month."""

    kind: Literal["month"] = "month"
    year: int
    month: int = Field(description="1-12")


class DayDate(_DateModel):
    """A calendar day."""

    kind: Literal["day"] = "day"
    year: int
    month: int
    day: int


class DatetimeDate(_DateModel):
    """An exact instant, kept as the literal ISO string it was recorded with."""

    kind: Literal["datetime"] = "datetime"
    iso: str


DateValue = Annotated[
    SchoolDate | MonthDate | DayDate | DatetimeDate,
    Field(discriminator="kind"),
]

_DATE_VALUE_ADAPTER: TypeAdapter[DateValue] = TypeAdapter(DateValue)


def parse_date_value(payload: Mapping[str, Any]) -> Result[DateValue, str]:
    """Validate a persisted JSON mapping into a :data:`DateValue`.

    Returns
    -------
    Result[DateValue, str]
        ``Ok(value)`` on success, ``Err(message)`` describing the first
        validation problem otherwise.
    """
    try:
        return ok(_DATE_VALUE_ADAPTER.validate_python(payload))
    except ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {"msg": str(exc), "loc": ()}
        where = ".".join(str(p) for p in first.get("loc", ())) or "<root>"
        return err(f"invalid date value at {where}: {first.get('msg')}")


def dump_date_value(value: DateValue) -> dict[str, Any]:
    """Return the camelCase JSON shape used for persistence."""
    return value.model_dump(by_alias=True, exclude_none=True)


__all__ = [
    "DateValue",
    "DatetimeDate",
    "DayDate",
    "MonthDate",
    "PeriodType",
    "SchoolDate",
    "dump_date_value",
    "months_per_period",
    "parse_date_value",
    "period_label",
    "periods_for",
]
