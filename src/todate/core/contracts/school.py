"""SchoolCalendarConfig: how a personal school progression maps onto the calendar.

A school date ("Year 3, Q2") only becomes a calendar date once we know when
Year 1 started and which years were repeated, skipped, or followed by a gap
year. This model captures that configuration.

The persisted shape follows the export format: ``referenceYear``,
``month``/``day`` (or ``startMonth``/``startDay``), ``periodType`` and the three
year lists. Lists are stored as frozensets; order and duplicates carry no
meaning.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_serializer
from pydantic.alias_generators import to_camel

from .date_value import PeriodType


class SchoolCalendarConfig(BaseModel):
    """Calendar anchor plus the irregular years of one person's schooling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    reference_year: int = Field(description="Calendar year in which school Year 1 begins")
    start_month: int = Field(
        default=9,
        validation_alias=AliasChoices("startMonth", "month", "start_month"),
        serialization_alias="startMonth",
    )
    start_day: int = Field(
        default=1,
        validation_alias=AliasChoices("startDay", "day", "start_day"),
        serialization_alias="startDay",
    )
    period_type: PeriodType = Field(default="quarter")
    repeated_grades: frozenset[int] = Field(default_factory=frozenset)
    gap_years: frozenset[int] = Field(default_factory=frozenset)
    skipped_grades: frozenset[int] = Field(default_factory=frozenset)

    @field_serializer("repeated_grades", "gap_years", "skipped_grades")
    def _sorted_years(self, years: frozenset[int]) -> list[int]:
        return sorted(years)

    def overlapping_years(self) -> set[int]:
        """Return school years listed in more than one of the three sets."""
        return (
            (self.repeated_grades & self.skipped_grades)
            | (self.repeated_grades & self.gap_years)
            | (self.skipped_grades & self.gap_years)
        )


DEFAULT_SCHOOL_CONFIG = SchoolCalendarConfig(reference_year=2000, start_month=9, start_day=1)


__all__ = ["DEFAULT_SCHOOL_CONFIG", "SchoolCalendarConfig"]
