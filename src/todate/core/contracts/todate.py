"""Todate and Tag, the entities a caller keeps in memory and hands to the engine.

A todate is a titled moment (or period) with optional comment and tags. Its
``date`` field is the canonical ISO instant used for sorting; ``dateDisplay``
and ``endDateDisplay`` keep the DateValues the user actually entered, so a
vague "Year 2, Q3" stays vague when shown back.

The JSON shape matches the export files (``_id``, camelCase keys).
"""

from __future__ import annotations

import uuid

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from todate.core.calendar.resolve import resolve_iso

from .date_value import DateValue
from .school import SchoolCalendarConfig


class Tag(BaseModel):
    """A coloured label todates can be filtered by."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    id: str = Field(alias="_id")
    name: str
    color: str = Field(default="#9ca3af", description="CSS hex colour")


class Todate(BaseModel):
    """A single dated entry on the timeline."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str = Field(alias="_id")
    title: str
    date: str = Field(description="Canonical ISO instant used for sorting")
    date_display: DateValue | None = Field(default=None)
    end_date_display: DateValue | None = Field(default=None)
    comment: str | None = Field(default=None)
    tags: list[Tag] = Field(default_factory=list)

    @property
    def is_ranged(self) -> bool:
        """Return True when the todate spans a period and needs a lane."""
        return self.end_date_display is not None

    def tag_ids(self) -> set[str]:
        """Return the ids of attached tags."""
        return {tag.id for tag in self.tags}


def build_todate(
    title: str,
    start: DateValue,
    end: DateValue | None = None,
    *,
    tags: list[Tag] | None = None,
    comment: str | None = None,
    school_config: SchoolCalendarConfig | None = None,
    todate_id: str | None = None,
) -> Todate:
    """Create a :class:`Todate`, deriving its sort key from ``start``."""
    return Todate(
        id=todate_id or str(uuid.uuid4()),
        title=title,
        date=resolve_iso(start, school_config),
        date_display=start,
        end_date_display=end,
        comment=comment or None,
        tags=list(tags or []),
    )


__all__ = ["Tag", "Todate", "build_todate"]
