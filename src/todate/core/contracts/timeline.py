"""Layout contracts: items placed on the year axis and the visible span.

- `TimelineItem` : what the lane engine consumes. An item with an ``end`` is a
  ranged item and needs a lane; one without is a point drawn on the axis.
- `LaneAssignment`: item id → lane number (0 is the lane next to the axis).
- `YearSpan`     : the published, integer-rounded visible window.
- `SpanState`    : the caller-owned fractional accumulator behind a span.
- `SpanDelta`    : an additive pan/zoom request against a `SpanState`.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

Point = TypeVar("Point", float, datetime)

LaneAssignment = dict[Hashable, int]


@dataclass(frozen=True)
class TimelineItem(Generic[Point]):
    """An interval (or point) to place on the timeline."""

    id: Hashable
    start: Point
    end: Point | None = None

    @property
    def is_ranged(self) -> bool:
        return self.end is not None


class YearSpan(BaseModel):
    """Visible year window with ``start_year < end_year``.

    The upper bound on the width is enforced by the span controller, which
    knows the ``max_span`` in force for the view.
    """

    model_config = ConfigDict(frozen=True)

    start_year: float
    end_year: float

    @model_validator(mode="after")
    def _check_order(self) -> YearSpan:
        if self.end_year <= self.start_year:
            raise ValueError("end_year must be greater than start_year")
        return self

    @property
    def width(self) -> float:
        return self.end_year - self.start_year


class SpanState(BaseModel):
    """Fractional accumulator owned by one timeline view.

    Pan/zoom mutations are applied to ``start``/``end``; ``published`` is the
    last integer span handed to the renderer. Mutations must never be derived
    from ``published``, or repeated small zooms would be rounded away.
    """

    model_config = ConfigDict(frozen=True)

    start: float
    end: float
    published: YearSpan

    @property
    def width(self) -> float:
        return self.end - self.start

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2


class SpanDelta(BaseModel):
    """Additive change to both ends of a span, in (fractional) years."""

    model_config = ConfigDict(frozen=True)

    d_start: float = Field(default=0.0)
    d_end: float = Field(default=0.0)


__all__ = [
    "LaneAssignment",
    "SpanDelta",
    "SpanState",
    "TimelineItem",
    "YearSpan",
]
