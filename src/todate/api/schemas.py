"""
Request/response bodies for the timeline API.

The engine's own contracts (`DateValue`, `SchoolCalendarConfig`, `SpanState`,
`SpanDelta`) are embedded directly; these wrappers only add the per-request
parameters around them.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from todate.core.contracts.date_value import DateValue
from todate.core.contracts.school import SchoolCalendarConfig
from todate.core.contracts.timeline import SpanDelta, SpanState, YearSpan


class ResolveRequest(BaseModel):
    value: DateValue
    school: SchoolCalendarConfig | None = None
    locale: str | None = None
    include_time: bool = False


class ResolveResponse(BaseModel):
    iso: str
    label: str
    fractional_year: float


class LaneItem(BaseModel):
    """A ranged (or point) item in fractional years."""

    id: str
    start: float
    end: float | None = None


class LanesRequest(BaseModel):
    items: list[LaneItem]


class LanesResponse(BaseModel):
    lanes: dict[str, int]
    lane_count: int


class TicksRequest(BaseModel):
    start_year: float
    end_year: float
    pixel_height: float = Field(gt=0)
    min_label_px: float | None = Field(default=None, gt=0)


class TicksResponse(BaseModel):
    ticks: list[int]


class SpanRequest(BaseModel):
    """One pan/zoom step against a caller-held accumulator.

    Either ``state`` (continue an existing view) or ``span`` (seed a new one)
    must be given. The gesture is one of:

    - ``delta``: raw additive change to both ends;
    - ``pan``: shift by ``amount`` years;
    - ``wheel``: zoom by the sign of ``amount``;
    - ``pinch``: zoom to ``width / amount`` about ``midpoint``.
    """

    state: SpanState | None = None
    span: YearSpan | None = None
    gesture: Literal["delta", "pan", "wheel", "pinch"] = "delta"
    delta: SpanDelta = Field(default_factory=SpanDelta)
    amount: float = 0.0
    midpoint: float | None = None
    max_span: float | None = Field(default=None, ge=1)


__all__ = [
    "LaneItem",
    "LanesRequest",
    "LanesResponse",
    "ResolveRequest",
    "ResolveResponse",
    "SpanRequest",
    "TicksRequest",
    "TicksResponse",
]
