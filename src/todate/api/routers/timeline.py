"""
API routes for the timeline engine.

Endpoints
---------
- `POST /resolve`: DateValue → sortable instant and display label.
- `POST /lanes`: ranged items → lane per item.
- `POST /ticks`: year window + pixel height → labelled years.
- `POST /span`: apply one pan/zoom gesture to a span accumulator.

Every route is a pure function of its body; the server keeps no state.
"""

from __future__ import annotations

from fastapi import APIRouter

from todate.api.schemas import (
    LanesRequest,
    LanesResponse,
    ResolveRequest,
    ResolveResponse,
    SpanRequest,
    TicksRequest,
    TicksResponse,
)
from todate.core.calendar.display import format_display
from todate.core.calendar.resolve import (
    check_school_config,
    fractional_year,
    resolve_instant,
    resolve_iso,
)
from todate.core.contracts.timeline import SpanDelta, SpanState, TimelineItem
from todate.core.layout.axis import compute_tick_years
from todate.core.layout.lanes import assign_lanes, lane_count
from todate.core.layout.span import (
    apply_span_delta,
    initial_span_state,
    pan_delta,
    pinch_zoom_delta,
    wheel_zoom_delta,
)

router = APIRouter(tags=["Timeline"])


@router.post("/resolve", response_model=ResolveResponse, summary="Resolve a DateValue")
async def resolve_date(request: ResolveRequest) -> ResolveResponse:
    """Return the canonical instant and label for one DateValue."""
    check_school_config(request.school)
    instant = resolve_instant(request.value, request.school)
    return ResolveResponse(
        iso=resolve_iso(request.value, request.school),
        label=format_display(
            request.value,
            locale=request.locale,
            include_time=request.include_time,
            school_config=request.school,
        ),
        fractional_year=fractional_year(instant),
    )


@router.post("/lanes", response_model=LanesResponse, summary="Assign lanes to ranged items")
async def lanes(request: LanesRequest) -> LanesResponse:
    assignment = assign_lanes(
        TimelineItem(id=item.id, start=item.start, end=item.end) for item in request.items
    )
    return LanesResponse(
        lanes={str(key): lane for key, lane in assignment.items()},
        lane_count=lane_count(assignment),
    )


@router.post("/ticks", response_model=TicksResponse, summary="Compute year-axis ticks")
async def ticks(request: TicksRequest) -> TicksResponse:
    return TicksResponse(
        ticks=compute_tick_years(
            request.start_year,
            request.end_year,
            request.pixel_height,
            request.min_label_px,
        )
    )


@router.post("/span", response_model=SpanState, summary="Apply a pan/zoom gesture")
async def span(request: SpanRequest) -> SpanState:
    """
    Apply one gesture and return the updated accumulator.

    The client keeps the returned state and sends it back with the next
    gesture, so sub-year zoom steps keep accumulating.
    """
    if request.state is not None:
        state = request.state
    elif request.span is not None:
        state = initial_span_state(request.span, request.max_span)
    else:
        raise ValueError("either 'state' or 'span' is required")

    delta: SpanDelta
    match request.gesture:
        case "pan":
            delta = pan_delta(request.amount)
        case "wheel":
            delta = wheel_zoom_delta(state, request.amount)
        case "pinch":
            delta = pinch_zoom_delta(state, request.amount, request.midpoint)
        case _:
            delta = request.delta
    return apply_span_delta(state, delta, request.max_span)


__all__ = ["router"]
