"""
Timeline view pipeline: from a caller's todates to everything a renderer needs.

Flow Overview
-------------
1. **Filter** todates by tag and by year window (:class:`TimelineFilters`).
2. **Resolve** each todate's start (and end) to an instant and a display label.
3. **Sort** newest first, the order of the list view.
4. **Lay out** ranged todates into lanes over fractional years.
5. **Frame** the axis: take the caller's span accumulator (or seed one from the
   data bounds) and compute the tick years for the available pixel height.

The pipeline holds no state between calls. The span accumulator it returns is
meant to be kept by the caller and passed back on the next call, after any
pan/zoom gestures have been applied to it.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import TypedDict

import pendulum
from pydantic import BaseModel, ConfigDict, Field

from todate.core.calendar.clamp import iso_to_date_value
from todate.core.calendar.display import format_display, format_range
from todate.core.calendar.resolve import check_school_config, fractional_year, resolve_instant
from todate.core.contracts.school import SchoolCalendarConfig
from todate.core.contracts.timeline import SpanState, TimelineItem, YearSpan
from todate.core.contracts.todate import Todate
from todate.core.layout.axis import compute_tick_years, data_year_bounds
from todate.core.layout.lanes import assign_lanes, lane_count
from todate.core.layout.span import initial_span_state
from todate.core.settings import get_logger

logger = get_logger("todate.pipelines.timeline_view")


class TimelineFilters(BaseModel):
    """Which todates to show.

    - ``selected_tag_ids`` empty → every tagged todate passes; otherwise a
      todate passes when it carries at least one selected tag.
    - Untagged todates pass iff ``show_untagged``.
    - ``start_year``/``end_year`` keep todates whose years intersect the window.
    """

    model_config = ConfigDict(frozen=True)

    selected_tag_ids: frozenset[str] = Field(default_factory=frozenset)
    show_untagged: bool = True
    start_year: int | None = None
    end_year: int | None = None


class TimelineEntry(TypedDict):
    """One resolved todate, ready to draw."""

    id: str
    title: str
    label: str
    start_iso: str
    start_year: float
    end_year: float | None
    lane: int | None
    tag_ids: list[str]


class TimelineView(TypedDict):
    """Structured payload returned by :func:`build_timeline_view`.

    Attributes
    ----------
    entries:
        Filtered todates, newest first.
    lanes:
        Lane number per ranged todate id.
    lane_count:
        Number of lanes in use (0 when no todate is ranged).
    span:
        The published year window.
    span_state:
        Accumulator to keep for the next pan/zoom.
    ticks:
        Labelled years on the axis.
    total:
        Todate count before filtering (distinguishes "no data" from "no match").
    """

    entries: list[TimelineEntry]
    lanes: dict[Hashable, int]
    lane_count: int
    span: YearSpan
    span_state: SpanState
    ticks: list[int]
    total: int


def _passes_tags(todate: Todate, filters: TimelineFilters) -> bool:
    ids = todate.tag_ids()
    if not ids:
        return filters.show_untagged
    if not filters.selected_tag_ids:
        return True
    return bool(ids & filters.selected_tag_ids)


def _passes_years(start: float, end: float | None, filters: TimelineFilters) -> bool:
    last = end if end is not None else start
    if filters.start_year is not None and int(last) < filters.start_year:
        return False
    if filters.end_year is not None and int(start) > filters.end_year:
        return False
    return True


def _start_instant(todate: Todate, school_config: SchoolCalendarConfig | None) -> pendulum.DateTime:
    if todate.date_display is not None:
        return resolve_instant(todate.date_display, school_config)
    return pendulum.parse(todate.date)  # type: ignore[return-value]


def resolve_entry(
    todate: Todate,
    school_config: SchoolCalendarConfig | None = None,
    *,
    locale: str | None = None,
) -> TimelineEntry:
    """Resolve one todate's instants and label (lane is filled in later)."""
    start = _start_instant(todate, school_config)
    end_year: float | None = None
    if todate.end_date_display is not None:
        end_year = fractional_year(resolve_instant(todate.end_date_display, school_config))

    if todate.date_display is not None:
        label = format_range(
            todate.date_display,
            todate.end_date_display,
            locale=locale,
            school_config=school_config,
        )
    else:
        label = format_display(iso_to_date_value(todate.date), locale=locale)

    return TimelineEntry(
        id=todate.id,
        title=todate.title,
        label=label,
        start_iso=start.isoformat(),
        start_year=fractional_year(start),
        end_year=end_year,
        lane=None,
        tag_ids=sorted(todate.tag_ids()),
    )


def build_timeline_view(
    todates: Sequence[Todate],
    *,
    pixel_height: float,
    today_year: int,
    school_config: SchoolCalendarConfig | None = None,
    filters: TimelineFilters | None = None,
    span_state: SpanState | None = None,
    locale: str | None = None,
    min_label_px: float | None = None,
) -> TimelineView:
    """Filter, resolve, lay out and frame ``todates`` for rendering.

    Parameters
    ----------
    todates:
        The caller's in-memory collection.
    pixel_height:
        Height of the axis in pixels, used for tick thinning.
    today_year:
        Year used to frame an empty timeline.
    span_state:
        The caller's pan/zoom accumulator. When omitted, one is seeded from the
        bounds of the filtered data.
    """
    active = filters or TimelineFilters()
    check_school_config(school_config)

    entries: list[TimelineEntry] = []
    for todate in todates:
        if not _passes_tags(todate, active):
            continue
        entry = resolve_entry(todate, school_config, locale=locale)
        if not _passes_years(entry["start_year"], entry["end_year"], active):
            continue
        entries.append(entry)

    entries.sort(key=lambda e: e["start_year"], reverse=True)

    lanes = assign_lanes(
        TimelineItem(id=e["id"], start=e["start_year"], end=e["end_year"]) for e in entries
    )
    for entry in entries:
        entry["lane"] = lanes.get(entry["id"])

    if span_state is None:
        years = [e["start_year"] for e in entries]
        years += [e["end_year"] for e in entries if e["end_year"] is not None]
        span_state = initial_span_state(data_year_bounds(years, today_year=today_year))

    span = span_state.published
    ticks = compute_tick_years(span.start_year, span.end_year, pixel_height, min_label_px)

    logger.debug(
        "Timeline view: %d/%d todates shown, %d lanes, span %s-%s, %d ticks",
        len(entries),
        len(todates),
        lane_count(lanes),
        span.start_year,
        span.end_year,
        len(ticks),
    )

    return TimelineView(
        entries=entries,
        lanes=lanes,
        lane_count=lane_count(lanes),
        span=span,
        span_state=span_state,
        ticks=ticks,
        total=len(todates),
    )


__all__ = [
    "TimelineEntry",
    "TimelineFilters",
    "TimelineView",
    "build_timeline_view",
    "resolve_entry",
]
