"""
Pan/zoom controller for the visible year window.

The window lives in two forms:

- a *fractional* accumulator (:class:`SpanState` ``start``/``end``) that every
  pan or zoom gesture is applied to, and
- the *published* integer :class:`YearSpan` the renderer draws.

Gestures arrive in quick succession and are often tiny (a trackpad produces
many sub-year zoom steps). Applying them to the rounded span would round each
one away and the zoom would appear to stall, so the rounded span is only ever
derived from the accumulator, never fed back into it.

Each mutation (:func:`apply_span_delta`):

1. adds the requested delta to the fractional ends;
2. if the window is now wider than ``max_span``, cuts it back to exactly
   ``max_span`` around its midpoint;
3. rounds both ends half-up and publishes the result, unless the rounded
   window is narrower than one year, in which case the previous published
   span stays in place.

A delta that would turn the window inside out (``end <= start``) is ignored,
and so is one too large for float precision to keep a window of positive
width after step 2.

The state object belongs to the caller (one per timeline view); nothing here
keeps module-level state.
"""

from __future__ import annotations

import math

from todate.core.contracts.timeline import SpanDelta, SpanState, YearSpan
from todate.core.settings import DEFAULT_MAX_SPAN, current_settings, get_logger

logger = get_logger("todate.layout.span")

MAX_SPAN: float = DEFAULT_MAX_SPAN
MIN_PUBLISHED_SPAN = 1


def _limit(max_span: float | None) -> float:
    return max_span if max_span is not None else current_settings().max_span


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp_window(start: float, end: float, max_span: float) -> tuple[float, float]:
    if end - start <= max_span:
        return start, end
    mid = (start + end) / 2
    start = mid - max_span / 2
    return start, start + max_span


def _publish(start: float, end: float, max_span: float) -> YearSpan | None:
    low, high = _round_half_up(start), _round_half_up(end)
    if high - low > max_span:
        high -= 1
    if high - low < MIN_PUBLISHED_SPAN:
        return None
    return YearSpan(start_year=low, end_year=high)


def initial_span_state(span: YearSpan, max_span: float | None = None) -> SpanState:
    """Seed an accumulator from a published span (e.g. the data bounds)."""
    limit = _limit(max_span)
    start, end = _clamp_window(span.start_year, span.end_year, limit)
    published = _publish(start, end, limit)
    if published is None:
        low = _round_half_up(start)
        published = YearSpan(start_year=low, end_year=low + MIN_PUBLISHED_SPAN)
    return SpanState(start=start, end=end, published=published)


def apply_span_delta(
    state: SpanState,
    delta: SpanDelta,
    max_span: float | None = None,
) -> SpanState:
    """Apply ``delta`` to the fractional window and republish the rounded span."""
    start = state.start + delta.d_start
    end = state.end + delta.d_end
    if end <= start:
        logger.debug("Ignoring span delta that inverts the window: %s", delta)
        return state

    limit = _limit(max_span)
    start, end = _clamp_window(start, end, limit)
    if not (math.isfinite(start) and math.isfinite(end) and end > start):
        logger.debug("Ignoring span delta that collapses the window: %s", delta)
        return state
    published = _publish(start, end, limit) or state.published
    return SpanState(start=start, end=end, published=published)


def pan_delta(years: float) -> SpanDelta:
    """Shift the whole window by ``years`` (negative = earlier)."""
    return SpanDelta(d_start=years, d_end=years)


def wheel_zoom_delta(
    state: SpanState,
    delta: float,
    sensitivity: float | None = None,
) -> SpanDelta:
    """Map a wheel/trackpad delta to a symmetric zoom about the window centre.

    Positive ``delta`` (scrolling down) zooms out, negative zooms in. Only the
    sign of ``delta`` matters; each event moves both ends by
    ``width * sensitivity``.
    """
    sens = sensitivity if sensitivity is not None else current_settings().wheel_sensitivity
    sign = (delta > 0) - (delta < 0)
    change = state.width * sign * sens
    return SpanDelta(d_start=-change, d_end=change)


def pinch_zoom_delta(
    state: SpanState,
    ratio: float,
    midpoint: float | None = None,
) -> SpanDelta:
    """Map a pinch distance ratio to a new window centred on ``midpoint``.

    ``ratio > 1`` (fingers apart) zooms in. The new width is
    ``max(1, width / ratio)``. ``midpoint`` is a year; it defaults to the
    current centre. A non-positive ratio produces no change.
    """
    if ratio <= 0:
        return SpanDelta()
    width = max(1.0, state.width / ratio)
    centre = midpoint if midpoint is not None else state.midpoint
    new_start = centre - width / 2
    return SpanDelta(d_start=new_start - state.start, d_end=new_start + width - state.end)


def set_span_bounds(
    state: SpanState,
    start_year: float | None = None,
    end_year: float | None = None,
    max_span: float | None = None,
) -> SpanState:
    """Move either end to an explicit year, as typed into the From/To fields."""
    delta = SpanDelta(
        d_start=0.0 if start_year is None else start_year - state.start,
        d_end=0.0 if end_year is None else end_year - state.end,
    )
    return apply_span_delta(state, delta, max_span)


__all__ = [
    "MAX_SPAN",
    "apply_span_delta",
    "initial_span_state",
    "pan_delta",
    "pinch_zoom_delta",
    "set_span_bounds",
    "wheel_zoom_delta",
]
