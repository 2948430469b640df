"""
Year-axis ticks for the vertical timeline.

The axis shows a label every ``step`` years. The step is the smallest "nice"
value from :data:`TICK_STEPS` whose on-screen gap is at least
``min_label_px`` pixels, so labels never collide whatever the zoom level:

    pixels_per_year = pixel_height / (end_year - start_year)
    step = min(s in TICK_STEPS if s * pixels_per_year >= min_label_px)

Ticks start at the first multiple of ``step`` at or after ``start_year`` and
run up to ``end_year`` inclusive.

When even the widest step is too dense (a very short axis), at most a single
tick is emitted.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

from todate.core.contracts.timeline import YearSpan
from todate.core.settings import DEFAULT_LABEL_MIN_PX, current_settings

TICK_STEPS: tuple[int, ...] = (1, 2, 5, 10, 20, 25, 50, 100)
LABEL_MIN_PX: float = DEFAULT_LABEL_MIN_PX


def pixels_per_year(start_year: float, end_year: float, pixel_height: float) -> float:
    """Return the vertical pixel density of the axis (0.0 for a degenerate span)."""
    width = end_year - start_year
    if width <= 0 or pixel_height <= 0:
        return 0.0
    return pixel_height / width


def choose_tick_step(
    start_year: float,
    end_year: float,
    pixel_height: float,
    min_label_px: float,
) -> int | None:
    """Return the smallest legible step, or ``None`` when no candidate fits."""
    density = pixels_per_year(start_year, end_year, pixel_height)
    if density <= 0:
        return None
    for step in TICK_STEPS:
        if step * density >= min_label_px:
            return step
    return None


def compute_tick_years(
    start_year: float,
    end_year: float,
    pixel_height: float,
    min_label_px: float | None = None,
) -> list[int]:
    """Return the years that get a labelled tick on the axis."""
    min_px = min_label_px if min_label_px is not None else current_settings().label_min_px
    if pixels_per_year(start_year, end_year, pixel_height) <= 0:
        return []

    step = choose_tick_step(start_year, end_year, pixel_height, min_px)
    single = step is None
    if step is None:
        step = TICK_STEPS[-1]

    ticks: list[int] = []
    year = math.ceil(start_year / step) * step
    while year <= end_year:
        ticks.append(year)
        if single:
            break
        year += step
    return ticks


def year_to_pixel(
    year: float,
    start_year: float,
    end_year: float,
    pixel_height: float,
    padding: float = 0.0,
) -> float:
    """Map a (fractional) year onto the axis; ``start_year`` is at the top."""
    width = end_year - start_year
    if width <= 0:
        return padding
    return padding + (year - start_year) / width * (pixel_height - 2 * padding)


def data_year_bounds(
    fractional_years: Iterable[float],
    *,
    today_year: int,
    max_span: float | None = None,
) -> YearSpan:
    """Return the initial span covering every data point.

    - Bounds are ``floor(min)`` .. ``ceil(max)``.
    - No data → ``today_year .. today_year + 1``.
    - A single-year result is widened to one full year.
    - Data wider than ``max_span`` is cut symmetrically around its midpoint.
    """
    limit = max_span if max_span is not None else current_settings().max_span
    years = list(fractional_years)
    if not years:
        return YearSpan(start_year=today_year, end_year=today_year + 1)

    low = math.floor(min(years))
    high = math.ceil(max(years))
    if high <= low:
        high = low + 1
    if high - low > limit:
        mid = (low + high) / 2
        low = math.floor(mid - limit / 2)
        high = low + math.floor(limit)
    return YearSpan(start_year=low, end_year=high)


__all__ = [
    "LABEL_MIN_PX",
    "TICK_STEPS",
    "choose_tick_step",
    "compute_tick_years",
    "data_year_bounds",
    "pixels_per_year",
    "year_to_pixel",
]
