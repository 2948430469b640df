"""
Greedy interval partitioning for ranged timeline items.

Ranged items (those with an end) are drawn as brackets beside the year axis.
Two brackets that overlap in time cannot share a column, so each item is
given a *lane*. :func:`assign_lanes` uses the classical greedy strategy:

1. Sort items by start (stable, so equal starts keep their input order).
2. Keep ``lane_end[k]``, the end of the item currently occupying lane ``k``.
3. Put each item into the first lane whose occupant ended at or before the
   item's start; if none has, open a new lane.

Intervals are treated as half-open ``[start, end)``: an item that starts
exactly when another ends may reuse its lane. With that convention the number
of lanes used equals the maximum number of items active at any instant, which
is a lower bound for any valid layout, so the greedy result is optimal.

Point items (no end) never take part. An item whose end precedes its start is
a caller error; it is placed without raising, but the placement is meaningless.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable

from todate.core.contracts.timeline import LaneAssignment, TimelineItem


def assign_lanes(items: Iterable[TimelineItem]) -> LaneAssignment:
    """Return ``{item.id: lane}`` for every ranged item in ``items``.

    The returned dict is ordered by (start, input order).
    """
    ranged = [item for item in items if item.end is not None]
    ranged.sort(key=lambda item: item.start)

    lane_of: dict[Hashable, int] = {}
    lane_end: list = []

    for item in ranged:
        lane = 0
        while lane < len(lane_end) and lane_end[lane] > item.start:
            lane += 1
        if lane == len(lane_end):
            lane_end.append(item.end)
        else:
            lane_end[lane] = item.end
        lane_of[item.id] = lane

    return lane_of


def lane_count(assignment: LaneAssignment) -> int:
    """Return how many lanes an assignment uses (0 when nothing is ranged)."""
    if not assignment:
        return 0
    return max(assignment.values()) + 1


def max_overlap(items: Iterable[TimelineItem]) -> int:
    """Return the largest number of ranged items active at a single instant.

    Sweep-line over start/end events; at equal instants ends are processed
    before starts, matching the half-open convention of :func:`assign_lanes`.
    """
    events: list[tuple[object, int]] = []
    for item in items:
        if item.end is None:
            continue
        events.append((item.start, 1))
        events.append((item.end, -1))
    events.sort(key=lambda ev: (ev[0], ev[1]))

    active = best = 0
    for _, step in events:
        active += step
        best = max(best, active)
    return best


__all__ = ["assign_lanes", "lane_count", "max_overlap"]
