"""Pipeline entry points for Todate.

Currently exposed:

- :func:`build_timeline_view` — filter → resolve → sort → lanes → span/ticks,
  implemented in ``timeline_view.py``.
"""

from __future__ import annotations

from .timeline_view import TimelineFilters, TimelineView, build_timeline_view

__all__ = ["build_timeline_view", "TimelineFilters", "TimelineView"]
