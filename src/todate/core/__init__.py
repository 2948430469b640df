"""Core package initializer for Todate.

Submodules are imported directly, e.g.:
    from todate.core.settings import settings, load_settings, Settings, get_logger
    from todate.core.calendar.resolve import resolve_instant
"""

from __future__ import annotations

__all__ = ["__doc__"]
