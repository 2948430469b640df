"""Todate: flexible-precision personal timelines.

The engine resolves vague dates ("Year 3, Q2", "March 2001") to sortable
instants, packs overlapping periods into lanes, thins the year axis and keeps
the visible span under pan/zoom. Everything runs in-memory on caller data.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
