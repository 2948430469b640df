"""Shared test setup.

The environment is pinned before `todate.core.settings` is first imported, so
the module-level `settings` singleton and every noon instant are built in UTC
with English month names regardless of the machine running the suite.
"""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

os.environ["TODATE_ENV"] = "test"
os.environ["TODATE_TIMEZONE"] = "UTC"
os.environ["TODATE_LOCALE"] = "en"

from todate.core.settings import load_settings  # noqa: E402


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _fresh_settings() -> Iterator[None]:
    """Rebuild settings around each test so env tweaks never leak."""
    load_settings.cache_clear()
    yield
    load_settings.cache_clear()
