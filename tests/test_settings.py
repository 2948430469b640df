"""Smoke tests for the settings loader.

These tests verify four guarantees:
1) Importing the module-level `settings` yields a `Settings` instance.
2) Environment variables override defaults after clearing the loader cache.
3) Out-of-range engine knobs are rejected by validation.
4) `get_logger()` respects the configured LOG_LEVEL when constructing loggers.
"""

from __future__ import annotations

import logging
from typing import Any

import pytest
from pydantic import ValidationError

from todate.core.layout.axis import LABEL_MIN_PX
from todate.core.layout.span import MAX_SPAN
from todate.core.settings import (
    Settings,
    current_settings,
    get_logger,
    load_settings,
    settings,
)


def test_settings_instance_type() -> None:
    """`settings` should be an instance of the typed `Settings` model."""
    assert isinstance(settings, Settings)


def test_test_environment_defaults() -> None:
    """The suite runs with the pinned test env, UTC and English."""
    s = current_settings()
    assert s.environment == "test" and not s.is_prod
    assert s.timezone == "UTC"
    assert s.locale == "en"
    assert s.label_min_px == LABEL_MIN_PX == 14.0
    assert s.max_span == MAX_SPAN == 200.0
    assert s.wheel_sensitivity == pytest.approx(0.05)


def test_env_overrides_with_cache_clear(monkeypatch: Any) -> None:
    """Changing env vars should take effect after `load_settings.cache_clear()`."""
    monkeypatch.setenv("TODATE_ENV", "prod")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("TODATE_MAX_SPAN", "120")
    monkeypatch.setenv("TODATE_TIMEZONE", "Europe/Paris")

    load_settings.cache_clear()
    s = load_settings()

    assert s.environment == "prod"
    assert s.is_prod
    assert s.log_level == "DEBUG"
    assert s.max_span == 120.0
    assert s.timezone == "Europe/Paris"


def test_wheel_sensitivity_must_stay_below_half(monkeypatch: Any) -> None:
    """A sensitivity of 0.5 or more would let a zoom-in invert the window."""
    monkeypatch.setenv("TODATE_WHEEL_SENSITIVITY", "0.5")
    load_settings.cache_clear()
    with pytest.raises(ValidationError):
        load_settings()


def test_get_logger_respects_level(monkeypatch: Any) -> None:
    """`get_logger()` should apply the numeric level derived from `LOG_LEVEL`."""
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    load_settings.cache_clear()
    _ = load_settings()

    logger = get_logger("todate.tests.settings")

    assert logger.level == logging.ERROR
    assert logger.handlers, "Expected at least one StreamHandler to be attached."
    assert logger.propagate is False
