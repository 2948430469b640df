"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod

Besides the runtime environment and log level, the settings carry the few
knobs the timeline engine needs from its host application: the display
locale, the timezone in which vague dates are pinned to noon, the minimum
label gap on the year axis, and the pan/zoom limits.
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULT_LABEL_MIN_PX = 14.0
DEFAULT_MAX_SPAN = 200.0


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `TODATE_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    locale : str
        Default locale for display strings; maps from `TODATE_LOCALE`.
    timezone : str
        Timezone used to build noon instants for vague dates; maps from
        `TODATE_TIMEZONE`. Accepts any IANA name or ``"local"``.
    label_min_px : float
        Minimum pixel gap between two year labels; maps from `TODATE_LABEL_MIN_PX`.
    max_span : float
        Widest visible year window; maps from `TODATE_MAX_SPAN`.
    wheel_sensitivity : float
        Fraction of the span added to each end per wheel notch; maps from
        `TODATE_WHEEL_SENSITIVITY`.
    """

    environment: EnvName = Field(default="dev", alias="TODATE_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    locale: str = Field(default="en", alias="TODATE_LOCALE")
    timezone: str = Field(default="UTC", alias="TODATE_TIMEZONE")
    label_min_px: float = Field(default=DEFAULT_LABEL_MIN_PX, gt=0, alias="TODATE_LABEL_MIN_PX")
    max_span: float = Field(default=DEFAULT_MAX_SPAN, ge=1, alias="TODATE_MAX_SPAN")
    wheel_sensitivity: float = Field(default=0.05, gt=0, lt=0.5, alias="TODATE_WHEEL_SENSITIVITY")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local", ".env.dev", ".env.test", ".env.prod"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    @property
    def is_prod(self) -> bool:
        """Return True if running in the production environment."""
        return self.environment == "prod"

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    os.environ.setdefault("TODATE_ENV", "dev")
    return Settings()


# Import-time read of env / .env files.
settings: Settings = load_settings()


def current_settings() -> Settings:
    """Return the cached settings, honouring a cleared `load_settings` cache."""
    return load_settings()


def get_logger(name: str = "todate") -> logging.Logger:
    """Return a process-global logger configured to the current log level."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(current_settings().log_level_numeric())
    logger.propagate = False
    return logger
