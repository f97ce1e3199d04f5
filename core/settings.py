"""Centralized application configuration using Pydantic Settings (v2).

A single cached `settings` instance is read from:
- Real environment variables (highest precedence)
- `.env` files in the working directory: .env, .env.local
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


class Settings(BaseSettings):
    """Typed visualizer configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `ARRAYVIZ_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    default_interval_ms : int
        Autoplay period at 1.0x speed; maps from `ARRAYVIZ_INTERVAL_MS`.
    min_interval_ms / max_interval_ms : int
        Bounds applied to every interval handed to the playback controller.
    autoplay : bool
        Start playback right after an operation is executed.
    """

    environment: EnvName = Field(default="dev", alias="ARRAYVIZ_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    default_interval_ms: int = Field(default=1000, alias="ARRAYVIZ_INTERVAL_MS", gt=0)
    min_interval_ms: int = Field(default=100, alias="ARRAYVIZ_MIN_INTERVAL_MS", gt=0)
    max_interval_ms: int = Field(default=5000, alias="ARRAYVIZ_MAX_INTERVAL_MS", gt=0)
    autoplay: bool = Field(default=False, alias="ARRAYVIZ_AUTOPLAY")

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_dev(self) -> bool:
        """Return True if running in the development environment."""
        return self.environment == "dev"

    def clamp_interval(self, interval_ms: int) -> int:
        """Clamp an autoplay period into `[min_interval_ms, max_interval_ms]`."""
        return max(self.min_interval_ms, min(self.max_interval_ms, int(interval_ms)))

    def log_level_numeric(self) -> int:
        """Return the numeric logging level corresponding to `self.log_level`."""
        return getattr(logging, self.log_level, logging.INFO)


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Create and cache a `Settings` instance.

    Tests force a rebuild via `load_settings.cache_clear()` after mutating
    `os.environ`.
    """
    os.environ.setdefault("ARRAYVIZ_ENV", "dev")
    return Settings()


settings: Settings = load_settings()


def get_logger(name: str = "arrayviz") -> logging.Logger:
    """Return a logger configured to the current `LOG_LEVEL`."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        )
        logger.addHandler(handler)
    logger.setLevel(load_settings().log_level_numeric())
    logger.propagate = False
    return logger
