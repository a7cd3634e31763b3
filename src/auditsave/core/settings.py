"""Centralized application configuration using Pydantic Settings (v2).

This module exposes a single, cached `settings` instance that reads from:
- Real environment variables (highest precedence)
- `.env` files at the repository root: .env, .env.local, .env.dev/.env.test/.env.prod
"""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

EnvName = Literal["dev", "test", "prod"]
LogLevelName = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Typed application configuration loaded from env and `.env` files.

    Attributes
    ----------
    environment : EnvName
        Runtime environment flag; maps from `AUDITSAVE_ENV`.
    log_level : LogLevelName
        Global log level string; maps from `LOG_LEVEL`.
    output_dir : Path
        Default directory the CLI writes assets into; maps from
        `AUDITSAVE_OUTPUT_DIR`.
    screenshot_concurrency : int
        Upper bound on passes whose screenshots are fetched at once. ``1``
        keeps retrieval strictly sequential; maps from
        `AUDITSAVE_SCREENSHOT_CONCURRENCY`.
    write_manifest : bool
        Whether the CLI writes a `<base>.manifest.json` next to the assets;
        maps from `AUDITSAVE_WRITE_MANIFEST`.
    """

    environment: EnvName = Field(default="dev", alias="AUDITSAVE_ENV")
    log_level: LogLevelName = Field(default="INFO", alias="LOG_LEVEL")
    output_dir: Path = Field(
        default=Path("artifacts") / "assets", alias="AUDITSAVE_OUTPUT_DIR"
    )
    screenshot_concurrency: int = Field(
        default=1, ge=1, alias="AUDITSAVE_SCREENSHOT_CONCURRENCY"
    )
    write_manifest: bool = Field(default=False, alias="AUDITSAVE_WRITE_MANIFEST")

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
    def is_test(self) -> bool:
        """Return True if running in the test environment."""
        return self.environment == "test"

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
    os.environ.setdefault("AUDITSAVE_ENV", "dev")
    return Settings()


# Export a ready-to-use singleton (import-time read of env / .env files).
settings: Settings = load_settings()


def get_logger(name: str = "auditsave") -> logging.Logger:
    """Return a process-global logger configured to the current `LOG_LEVEL`."""
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
