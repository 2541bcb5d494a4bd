"""
Configuration settings for practice-planner.

Uses Pydantic Settings for environment variable management with .env file support.
All variables are prefixed with PRACTICE_PLANNER_ (e.g. PRACTICE_PLANNER_DATA_DIR).
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PRACTICE_PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    data_dir: Path = Field(
        default=Path.home() / ".practice_planner",
        description="Directory holding config.json, history.json and today.json",
    )

    # ========================================
    # Defaults for a fresh configuration
    # ========================================
    default_practice_minutes: int = Field(
        default=15,
        ge=1,
        description="Minutes spent on each skill",
    )
    default_repeat_days: int = Field(
        default=2,
        ge=1,
        description="Max days a skill may go unpracticed",
    )
    default_skills_per_day: int = Field(
        default=4,
        ge=1,
        description="Number of skills scheduled per day",
    )

    # ========================================
    # Practice Loop
    # ========================================
    tick_interval_seconds: float = Field(
        default=0.1,
        gt=0,
        description="How often the running session is ticked",
    )
    history_display_days: int = Field(
        default=3,
        ge=1,
        description="Days of history shown by the history command",
    )
    random_seed: int | None = Field(
        default=None,
        description="Seed for the schedule draw (None for a fresh seed)",
    )
    bell: bool = Field(
        default=True,
        description="Ring the terminal bell when a skill is finished",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
