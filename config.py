"""
Configuration settings for the skillgate assessment engine.

Uses Pydantic Settings for environment variable management with .env file support.
Only policy knobs live here; the thresholds that define the assessment
algorithms themselves are module constants.
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
        env_prefix="SKILLGATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional log file path",
    )

    # ========================================
    # Session state
    # ========================================
    session_dir: Path = Field(
        default=Path.home() / ".skillgate" / "session",
        description="Directory holding the persisted session key/value files",
    )

    # ========================================
    # Eligibility policy
    # ========================================
    attendance_threshold: float = Field(
        default=75.0,
        ge=0,
        le=100,
        description="Minimum attendance percentage for leave eligibility",
    )
    required_quiz_min_average: float = Field(
        default=60.0,
        ge=0,
        le=100,
        description="Minimum average score across required quizzes",
    )
    required_quiz_categories: str = Field(
        default="JavaScript,React,Node.js,Database,DSA",
        description="Comma-separated quiz categories that count as required",
    )

    # ========================================
    # Proficiency classification
    # ========================================
    recent_attempt_window: int = Field(
        default=5,
        ge=1,
        description="Number of most recent attempts the pressure table looks at",
    )
    slow_completion_minutes: float = Field(
        default=45.0,
        gt=0,
        description="Average completion time above which a learner counts as slow",
    )

    def get_required_categories(self) -> frozenset[str]:
        """Required-quiz allow-list, lower-cased for matching."""
        return frozenset(
            c.strip().lower() for c in self.required_quiz_categories.split(",") if c.strip()
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
