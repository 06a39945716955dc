"""
ChoreLog: Centralized configuration.

Loads all settings from .env and validates them.
This module is the foundation for every other module in the project.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError, field_validator

# Load .env from project root (two levels up from src/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # SQLite
    DATABASE_PATH: str = "data/chorelog.db"

    # Progress
    DEFAULT_DAILY_TARGET_MINUTES: int = 60
    TIMEZONE: str = "Europe/Berlin"

    # HTTP
    API_HOST: str = "127.0.0.1"
    API_PORT: int = 8000
    CORS_ORIGINS: list[str] = []

    @field_validator("DEFAULT_DAILY_TARGET_MINUTES", mode="before")
    @classmethod
    def parse_target(cls, v: str | int) -> int:
        value = int(v)
        if value <= 0:
            raise ValueError("DEFAULT_DAILY_TARGET_MINUTES must be positive")
        return value

    @field_validator("TIMEZONE")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown TIMEZONE: {v!r}") from exc
        return v

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, list):
            return v
        if isinstance(v, str) and v.strip():
            return [o.strip() for o in v.split(",") if o.strip()]
        return []

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.TIMEZONE)


def _load_settings() -> Settings:
    """Load settings from environment, exiting on invalid values."""
    try:
        return Settings(
            DATABASE_PATH=os.getenv("DATABASE_PATH", "data/chorelog.db"),
            DEFAULT_DAILY_TARGET_MINUTES=os.getenv("DEFAULT_DAILY_TARGET_MINUTES", "60"),
            TIMEZONE=os.getenv("TIMEZONE", "Europe/Berlin"),
            API_HOST=os.getenv("API_HOST", "127.0.0.1"),
            API_PORT=os.getenv("API_PORT", "8000"),
            CORS_ORIGINS=os.getenv("CORS_ORIGINS", ""),
        )
    except ValidationError as exc:
        print(f"ERROR: invalid configuration in .env:\n{exc}", file=sys.stderr)
        sys.exit(1)


# Singleton, imported by all other modules as:
#   from src.config import settings
settings = _load_settings()
