"""
PILOT — Centralized configuration.

Loads all settings from .env and validates required keys.
This module is the foundation for every other module in the project.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (one level up from pilot/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Supabase (auth + PostgREST)
    SUPABASE_URL: str
    SUPABASE_ANON_KEY: str

    # Admin dashboard gate: presentation only, not a security boundary
    ADMIN_EMAILS: list[str] = []

    # Admin user table
    USER_LIST_LIMIT: int = 50

    # Backend requests
    HTTP_TIMEOUT_SECONDS: float = 10.0

    # "Today" is evaluated in this timezone
    TIMEZONE: str = "Europe/Lisbon"

    # Agenda ordering: insertion order unless enabled
    SORT_AGENDA_BY_TIME: bool = False

    @field_validator("ADMIN_EMAILS", mode="before")
    @classmethod
    def parse_admin_emails(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, list):
            return [e.strip().lower() for e in v if e.strip()]
        if isinstance(v, str) and v.strip():
            return [e.strip().lower() for e in v.split(",") if e.strip()]
        return []

    @field_validator("SUPABASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("SORT_AGENDA_BY_TIME", mode="before")
    @classmethod
    def parse_flag(cls, v: str | bool) -> bool:
        if isinstance(v, bool):
            return v
        return str(v).strip().lower() in ("1", "true", "yes", "on")


def _load_settings() -> Settings:
    """Load settings from environment, validating required keys."""
    url = os.getenv("SUPABASE_URL", "")
    anon_key = os.getenv("SUPABASE_ANON_KEY", "")

    if not url or url.startswith("your-"):
        print("ERROR: SUPABASE_URL is missing or not set in .env", file=sys.stderr)
        sys.exit(1)

    if not anon_key or anon_key.startswith("your-"):
        print("ERROR: SUPABASE_ANON_KEY is missing or not set in .env", file=sys.stderr)
        sys.exit(1)

    return Settings(
        SUPABASE_URL=url,
        SUPABASE_ANON_KEY=anon_key,
        ADMIN_EMAILS=os.getenv("ADMIN_EMAILS", ""),
        USER_LIST_LIMIT=int(os.getenv("USER_LIST_LIMIT", "50")),
        HTTP_TIMEOUT_SECONDS=float(os.getenv("HTTP_TIMEOUT_SECONDS", "10")),
        TIMEZONE=os.getenv("TIMEZONE", "Europe/Lisbon"),
        SORT_AGENDA_BY_TIME=os.getenv("SORT_AGENDA_BY_TIME", "false"),
    )


# Singleton, imported by all other modules as:
#   from pilot.config import settings
settings = _load_settings()
