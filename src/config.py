"""
Finalissima Goal Tracker — Centralized configuration.

Loads all settings from .env and validates required keys.
Both the poller and the webhook host read from the same `settings` object.
"""

from __future__ import annotations

import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from src/config.py)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_ENV_PATH = _PROJECT_ROOT / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Telegram
    BOT_TOKEN: str
    CHAT_ID: str = ""            # reminder destination, poller mode only

    # Goal
    MATCH_DATE: date = date(2026, 3, 28)
    ESTIMATE_BUDGET: int = 0
    EVENT_NAME: str = "Finalissima 2026"

    # Webhook host
    PORT: int = 3000
    WEBHOOK_PATH: str = "/api/webhook"

    # Storage: checklist.json, notes.json and log.txt live here
    DATA_DIR: str = str(_PROJECT_ROOT)

    # Weekly reminder — PTB weekday numbering (0 = Sunday, 5 = Friday)
    TIMEZONE: str = ""           # empty → host local time
    REMINDER_WEEKDAY: int = 5
    REMINDER_HOUR: int = 9

    @field_validator("MATCH_DATE", mode="before")
    @classmethod
    def parse_match_date(cls, v: str | date) -> date:
        if isinstance(v, date):
            return v
        return date.fromisoformat(v.strip()[:10])

    @field_validator("ESTIMATE_BUDGET", "PORT", "REMINDER_WEEKDAY", "REMINDER_HOUR", mode="before")
    @classmethod
    def parse_int(cls, v: str | int) -> int:
        return int(v)

    @field_validator("REMINDER_WEEKDAY")
    @classmethod
    def check_weekday(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError(f"REMINDER_WEEKDAY must be 0-6, got {v}")
        return v

    @field_validator("REMINDER_HOUR")
    @classmethod
    def check_hour(cls, v: int) -> int:
        if not 0 <= v <= 23:
            raise ValueError(f"REMINDER_HOUR must be 0-23, got {v}")
        return v


def _load_settings() -> Settings:
    """Load settings from environment, validating required keys."""
    token = os.getenv("BOT_TOKEN", "")

    if not token or token.startswith("your-"):
        print("ERROR: BOT_TOKEN is missing or not set in .env", file=sys.stderr)
        sys.exit(1)

    return Settings(
        BOT_TOKEN=token,
        CHAT_ID=os.getenv("CHAT_ID", ""),
        MATCH_DATE=os.getenv("MATCH_DATE", "2026-03-28"),
        ESTIMATE_BUDGET=os.getenv("ESTIMATE_BUDGET", "0"),
        EVENT_NAME=os.getenv("EVENT_NAME", "Finalissima 2026"),
        PORT=os.getenv("PORT", "3000"),
        WEBHOOK_PATH=os.getenv("WEBHOOK_PATH", "/api/webhook"),
        DATA_DIR=os.getenv("DATA_DIR", str(_PROJECT_ROOT)),
        TIMEZONE=os.getenv("TIMEZONE", ""),
        REMINDER_WEEKDAY=os.getenv("REMINDER_WEEKDAY", "5"),
        REMINDER_HOUR=os.getenv("REMINDER_HOUR", "9"),
    )


# Singleton — imported by the runtime layers as:
#   from src.config import settings
settings = _load_settings()
