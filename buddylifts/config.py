"""Configuration settings for BuddyLifts."""

from __future__ import annotations

import os
from pathlib import Path

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings:
    """Application settings, read from the environment at construction."""

    DB_PATH: str
    LOG_LEVEL: str = "INFO"

    def __init__(self):
        # Default DB next to the package (or use BUDDYLIFTS_DB_PATH)
        self.DB_PATH = os.getenv(
            "BUDDYLIFTS_DB_PATH", str(Path(__file__).resolve().parent.parent / "buddylifts.db")
        )

        level = os.getenv("BUDDYLIFTS_LOG_LEVEL", "INFO").upper()
        self.LOG_LEVEL = level if level in _LOG_LEVELS else "INFO"


settings = Settings()
