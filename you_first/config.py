"""
Runtime configuration from environment variables (and a local .env file).

User preferences such as the reminder time live in the settings table,
see db.get_setting().
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DB_PATH_DEFAULT = os.path.join("data", "you_first.db")


@dataclass
class Settings:
    db_path: str = DB_PATH_DEFAULT
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            db_path=os.getenv("YOU_FIRST_DB_PATH", DB_PATH_DEFAULT),
            log_level=os.getenv("YOU_FIRST_LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("YOU_FIRST_LOG_FILE") or None,
        )


def get_settings() -> Settings:
    return Settings.from_env()
