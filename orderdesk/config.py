# orderdesk/config.py
from __future__ import annotations

import logging
import os
import sys
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load .env locally (no-op when the file is absent)
load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_MENUS_DIR = PROJECT_ROOT / "data"


# -------------------
# Config (env-driven)
# -------------------
class Settings(BaseModel):
    match_threshold: float = Field(
        default_factory=lambda: float(os.getenv("VOICE_MATCH_THRESHOLD", "0.7"))
    )
    suggestion_count: int = Field(
        default_factory=lambda: int(os.getenv("VOICE_SUGGESTIONS", "3")), ge=1
    )
    search_count: int = Field(
        default_factory=lambda: int(os.getenv("VOICE_SEARCH_RESULTS", "5")), ge=1
    )

    currency_symbol: str = Field(default_factory=lambda: os.getenv("CURRENCY_SYMBOL", "₹"))
    menus_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("MENUS_DIR", str(DEFAULT_MENUS_DIR))).resolve()
    )
    log_level: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").strip().upper())

    @field_validator("match_threshold")
    @classmethod
    def _threshold_in_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError("match_threshold must be between 0 and 1")
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


def setup_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or get_settings().log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
