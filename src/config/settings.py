"""Application settings for the match alignment checker.

This module centralises configuration for the SQLite store, the external
alignment notification API and the scheduler timings. Environment variables
are loaded from a ``.env`` file using ``python-dotenv`` and exposed through a
Pydantic settings object.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load environment variables from a .env file if present
load_dotenv()

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
DEFAULT_DB_PATH = Path("data") / "football.sqlite3"
REQUEST_TIMEOUT = 10.0  # seconds
CHECK_INTERVAL_SECONDS = 60.0
LOOKAHEAD_MINUTES = 5.0
NOTIFY_COOLDOWN_SECONDS = 24 * 60 * 60.0


class Settings(BaseModel):
    """Immutable settings object used across the application."""

    base_url: str
    headers: Mapping[str, str]
    timeout: float = REQUEST_TIMEOUT
    db_path: Path = DEFAULT_DB_PATH
    check_interval_seconds: float = CHECK_INTERVAL_SECONDS
    lookahead_minutes: float = LOOKAHEAD_MINUTES
    notify_cooldown_seconds: float = NOTIFY_COOLDOWN_SECONDS

    model_config = ConfigDict(frozen=True)


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise RuntimeError(f"{name} must be positive, got {raw!r}")
    return value


def _build_settings() -> Settings:
    """Construct the ``Settings`` instance based on environment variables."""

    base_url = os.getenv("ALIGNMENT_API_BASE_URL", "").strip()
    if not base_url:
        raise RuntimeError("ALIGNMENT_API_BASE_URL is required for alignment notifications")

    headers: dict[str, str] = {"Accept": "application/json"}
    api_key = os.getenv("ALIGNMENT_API_KEY")
    if api_key:
        headers["x-api-key"] = api_key

    return Settings(
        base_url=base_url,
        headers=headers,
        timeout=_positive_float("ALIGNMENT_API_TIMEOUT", REQUEST_TIMEOUT),
        db_path=Path(os.getenv("DB_PATH") or DEFAULT_DB_PATH),
        check_interval_seconds=_positive_float("CHECK_INTERVAL_SECONDS", CHECK_INTERVAL_SECONDS),
        lookahead_minutes=_positive_float("LOOKAHEAD_MINUTES", LOOKAHEAD_MINUTES),
        notify_cooldown_seconds=_positive_float("NOTIFY_COOLDOWN_SECONDS", NOTIFY_COOLDOWN_SECONDS),
    )


# Public settings instance
settings = _build_settings()
