# src/asana_tasks/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole client.
- No secrets required at import time (the token is only checked when a client is built).
- Malformed numbers fall back to defaults instead of crashing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "ASANA"

DEFAULT_BASE_URL = "https://app.asana.com/api/1.0"

# The API rejects page sizes outside 1..100.
MIN_PAGE_SIZE = 1
MAX_PAGE_SIZE = 100


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_opt_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    s = raw.strip()
    if not s:
        return default
    try:
        return float(s)
    except ValueError:
        return default


def _env_opt_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Auth / endpoint ----
    access_token: Optional[str]
    base_url: str

    # ---- Transport ----
    timeout_seconds: float
    page_size: int
    item_limit: Optional[int]
    max_retries: int

    # ---- Logging ----
    log_level: str
    log_dir: Optional[Path]

    @staticmethod
    def from_env() -> "Settings":
        access_token = (_env(_k("ACCESS_TOKEN")) or "").strip() or None
        base_url = (_env(_k("BASE_URL"), DEFAULT_BASE_URL).strip() or DEFAULT_BASE_URL).rstrip("/")

        timeout_seconds = _env_float(_k("TIMEOUT_SECONDS"), 30.0)
        if timeout_seconds <= 0:
            timeout_seconds = 30.0

        page_size = _env_int(_k("PAGE_SIZE"), 50)
        page_size = min(MAX_PAGE_SIZE, max(MIN_PAGE_SIZE, page_size))

        item_limit = _env_opt_int(_k("ITEM_LIMIT"))
        if item_limit is not None and item_limit <= 0:
            item_limit = None

        max_retries = max(0, _env_int(_k("MAX_RETRIES"), 3))

        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_dir = _env_opt_path(_k("LOG_DIR"))

        return Settings(
            access_token=access_token,
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            page_size=page_size,
            item_limit=item_limit,
            max_retries=max_retries,
            log_level=log_level,
            log_dir=log_dir,
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    """Load .env (without overriding real env vars) and build Settings once."""
    global _settings
    if _settings is None:
        load_dotenv(override=False)
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Forget the cached Settings (tests, or after changing the environment)."""
    global _settings
    _settings = None
