"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _normalize_prefix(raw: str) -> str:
    """
    Turn ``api/``, ``/api`` or ``/api/`` into ``/api``; ``/`` or blank into ``""``.
    """

    stripped = raw.strip().strip("/")
    return f"/{stripped}" if stripped else ""


@dataclass(frozen=True)
class AppSettings:
    """
    Top-level API settings.
    """

    title: str = "KPI API"
    version: str = "1.0.0"
    api_prefix: str = ""
    log_level: str = "INFO"
    check_schema_on_startup: bool = True


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Return cached application settings from environment variables.
    """

    return AppSettings(
        api_prefix=_normalize_prefix(_get_str_env("API_PREFIX", "")),
        log_level=_get_str_env("LOG_LEVEL", "INFO").upper(),
        check_schema_on_startup=not _get_bool_env("KPI_SKIP_SCHEMA_CHECK", False),
    )
