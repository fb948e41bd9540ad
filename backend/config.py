"""
SimpleGrid configuration — all environment variables in one place.

Read from environment at runtime. Grid defaults apply to every grid the
backend builds; a grid's own builder calls still win.
"""

from __future__ import annotations

import os


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}") from None


def _int_list_env(name: str, default: str) -> tuple[int, ...]:
    raw = os.environ.get(name, default)
    try:
        return tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        raise RuntimeError(f"{name} must be a comma-separated list of integers, got {raw!r}") from None


class Settings:
    """Application settings from environment variables."""

    # Application
    ENVIRONMENT: str = os.environ.get("ENVIRONMENT", "development")
    LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")

    # Grid defaults
    GRID_MAX_ROWS: int = _int_env("GRID_MAX_ROWS", 500)
    GRID_ROWS_PER_PAGE: int = _int_env("GRID_ROWS_PER_PAGE", 10)
    GRID_ROWS_PER_PAGE_OPTIONS: tuple[int, ...] = _int_list_env("GRID_ROWS_PER_PAGE_OPTIONS", "10,25,50")
    GRID_NO_RECORDS_MESSAGE: str = os.environ.get("GRID_NO_RECORDS_MESSAGE", "No records found.")


# Singleton instance
settings = Settings()

if settings.GRID_MAX_ROWS < 1:
    raise RuntimeError("GRID_MAX_ROWS must be at least 1")
if settings.GRID_ROWS_PER_PAGE < 1:
    raise RuntimeError("GRID_ROWS_PER_PAGE must be at least 1")
if any(rows < 1 for rows in settings.GRID_ROWS_PER_PAGE_OPTIONS):
    raise RuntimeError("GRID_ROWS_PER_PAGE_OPTIONS values must be at least 1")
