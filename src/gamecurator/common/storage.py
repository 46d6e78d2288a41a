"""Data storage helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gamecurator.config.storage import get_database_config, get_storage_config

if TYPE_CHECKING:
    from pathlib import Path


def get_data_dir() -> Path:
    """Return the directory where gamecurator stores persistent data."""

    return get_storage_config().resolve_data_dir()


def ensure_data_dir() -> Path:
    """Ensure the data directory exists and return it."""

    return get_storage_config().ensure_data_dir()


def get_database_uri() -> str:
    """Compute the database URI, respecting ``DATABASE_URI`` overrides."""

    return get_database_config().uri


def get_http_cache_path() -> Path:
    """Return the sqlite file backing the persistent HTTP cache."""

    return get_storage_config().http_cache_path()
