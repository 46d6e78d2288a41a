"""Application configuration helpers."""

from __future__ import annotations

from .dlsite import DlsiteConfig, get_dlsite_config
from .env import env_bool, env_int, env_list, env_path, env_paths, env_str, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .identification import IdentificationConfig, get_identification_config
from .launchbox import LaunchBoxConfig, get_launchbox_config
from .library import LibraryConfig, get_library_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "DlsiteConfig",
    "IdentificationConfig",
    "LaunchBoxConfig",
    "LibraryConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "env_bool",
    "env_int",
    "env_list",
    "env_path",
    "env_paths",
    "env_str",
    "get_database_config",
    "get_dlsite_config",
    "get_identification_config",
    "get_launchbox_config",
    "get_library_config",
    "get_storage_config",
    "require_env_vars",
]
