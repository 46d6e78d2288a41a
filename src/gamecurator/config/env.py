"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = os.getenv(name)
        if value is None or not value.strip():
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def _optional(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_bool(name: str, *, default: bool) -> bool:
    value = _optional(name)
    if value is None:
        return default
    lowered = value.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean, got {value!r}")


def env_int(name: str, *, default: int, minimum: int | None = None) -> int:
    value = _optional(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}") from exc
    if minimum is not None and parsed < minimum:
        raise ConfigurationError(f"{name} must be at least {minimum}, got {parsed}")
    return parsed


def env_str(name: str, *, default: str) -> str:
    return _optional(name) or default


def env_list(name: str, *, default: Sequence[str], separator: str = ",") -> tuple[str, ...]:
    value = _optional(name)
    if value is None:
        return tuple(default)
    return tuple(item.strip() for item in value.split(separator) if item.strip())


def env_path(name: str) -> Path:
    """Return a required directory path from the environment."""

    return Path(require_env_vars((name,))[name]).expanduser()


def env_paths(name: str) -> tuple[Path, ...]:
    """Return ``os.pathsep``-separated required paths."""

    raw = require_env_vars((name,))[name]
    paths = tuple(Path(item).expanduser() for item in raw.split(os.pathsep) if item.strip())
    if not paths:
        raise MissingConfigurationError(f"Missing configuration for: {name}")
    return paths
