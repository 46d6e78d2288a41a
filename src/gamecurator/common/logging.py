"""Shared logging helpers for gamecurator."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "GAMECURATOR_LOG_LEVEL"


def level_from_env(default: int = logging.INFO) -> int:
    """Resolve ``GAMECURATOR_LOG_LEVEL`` (a name such as ``DEBUG``) to a level number."""

    raw = os.getenv(LOG_LEVEL_ENV)
    if not raw:
        return default
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    if level is None:
        raise ValueError(f"Unknown log level in {LOG_LEVEL_ENV}: {raw}")
    return level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: the level
    defaults to ``GAMECURATOR_LOG_LEVEL`` or INFO and the format is terse enough for
    CLI output. Pass ``force=True`` to reconfigure during tests or specialised entry
    points.
    """

    logging.basicConfig(
        level=level if level is not None else level_from_env(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
