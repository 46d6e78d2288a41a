"""Settings for gathering candidates and organizing unsorted directories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .env import env_bool, env_int, env_path
from .errors import ConfigurationError

if TYPE_CHECKING:
    from pathlib import Path

DEFAULT_CONCURRENCY = 5


@dataclass(frozen=True, slots=True)
class IdentificationConfig:
    unsorted_dir: Path
    target_dir: Path
    should_ask: bool = True
    min_score_to_ask: int = 1
    min_score_to_accept: int = 4
    max_results_to_suggest: int = 5
    concurrency: int = DEFAULT_CONCURRENCY

    def __post_init__(self) -> None:
        if self.min_score_to_ask > self.min_score_to_accept:
            raise ConfigurationError(
                "GAMECURATOR_MIN_SCORE_TO_ASK must not exceed GAMECURATOR_MIN_SCORE_TO_ACCEPT"
            )


def get_identification_config() -> IdentificationConfig:
    return IdentificationConfig(
        unsorted_dir=env_path("GAMECURATOR_UNSORTED_DIR"),
        target_dir=env_path("GAMECURATOR_TARGET_DIR"),
        should_ask=env_bool("GAMECURATOR_SHOULD_ASK", default=True),
        min_score_to_ask=env_int("GAMECURATOR_MIN_SCORE_TO_ASK", default=1, minimum=0),
        min_score_to_accept=env_int("GAMECURATOR_MIN_SCORE_TO_ACCEPT", default=4, minimum=0),
        max_results_to_suggest=env_int(
            "GAMECURATOR_MAX_RESULTS_TO_SUGGEST", default=5, minimum=1
        ),
        concurrency=env_int("GAMECURATOR_CONCURRENCY", default=DEFAULT_CONCURRENCY, minimum=1),
    )
