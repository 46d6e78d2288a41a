"""Shared behaviour for candidate locators."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Final

from gamecurator.domain.identification import DEFAULT_WEIGHTS, score_codes

if TYPE_CHECKING:
    from pathlib import Path

    from gamecurator.domain.identification import ScoreWeights
    from gamecurator.domain.model import CandidateRecord, GameMetadata, LocatorCodes, ScoredCode

# Bare-pattern ids also turn up in dates and file names; extracting one earns nothing.
EXTRACTION_ONLY_WEIGHTS: Final = replace(
    DEFAULT_WEIGHTS, extracted_code=0, extracted_code_corroborated=0
)


class ScoringLocator:
    """Locator defaults: weighted scoring, no search, no metadata, nothing to close."""

    name: str = ""

    def __init__(self, *, weights: ScoreWeights = DEFAULT_WEIGHTS) -> None:
        self.weights = weights

    async def search(self, name: str) -> list[CandidateRecord]:  # noqa: ARG002
        return []

    def extract_code(self, name: str) -> str:  # noqa: ARG002
        return ""

    def score_codes(self, codes: LocatorCodes, original_name: str) -> list[ScoredCode]:
        return score_codes(codes, original_name, source_id=self.name, weights=self.weights)

    def should_use(self, canonical_id: str) -> bool:  # noqa: ARG002
        return False

    async def fetch_metadata(
        self,
        canonical_id: str,  # noqa: ARG002
        directory: Path | None = None,  # noqa: ARG002
    ) -> GameMetadata | None:
        return None

    async def aclose(self) -> None:
        return None
