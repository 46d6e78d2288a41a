"""DMM locator: claims ``maker_123``-style product ids."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from .base import EXTRACTION_ONLY_WEIGHTS, ScoringLocator

if TYPE_CHECKING:
    from gamecurator.domain.identification import ScoreWeights

_DMM_CODE: Final = re.compile(r"(?<![A-Za-z\d_])[a-z]+_[a-z]*\d+(?![A-Za-z\d_])", re.IGNORECASE)
_DMM_ID: Final = re.compile(r"^[a-z]+_[a-z]*\d+$", re.IGNORECASE)


class DmmLocator(ScoringLocator):
    """Library folders named by DMM id are claimed; there is no search or metadata."""

    name = "dmm"

    def __init__(self, *, weights: ScoreWeights = EXTRACTION_ONLY_WEIGHTS) -> None:
        super().__init__(weights=weights)

    def extract_code(self, name: str) -> str:
        match = _DMM_CODE.search(name)
        return match.group(0) if match else ""

    def should_use(self, canonical_id: str) -> bool:
        return _DMM_ID.match(canonical_id) is not None
