"""Getchu locator: claims and extracts numeric ids."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from .base import EXTRACTION_ONLY_WEIGHTS, ScoringLocator

if TYPE_CHECKING:
    from gamecurator.domain.identification import ScoreWeights

_GETCHU_CODE: Final = re.compile(r"(?<![A-Za-z\d])\d{6,8}(?!\d)")
_GETCHU_ID: Final = re.compile(r"^\d{6,8}$")


class GetchuLocator(ScoringLocator):
    """Getchu has no JSON search; ids are only taken from the directory name.

    A bare digit run is as likely a date as a getchu id, so the extracted id is
    recorded in the state file but earns no score by default.
    """

    name = "getchu"

    def __init__(self, *, weights: ScoreWeights = EXTRACTION_ONLY_WEIGHTS) -> None:
        super().__init__(weights=weights)

    def extract_code(self, name: str) -> str:
        match = _GETCHU_CODE.search(name)
        return match.group(0) if match else ""

    def should_use(self, canonical_id: str) -> bool:
        return _GETCHU_ID.match(canonical_id) is not None
