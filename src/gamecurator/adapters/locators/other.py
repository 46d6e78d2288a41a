"""Locator for hand-curated ``other<N>`` ids that no catalog site knows."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from gamecurator.domain.identification import strip_tags_and_metadata
from gamecurator.domain.model import GameMetadata, Language

from .base import ScoringLocator

if TYPE_CHECKING:
    from pathlib import Path

    from gamecurator.domain.model import LocatorCodes, ScoredCode

_OTHER_ID: Final = re.compile(r"^other\d+$", re.IGNORECASE)


class OtherLocator(ScoringLocator):
    name = "other"

    def score_codes(
        self,
        codes: LocatorCodes,  # noqa: ARG002
        original_name: str,  # noqa: ARG002
    ) -> list[ScoredCode]:
        return []

    def should_use(self, canonical_id: str) -> bool:
        return _OTHER_ID.match(canonical_id) is not None

    async def fetch_metadata(
        self,
        canonical_id: str,  # noqa: ARG002
        directory: Path | None = None,
    ) -> GameMetadata | None:
        """Name the game after the single folder inside its library directory."""

        if directory is None:
            return None
        title = strip_tags_and_metadata(directory.name)
        if not title:
            return None
        return GameMetadata(source_name=self.name, name_by_language={Language.EN: title})
