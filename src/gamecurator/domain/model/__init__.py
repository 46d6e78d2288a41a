"""Public domain model surface."""

from __future__ import annotations

from gamecurator.domain.model.candidates import (
    CandidateRecord,
    LocatorCodes,
    ResolutionState,
    ScoredCode,
)
from gamecurator.domain.model.catalog import (
    ENTRY_ID_FIELD,
    CatalogDocument,
    CatalogEntry,
    CustomField,
)
from gamecurator.domain.model.enums import CanonicalIdField, DecisionStatus, Language
from gamecurator.domain.model.game import GameMetadata, GameRecord

__all__ = [
    "ENTRY_ID_FIELD",
    "CandidateRecord",
    "CanonicalIdField",
    "CatalogDocument",
    "CatalogEntry",
    "CustomField",
    "DecisionStatus",
    "GameMetadata",
    "GameRecord",
    "Language",
    "LocatorCodes",
    "ResolutionState",
    "ScoredCode",
]
