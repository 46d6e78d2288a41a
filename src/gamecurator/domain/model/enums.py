"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Language(StrEnum):
    """Languages a game record carries metadata for."""

    EN = "en"
    JP = "jp"


class CanonicalIdField(StrEnum):
    """Catalog field used to carry a record's canonical id next to the frontend id."""

    SORT_TITLE = "SortTitle"
    SOURCE = "Source"
    STATUS = "Status"
    CUSTOM_FIELD = "CustomField"


class DecisionStatus(StrEnum):
    """Outcome of the decision gate for one directory."""

    ACCEPTED = "accepted"
    REJECTED = "rejected"
    NO_CANDIDATES = "no_candidates"
