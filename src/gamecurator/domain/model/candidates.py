"""Candidate records and per-directory resolution state."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass(frozen=True, slots=True)
class CandidateRecord:
    """One hit returned by a candidate locator for a search term."""

    code: str
    source_id: str
    display_name: str | None = None


@dataclass(frozen=True, slots=True)
class ScoredCode:
    """Accumulated score for one candidate code within a single scoring run."""

    code: str
    score: int
    source_id: str
    display_name: str | None = None
    accepted: bool = False

    def mark_accepted(self) -> ScoredCode:
        return replace(self, accepted=True)


@dataclass(frozen=True, slots=True)
class LocatorCodes:
    """A single locator's contribution for one directory."""

    extracted_code: str = ""
    found_codes: tuple[CandidateRecord, ...] = ()


@dataclass(slots=True, kw_only=True)
class ResolutionState:
    """Content of the per-directory state file.

    ``codes`` is keyed by locator name. ``no_match`` marks a directory a human
    already rejected; it is skipped until the flag is cleared by hand.
    """

    file: str
    codes: dict[str, LocatorCodes] = field(default_factory=dict)
    no_match: bool = False
