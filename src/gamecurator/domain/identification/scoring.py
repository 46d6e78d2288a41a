"""Multi-signal scoring of candidate codes against a noisy directory name.

Responsibilities of this stage:
- strip tags and version suffixes from the directory name
- award additive weights per signal to each candidate code
- keep discovery order (extracted code first, then candidates as found)

Sorting and thresholds belong to the decision gate.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final

from gamecurator.domain.model import ScoredCode

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gamecurator.domain.model import CandidateRecord, LocatorCodes

_BRACKETS: Final = re.compile(r"\[[^\]]*\]")
_PARENTHESES: Final = re.compile(r"\([^)]*\)")
_VERSION_SUFFIX: Final = re.compile(r"\bver(?:sion)?(?=[\s.\d_-]|$).*", re.IGNORECASE)
_WHITESPACE: Final = re.compile(r"\s+")


@dataclass(frozen=True, slots=True)
class ScoreWeights:
    """Weight awarded per signal. Several signals may fire for one code."""

    result_exists: int = 1
    sole_result: int = 1
    extracted_code: int = 3
    extracted_code_corroborated: int = 3
    exact_match: int = 3
    no_space_exact_match: int = 3
    candidate_contains_name: int = 2
    name_contains_candidate: int = 2
    no_space_candidate_contains_name: int = 2
    no_space_name_contains_candidate: int = 2


DEFAULT_WEIGHTS: Final = ScoreWeights()


def strip_tags_and_metadata(name: str) -> str:
    """Remove ``[...]``, ``(...)`` and version suffixes, collapsing whitespace."""

    stripped = _BRACKETS.sub("", name)
    stripped = _PARENTHESES.sub("", stripped)
    stripped = _VERSION_SUFFIX.sub("", stripped)
    return _WHITESPACE.sub(" ", stripped).strip()


def _without_spaces(value: str) -> str:
    return _WHITESPACE.sub("", value)


class _ScoreSheet:
    """Insertion-ordered accumulator; the first non-empty display name wins."""

    def __init__(self) -> None:
        self._entries: dict[str, ScoredCode] = {}

    def award(
        self,
        code: str,
        weight: int,
        *,
        source_id: str,
        display_name: str | None = None,
    ) -> None:
        existing = self._entries.get(code)
        if existing is None:
            self._entries[code] = ScoredCode(
                code=code,
                score=weight,
                source_id=source_id,
                display_name=display_name or None,
            )
            return
        self._entries[code] = ScoredCode(
            code=code,
            score=existing.score + weight,
            source_id=existing.source_id,
            display_name=existing.display_name or display_name or None,
            accepted=existing.accepted,
        )

    def merge(self, scored: ScoredCode) -> None:
        self.award(
            scored.code,
            scored.score,
            source_id=scored.source_id,
            display_name=scored.display_name,
        )

    def results(self) -> list[ScoredCode]:
        return list(self._entries.values())


def score_codes(
    codes: LocatorCodes,
    original_name: str,
    *,
    source_id: str,
    weights: ScoreWeights = DEFAULT_WEIGHTS,
) -> list[ScoredCode]:
    """Score one locator's candidates for one directory.

    Pure and deterministic: identical inputs yield identical lists, in the
    same order. Candidates without a display name still earn the existence
    and sole-result weights.
    """

    sheet = _ScoreSheet()
    found = codes.found_codes
    extracted = codes.extracted_code

    if extracted and weights.extracted_code:
        sheet.award(extracted, weights.extracted_code, source_id=source_id)
        if any(candidate.code == extracted for candidate in found):
            sheet.award(extracted, weights.extracted_code_corroborated, source_id=source_id)

    stripped_name = strip_tags_and_metadata(original_name).lower()
    sole = len(found) == 1
    for candidate in found:
        for weight in _candidate_weights(candidate, stripped_name, sole=sole, weights=weights):
            sheet.award(
                candidate.code,
                weight,
                source_id=source_id,
                display_name=candidate.display_name,
            )

    return sheet.results()


def _candidate_weights(
    candidate: CandidateRecord,
    stripped_name: str,
    *,
    sole: bool,
    weights: ScoreWeights,
) -> list[int]:
    awarded = [weights.result_exists]
    if sole:
        awarded.append(weights.sole_result)

    candidate_name = (candidate.display_name or "").strip().lower()
    if not candidate_name or not stripped_name:
        return awarded

    if candidate_name == stripped_name:
        awarded.append(weights.exact_match)
    if stripped_name in candidate_name:
        awarded.append(weights.candidate_contains_name)
    if candidate_name in stripped_name:
        awarded.append(weights.name_contains_candidate)

    compact_candidate = _without_spaces(candidate_name)
    compact_name = _without_spaces(stripped_name)
    if compact_candidate == compact_name:
        awarded.append(weights.no_space_exact_match)
    if compact_name in compact_candidate:
        awarded.append(weights.no_space_candidate_contains_name)
    if compact_candidate in compact_name:
        awarded.append(weights.no_space_name_contains_candidate)
    return awarded


def merge_scored_codes(groups: Iterable[Iterable[ScoredCode]]) -> list[ScoredCode]:
    """Accumulate scores of the same code across locators, keeping first-seen order."""

    sheet = _ScoreSheet()
    for group in groups:
        for scored in group:
            sheet.merge(scored)
    return sheet.results()
