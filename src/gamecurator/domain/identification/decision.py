"""Decision gate: turn a scored candidate list into accept, escalate or reject.

Responsibilities of this stage:
- drop candidates below the ask threshold
- sort the rest by score, ties keeping discovery order
- auto-accept at or above the accept threshold
- otherwise escalate the top suggestions to a confirmation provider
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from gamecurator.domain.model import DecisionStatus

if TYPE_CHECKING:
    from collections.abc import Sequence

    from gamecurator.domain.model import ScoredCode
    from gamecurator.domain.ports.confirmation import ConfirmationProvider

log = getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class Accepted:
    """A candidate was chosen, automatically or by a human."""

    candidate: ScoredCode
    escalated: bool = False
    status: Literal[DecisionStatus.ACCEPTED] = DecisionStatus.ACCEPTED


@dataclass(frozen=True, slots=True, kw_only=True)
class Rejected:
    """A human declined every suggestion; the directory is excluded from now on."""

    reason: str | None = None
    status: Literal[DecisionStatus.REJECTED] = DecisionStatus.REJECTED


@dataclass(frozen=True, slots=True, kw_only=True)
class NoCandidates:
    """Nothing reached the ask threshold; the directory is left untouched."""

    reason: str | None = None
    status: Literal[DecisionStatus.NO_CANDIDATES] = DecisionStatus.NO_CANDIDATES


type Decision = Accepted | Rejected | NoCandidates


@dataclass(frozen=True, slots=True)
class DecisionThresholds:
    ask: int = 1
    accept: int = 4
    max_suggestions: int = 5

    def __post_init__(self) -> None:
        if self.ask > self.accept:
            raise ValueError(
                f"Ask threshold ({self.ask}) must not exceed accept threshold ({self.accept})"
            )
        if self.max_suggestions < 1:
            raise ValueError("At least one suggestion must be shown when escalating")

    @classmethod
    def without_asking(cls, *, accept: int, max_suggestions: int = 5) -> DecisionThresholds:
        """Thresholds that never escalate: anything below ``accept`` is dropped."""

        return cls(ask=accept, accept=accept, max_suggestions=max_suggestions)


def rank_candidates(scored: Sequence[ScoredCode], *, ask: int) -> list[ScoredCode]:
    """Return candidates at or above ``ask``, best first; ``sorted`` keeps ties stable."""

    eligible = [candidate for candidate in scored if candidate.score >= ask]
    return sorted(eligible, key=lambda candidate: candidate.score, reverse=True)


class DecisionGate:
    def __init__(
        self,
        thresholds: DecisionThresholds,
        confirmation: ConfirmationProvider,
    ) -> None:
        self.thresholds = thresholds
        self._confirmation = confirmation

    def decide(self, scored: Sequence[ScoredCode], *, subject: str) -> Decision:
        ranked = rank_candidates(scored, ask=self.thresholds.ask)
        if not ranked:
            return NoCandidates(reason=f"no candidate scored {self.thresholds.ask} or more")

        best = ranked[0]
        if best.score >= self.thresholds.accept:
            log.debug("Auto-accepting %s for %s (score %s)", best.code, subject, best.score)
            return Accepted(candidate=best.mark_accepted())

        suggestions = ranked[: self.thresholds.max_suggestions]
        log.info("Escalating %s candidate(s) for %s", len(suggestions), subject)
        decision = self._confirmation.confirm(suggestions, subject=subject)
        match decision:
            case Accepted(candidate=candidate):
                return Accepted(candidate=candidate.mark_accepted(), escalated=True)
            case Rejected() | NoCandidates():
                return decision
