from __future__ import annotations

import pytest

from gamecurator.domain.identification import (
    Accepted,
    DecisionGate,
    DecisionThresholds,
    NoCandidates,
    Rejected,
    rank_candidates,
)
from gamecurator.domain.model import DecisionStatus, ScoredCode
from tests.helpers.locators import ScriptedConfirmation


def _scored(*pairs: tuple[str, int]) -> list[ScoredCode]:
    return [ScoredCode(code=code, score=score, source_id="dlsite") for code, score in pairs]


def test_thresholds_reject_ask_above_accept() -> None:
    with pytest.raises(ValueError, match="must not exceed"):
        DecisionThresholds(ask=5, accept=4)


def test_without_asking_collapses_thresholds() -> None:
    thresholds = DecisionThresholds.without_asking(accept=4)

    assert thresholds.ask == thresholds.accept == 4


def test_rank_candidates_sorts_stably() -> None:
    ranked = rank_candidates(_scored(("A", 2), ("B", 5), ("C", 2), ("D", 0)), ask=1)

    assert [item.code for item in ranked] == ["B", "A", "C"]


def test_no_candidates_when_nothing_reaches_ask() -> None:
    confirmation = ScriptedConfirmation()
    gate = DecisionGate(DecisionThresholds(ask=2, accept=4), confirmation)

    decision = gate.decide(_scored(("A", 1)), subject="dir")

    assert isinstance(decision, NoCandidates)
    assert decision.status is DecisionStatus.NO_CANDIDATES
    assert confirmation.asked == []


def test_empty_input_has_no_candidates() -> None:
    gate = DecisionGate(DecisionThresholds(), ScriptedConfirmation())

    assert isinstance(gate.decide([], subject="dir"), NoCandidates)


def test_best_candidate_at_accept_threshold_is_accepted_without_asking() -> None:
    confirmation = ScriptedConfirmation()
    gate = DecisionGate(DecisionThresholds(ask=1, accept=4), confirmation)

    decision = gate.decide(_scored(("A", 2), ("B", 4)), subject="dir")

    assert isinstance(decision, Accepted)
    assert decision.candidate.code == "B"
    assert decision.candidate.accepted is True
    assert decision.escalated is False
    assert confirmation.asked == []


def test_escalation_offers_ranked_candidates_up_to_limit() -> None:
    confirmation = ScriptedConfirmation(1)
    gate = DecisionGate(DecisionThresholds(ask=1, accept=4, max_suggestions=2), confirmation)

    decision = gate.decide(_scored(("A", 1), ("B", 3), ("C", 2)), subject="dir")

    assert confirmation.asked == [("dir", ["B", "C"])]
    assert isinstance(decision, Accepted)
    assert decision.candidate.code == "C"
    assert decision.candidate.accepted is True
    assert decision.escalated is True


def test_declined_escalation_is_a_rejection_value() -> None:
    gate = DecisionGate(DecisionThresholds(ask=1, accept=4), ScriptedConfirmation(None))

    decision = gate.decide(_scored(("A", 1), ("B", 1)), subject="dir")

    assert isinstance(decision, Rejected)
    assert decision.status is DecisionStatus.REJECTED


def test_raising_accept_threshold_never_accepts_more() -> None:
    scored = _scored(("A", 3), ("B", 5), ("C", 7))
    accepted_codes: list[set[str]] = []
    for accept in range(1, 10):
        gate = DecisionGate(
            DecisionThresholds.without_asking(accept=accept), ScriptedConfirmation()
        )
        decision = gate.decide(scored, subject="dir")
        accepted = {decision.candidate.code} if isinstance(decision, Accepted) else set()
        accepted_codes.append(accepted)

    for looser, stricter in zip(accepted_codes, accepted_codes[1:], strict=False):
        assert stricter <= looser
