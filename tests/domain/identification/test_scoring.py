from __future__ import annotations

import pytest

from gamecurator.domain.identification import (
    DEFAULT_WEIGHTS,
    ScoreWeights,
    merge_scored_codes,
    score_codes,
    strip_tags_and_metadata,
)
from gamecurator.domain.model import CandidateRecord, LocatorCodes, ScoredCode


def _codes(*found: tuple[str, str | None], extracted: str = "") -> LocatorCodes:
    return LocatorCodes(
        extracted_code=extracted,
        found_codes=tuple(
            CandidateRecord(code=code, source_id="dlsite", display_name=name)
            for code, name in found
        ),
    )


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Amazing Game [Maker] (RJ123456)", "Amazing Game"),
        ("[Circle]  Some   Title  ", "Some Title"),
        ("Title ver1.02", "Title"),
        ("Title Version 2", "Title"),
        ("Title (eng) ver.1.1", "Title"),
        ("Silver Lining", "Silver Lining"),
        ("", ""),
    ],
)
def test_strip_tags_and_metadata(raw: str, expected: str) -> None:
    assert strip_tags_and_metadata(raw) == expected


def test_empty_codes_score_nothing() -> None:
    assert score_codes(LocatorCodes(), "Anything", source_id="dlsite") == []


def test_extracted_code_alone() -> None:
    scored = score_codes(_codes(extracted="RJ123456"), "Game (RJ123456)", source_id="dlsite")

    assert scored == [ScoredCode(code="RJ123456", score=3, source_id="dlsite")]


def test_exact_single_hit_corroborating_extracted_code() -> None:
    scored = score_codes(
        _codes(("RJ123456", "Amazing Game"), extracted="RJ123456"),
        "Amazing Game [Maker] (RJ123456)",
        source_id="dlsite",
    )

    # extracted 3 + corroborated 3 + exists 1 + sole 1 + exact 3 + both contains 2+2
    # + no-space exact 3 + both no-space contains 2+2
    assert len(scored) == 1
    assert scored[0].code == "RJ123456"
    assert scored[0].score == 22
    assert scored[0].display_name == "Amazing Game"


def test_sole_result_bonus_only_for_single_hit() -> None:
    single = score_codes(_codes(("RJ1", None)), "Unrelated", source_id="dlsite")
    double = score_codes(_codes(("RJ1", None), ("RJ2", None)), "Unrelated", source_id="dlsite")

    assert [item.score for item in single] == [2]
    assert [item.score for item in double] == [1, 1]


def test_similar_match_in_both_directions() -> None:
    longer = score_codes(_codes(("RJ1", "Amazing Game Deluxe")), "Amazing Game", source_id="d")
    shorter = score_codes(_codes(("RJ1", "Amazing")), "Amazing Game", source_id="d")

    # exists + sole + candidate contains name + no-space variant
    assert longer[0].score == 1 + 1 + 2 + 2
    # exists + sole + name contains candidate + no-space variant
    assert shorter[0].score == 1 + 1 + 2 + 2


def test_no_space_match_ignores_whitespace_and_case() -> None:
    scored = score_codes(
        _codes(("RJ1", "AMAZING  GAME"), ("RJ2", None)),
        "amazinggame",
        source_id="d",
    )

    assert scored[0].score == 1 + 3 + 2 + 2
    assert scored[1].score == 1


def test_scoring_is_deterministic_and_keeps_discovery_order() -> None:
    codes = _codes(("RJ2", "Other"), ("RJ1", "Amazing"), extracted="RJ1")

    first = score_codes(codes, "Amazing", source_id="dlsite")
    second = score_codes(codes, "Amazing", source_id="dlsite")

    assert first == second
    assert [item.code for item in first] == ["RJ1", "RJ2"]


def test_custom_weights_apply() -> None:
    weights = ScoreWeights(result_exists=10, sole_result=0)

    scored = score_codes(_codes(("RJ1", None)), "x", source_id="d", weights=weights)

    assert scored[0].score == 10
    assert DEFAULT_WEIGHTS.result_exists == 1


def test_merge_accumulates_across_locators() -> None:
    merged = merge_scored_codes(
        [
            [ScoredCode(code="RJ1", score=3, source_id="dlsite", display_name="Game")],
            [
                ScoredCode(code="123456", score=3, source_id="getchu"),
                ScoredCode(code="RJ1", score=2, source_id="getchu", display_name="Other"),
            ],
        ]
    )

    assert merged == [
        ScoredCode(code="RJ1", score=5, source_id="dlsite", display_name="Game"),
        ScoredCode(code="123456", score=3, source_id="getchu"),
    ]
