"""Identification of unsorted directories: gather, score, decide, file."""

from __future__ import annotations

from .decision import (
    Accepted,
    Decision,
    DecisionGate,
    DecisionThresholds,
    NoCandidates,
    Rejected,
    rank_candidates,
)
from .filing import FiledDirectory, file_directory
from .gathering import GatherResult, gather_candidates, gather_candidates_async
from .organize import OrganizeResult, organize_directories, score_state
from .scoring import (
    DEFAULT_WEIGHTS,
    ScoreWeights,
    merge_scored_codes,
    score_codes,
    strip_tags_and_metadata,
)

__all__ = [
    "DEFAULT_WEIGHTS",
    "Accepted",
    "Decision",
    "DecisionGate",
    "DecisionThresholds",
    "FiledDirectory",
    "GatherResult",
    "NoCandidates",
    "OrganizeResult",
    "Rejected",
    "ScoreWeights",
    "file_directory",
    "gather_candidates",
    "gather_candidates_async",
    "merge_scored_codes",
    "organize_directories",
    "rank_candidates",
    "score_codes",
    "score_state",
    "strip_tags_and_metadata",
]
