"""Drive scoring, gating and filing over the unsorted directories, one at a time."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from gamecurator.domain.identification.decision import Accepted, NoCandidates, Rejected
from gamecurator.domain.identification.filing import file_directory
from gamecurator.domain.identification.gathering import list_unsorted_directories
from gamecurator.domain.identification.scoring import merge_scored_codes
from gamecurator.domain.ports import NullProgress, StateFileError

if TYPE_CHECKING:
    from pathlib import Path

    from gamecurator.domain.identification.decision import DecisionGate
    from gamecurator.domain.model import ResolutionState, ScoredCode
    from gamecurator.domain.ports import LocatorRegistry, ProgressReporter, ResolutionStateStore

log = getLogger(__name__)


@dataclass(slots=True)
class OrganizeResult:
    examined: int = 0
    skipped: int = 0
    filed: int = 0
    duplicates: int = 0
    escalated: int = 0
    rejected: int = 0
    undecided: int = 0
    failed: int = 0


def score_state(state: ResolutionState, registry: LocatorRegistry) -> list[ScoredCode]:
    """Score every locator's contribution and merge them into one list."""

    groups: list[list[ScoredCode]] = []
    for locator_name, codes in state.codes.items():
        locator = registry.get(locator_name)
        if locator is None:
            log.debug("No locator named %s, ignoring its codes for %s", locator_name, state.file)
            continue
        groups.append(locator.score_codes(codes, state.file))
    return merge_scored_codes(groups)


def organize_directories(
    unsorted_dir: Path,
    target_dir: Path,
    *,
    registry: LocatorRegistry,
    state_store: ResolutionStateStore,
    gate: DecisionGate,
    progress: ProgressReporter | None = None,
) -> OrganizeResult:
    """Resolve and file every gathered directory.

    Runs sequentially: only one confirmation prompt may be open at a time and
    filings into the same target root must not race. A rejected directory gets
    ``noMatch`` persisted so later runs skip it without asking again.
    """

    reporter = progress or NullProgress()
    result = OrganizeResult()
    directories = list_unsorted_directories(unsorted_dir)
    target_dir.mkdir(parents=True, exist_ok=True)

    reporter.start("Organizing directories", total=len(directories))
    for directory in directories:
        result.examined += 1
        _organize_one(
            directory,
            target_dir,
            registry=registry,
            state_store=state_store,
            gate=gate,
            result=result,
        )
        reporter.advance(description=directory.name)
    reporter.finish(f"Filed {result.filed} directories")

    log.info(
        "Organizing finished: examined=%s, filed=%s, duplicates=%s, escalated=%s, "
        "rejected=%s, undecided=%s, skipped=%s, failed=%s",
        result.examined,
        result.filed,
        result.duplicates,
        result.escalated,
        result.rejected,
        result.undecided,
        result.skipped,
        result.failed,
    )
    return result


def _organize_one(
    directory: Path,
    target_dir: Path,
    *,
    registry: LocatorRegistry,
    state_store: ResolutionStateStore,
    gate: DecisionGate,
    result: OrganizeResult,
) -> None:
    if not state_store.exists(directory):
        result.skipped += 1
        return

    try:
        state = state_store.load(directory)
    except StateFileError as exc:
        log.warning("Skipping %s: %s", directory.name, exc)
        result.failed += 1
        return

    if state.no_match:
        log.info("Directory manually set as no match, %s", directory.name)
        result.skipped += 1
        return

    decision = gate.decide(score_state(state, registry), subject=state.file or directory.name)
    match decision:
        case Accepted(candidate=candidate, escalated=escalated):
            if escalated:
                result.escalated += 1
            try:
                filed = file_directory(directory, candidate.code, target_dir)
            except (OSError, ValueError):
                log.exception("Could not file %s under %s", directory.name, candidate.code)
                result.failed += 1
                return
            if filed.moved:
                result.filed += 1
            if filed.duplicate:
                result.duplicates += 1
        case Rejected():
            result.escalated += 1
            result.rejected += 1
            state.no_match = True
            try:
                state_store.save(directory, state)
            except OSError:
                log.exception("Could not mark %s as no match", directory.name)
                result.failed += 1
        case NoCandidates(reason=reason):
            log.debug("Leaving %s untouched: %s", directory.name, reason)
            result.undecided += 1
