from __future__ import annotations

from typing import TYPE_CHECKING

from gamecurator.domain.identification import gather_candidates
from gamecurator.domain.model import CandidateRecord, LocatorCodes, ResolutionState
from gamecurator.domain.ports import LocatorRegistry
from tests.helpers.locators import FakeLocator

if TYPE_CHECKING:
    from pathlib import Path

    from gamecurator.adapters.state_file import JsonStateFileStore


def test_gathers_every_locator_for_new_directories(
    unsorted_dir: Path,
    state_store: JsonStateFileStore,
) -> None:
    (unsorted_dir / "Amazing Game [Maker] (FK1234)").mkdir()
    dlsite = FakeLocator("dlsite", results={"Amazing Game": [("FK1234", "Amazing Game")]})
    other = FakeLocator("other", code_pattern=r"OT\d+")
    registry = LocatorRegistry([dlsite, other])

    result = gather_candidates(unsorted_dir, registry=registry, state_store=state_store)

    assert result.examined == 1
    assert result.written == 1
    assert dlsite.searched == ["Amazing Game"]
    assert dlsite.closed == other.closed == 1
    state = state_store.load(unsorted_dir / "Amazing Game [Maker] (FK1234)")
    assert state == ResolutionState(
        file="Amazing Game [Maker] (FK1234)",
        codes={
            "dlsite": LocatorCodes(
                extracted_code="FK1234",
                found_codes=(
                    CandidateRecord(code="FK1234", source_id="dlsite", display_name="Amazing Game"),
                ),
            ),
            "other": LocatorCodes(),
        },
    )


def test_skips_excluded_canonical_and_gathered_directories(
    unsorted_dir: Path,
    state_store: JsonStateFileStore,
) -> None:
    (unsorted_dir / "!work in progress").mkdir()
    (unsorted_dir / "FK0001").mkdir()
    gathered = unsorted_dir / "Gathered"
    gathered.mkdir()
    state_store.save(gathered, ResolutionState(file="Gathered", no_match=True))
    (unsorted_dir / "loose file.zip").write_bytes(b"")
    locator = FakeLocator("dlsite")

    result = gather_candidates(
        unsorted_dir, registry=LocatorRegistry([locator]), state_store=state_store
    )

    assert result.examined == 3
    assert result.skipped == 3
    assert result.written == 0
    assert locator.searched == []
    assert state_store.load(gathered).no_match is True


def test_failed_lookup_still_writes_state(
    unsorted_dir: Path,
    state_store: JsonStateFileStore,
) -> None:
    (unsorted_dir / "Broken Search").mkdir()
    locator = FakeLocator("dlsite", failing={"Broken Search"})

    result = gather_candidates(
        unsorted_dir, registry=LocatorRegistry([locator]), state_store=state_store
    )

    assert result.failed_lookups == 1
    assert result.written == 1
    assert state_store.load(unsorted_dir / "Broken Search").codes["dlsite"] == LocatorCodes()


def test_empty_unsorted_directory(unsorted_dir: Path, state_store: JsonStateFileStore) -> None:
    result = gather_candidates(
        unsorted_dir, registry=LocatorRegistry([FakeLocator()]), state_store=state_store
    )

    assert (result.examined, result.written) == (0, 0)
