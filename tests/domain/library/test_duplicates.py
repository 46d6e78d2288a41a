from __future__ import annotations

from typing import TYPE_CHECKING

from gamecurator.domain.library import CopyProblem, count_copies, find_duplicates
from gamecurator.domain.library.scan import DELETED_MARKER

if TYPE_CHECKING:
    from pathlib import Path


def _copy(game_dir: Path, *versions: str) -> Path:
    for version in versions:
        (game_dir / version).mkdir(parents=True)
        (game_dir / version / "game.exe").write_bytes(b"")
    return game_dir


def test_each_subdirectory_is_a_copy(tmp_path: Path) -> None:
    count = count_copies(_copy(tmp_path / "RJ000001", "first", "second"))

    assert count.copies == 2
    assert count.problem is None
    assert count.describe() == "2 copies"


def test_listed_versions_count_once(tmp_path: Path) -> None:
    game_dir = _copy(tmp_path / "RJ000001", "1.0", "1.1", "extra")
    (game_dir / "versions.txt").write_text("1.0\n1.1\n\n", encoding="utf-8")

    assert count_copies(game_dir).copies == 2


def test_versions_file_is_ignored_for_a_single_copy(tmp_path: Path) -> None:
    game_dir = _copy(tmp_path / "RJ000001", "1.0")
    (game_dir / "versions.txt").write_text("1.0\n1.1\n1.2\n", encoding="utf-8")

    count = count_copies(game_dir)

    assert (count.copies, count.problem) == (1, None)


def test_versions_file_naming_missing_versions_is_reported(tmp_path: Path) -> None:
    game_dir = _copy(tmp_path / "RJ000001", "1.0", "1.1")
    (game_dir / "versions.txt").write_text("1.0\n1.1\n1.2\n", encoding="utf-8")

    count = count_copies(game_dir)

    assert count.problem is CopyProblem.WRONG_VERSIONS_FILE
    assert count.describe() == "wrong versions file"


def test_loose_files_are_a_wrong_structure(tmp_path: Path) -> None:
    game_dir = tmp_path / "RJ000001"
    game_dir.mkdir()
    (game_dir / "game.exe").write_bytes(b"")

    count = count_copies(game_dir)

    assert (count.copies, count.problem) == (0, CopyProblem.WRONG_STRUCTURE)


def test_copies_add_up_across_library_roots(tmp_path: Path) -> None:
    _copy(tmp_path / "a" / "RJ000001", "v1")
    _copy(tmp_path / "b" / "RJ000001", "v1")
    _copy(tmp_path / "b" / "RJ000002", "v1")

    reports = find_duplicates([tmp_path / "a", tmp_path / "b"])

    assert [report.code for report in reports] == ["RJ000001"]
    assert reports[0].copies == 2
    assert [location.path for location in reports[0].locations] == [
        tmp_path / "a" / "RJ000001",
        tmp_path / "b" / "RJ000001",
    ]


def test_most_copies_come_first(tmp_path: Path) -> None:
    _copy(tmp_path / "RJ000001", "v1", "v2")
    _copy(tmp_path / "RJ000002", "v1", "v2", "v3")
    (tmp_path / "RJ000003").mkdir()
    (tmp_path / "RJ000003" / "readme.txt").write_text("", encoding="utf-8")

    reports = find_duplicates([tmp_path])

    assert [(report.code, report.status()) for report in reports] == [
        ("RJ000002", "3 copies"),
        ("RJ000001", "2 copies"),
        ("RJ000003", "wrong structure"),
    ]


def test_deleted_and_empty_directories_are_skipped(tmp_path: Path) -> None:
    deleted = _copy(tmp_path / "RJ000001", "v1", "v2")
    (deleted / DELETED_MARKER).write_text("", encoding="utf-8")
    (tmp_path / "RJ000002").mkdir()
    (tmp_path / "notes.txt").write_text("", encoding="utf-8")

    assert find_duplicates([tmp_path]) == []
