"""Report library games that hold more than one copy.

Filing a second copy under an existing code is only a warning, so duplicates
pile up as extra subdirectories of one code directory. A ``versions.txt`` in
the code directory lists subdirectories that are deliberate versions of the
same game; together they count as one copy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Final

from gamecurator.domain.library.scan import is_deleted_directory

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

log = getLogger(__name__)

VERSIONS_FILE: Final[str] = "versions.txt"


class CopyProblem(StrEnum):
    WRONG_STRUCTURE = "wrong structure"
    WRONG_VERSIONS_FILE = "wrong versions file"


@dataclass(frozen=True, slots=True)
class CopyCount:
    """Copies of one code inside one library root."""

    path: Path
    copies: int
    problem: CopyProblem | None = None

    def describe(self) -> str:
        if self.problem is not None:
            return str(self.problem)
        return f"{self.copies} copies"


@dataclass(slots=True)
class DuplicateReport:
    """Everything found for one code across all library roots."""

    code: str
    locations: list[CopyCount] = field(default_factory=list)

    @property
    def copies(self) -> int:
        return sum(location.copies for location in self.locations)

    @property
    def problems(self) -> set[CopyProblem]:
        return {location.problem for location in self.locations if location.problem is not None}

    @property
    def suspicious(self) -> bool:
        return self.copies > 1 or bool(self.problems)

    def status(self) -> str:
        parts: list[str] = []
        if self.copies > 1:
            parts.append(f"{self.copies} copies")
        parts.extend(sorted(str(problem) for problem in self.problems))
        return ", ".join(parts)


def read_accepted_versions(path: Path) -> set[str]:
    lines = path.read_text(encoding="utf-8").splitlines()
    return {line.strip() for line in lines if line.strip()}


def count_copies(game_dir: Path) -> CopyCount:
    """Count the version subdirectories of one code directory.

    Files without any subdirectory mean the game was never filed into a copy
    directory. A ``versions.txt`` naming more versions than exist is reported
    instead of counted.
    """

    children = list(game_dir.iterdir())
    subdirectories = sorted(child.name for child in children if child.is_dir())
    copies = len(subdirectories)

    if not subdirectories:
        if children:
            return CopyCount(path=game_dir, copies=0, problem=CopyProblem.WRONG_STRUCTURE)
        return CopyCount(path=game_dir, copies=0)

    versions_file = game_dir / VERSIONS_FILE
    if copies > 1 and versions_file.is_file():
        accepted = read_accepted_versions(versions_file)
        if copies < len(accepted):
            return CopyCount(path=game_dir, copies=0, problem=CopyProblem.WRONG_VERSIONS_FILE)
        present = [name for name in subdirectories if name in accepted]
        if present:
            copies = copies - len(present) + 1

    return CopyCount(path=game_dir, copies=copies)


def find_duplicates(library_dirs: Iterable[Path]) -> list[DuplicateReport]:
    """Codes with several copies or a broken layout, most copies first."""

    reports: dict[str, DuplicateReport] = {}
    for root in library_dirs:
        for game_dir in sorted(root.iterdir()):
            if is_deleted_directory(game_dir):
                continue
            try:
                count = count_copies(game_dir)
            except (OSError, UnicodeDecodeError):
                log.exception("Could not inspect %s", game_dir)
                continue
            report = reports.setdefault(game_dir.name, DuplicateReport(code=game_dir.name))
            report.locations.append(count)

    found = sorted(
        (report for report in reports.values() if report.suspicious),
        key=lambda report: (-report.copies, report.code),
    )
    log.info("Found %s codes with duplicates or layout problems", len(found))
    return found
