"""Build and refresh store records from the library folders.

Responsibilities of this stage:
- one record per library directory claimed by a locator
- flag records whose directory vanished as deleted, restore reappearing ones
- detect the run directory and main executable when missing or forced
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from gamecurator.domain.model import GameRecord
from gamecurator.domain.ports import NullProgress

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable
    from pathlib import Path

    from gamecurator.domain.ports import GameUnitOfWork, LocatorRegistry, ProgressReporter

log = getLogger(__name__)

DELETED_MARKER: Final[str] = "DELETED"
DEFAULT_EXECUTABLE_EXTENSIONS: Final[frozenset[str]] = frozenset({".exe", ".swf"})
DEFAULT_BANNED_NAMES: Final[tuple[str, ...]] = (
    "セーブデータ場所設定ツール",
    "ファイル破損チェックツール",
    "unins",
    "conf",
    "setup",
    "setting",
    "inst",
    "check",
    "update",
    "alpharomdie",
    "セーブデータフォルダを開く",
    "unity",
    "アンインストール",
    "設定",
    "delfile",
    "結合ナビ",
    "acmp.exe",
    "courier.exe",
    "courier_i.exe",
)
DEFAULT_SEARCH_DEPTH: Final[int] = 3


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(frozen=True, slots=True)
class ExecutableRules:
    extensions: frozenset[str] = DEFAULT_EXECUTABLE_EXTENSIONS
    banned_names: tuple[str, ...] = DEFAULT_BANNED_NAMES
    search_depth: int = DEFAULT_SEARCH_DEPTH

    def accepts(self, path: Path) -> bool:
        name = path.name.lower()
        if not any(name.endswith(extension) for extension in self.extensions):
            return False
        return not any(banned in name for banned in self.banned_names)


@dataclass(frozen=True, slots=True)
class ExecutableLocation:
    directory: Path
    file: Path | None


@dataclass(slots=True)
class ScanResult:
    examined: int = 0
    created: int = 0
    marked_deleted: int = 0
    restored: int = 0
    executables_updated: int = 0
    unclaimed: int = 0
    failed: int = 0


def is_deleted_directory(path: Path) -> bool:
    """Missing, not a directory, empty, or holding a ``DELETED`` marker."""

    if not path.is_dir():
        return True
    children = [child.name for child in path.iterdir()]
    return not children or DELETED_MARKER in children


def find_executables(root: Path, rules: ExecutableRules) -> list[Path]:
    """Executables up to ``rules.search_depth`` levels below ``root``, in walk order."""

    found: list[Path] = []

    def walk(directory: Path, depth: int) -> None:
        for child in sorted(directory.iterdir()):
            if child.is_dir():
                if depth < rules.search_depth:
                    walk(child, depth + 1)
            elif rules.accepts(child):
                found.append(child)

    walk(root, 1)
    return found


def select_executable(candidates: list[Path]) -> Path | None:
    """Prefer a name starting with ``game``, then any ``.exe``, then the first one."""

    if not candidates:
        return None
    for candidate in candidates:
        if candidate.name.lower().startswith("game"):
            return candidate
    for candidate in candidates:
        if candidate.name.lower().endswith(".exe"):
            return candidate
    return candidates[0]


def locate_executable(game_dir: Path, rules: ExecutableRules) -> ExecutableLocation:
    """Run directory is the first subdirectory by name if there is one, else ``game_dir``."""

    subdirectories = sorted(child for child in game_dir.iterdir() if child.is_dir())
    directory = subdirectories[0] if subdirectories else game_dir
    executable = select_executable(find_executables(game_dir, rules))
    if executable is None:
        log.debug("There is no executable in %s", game_dir)
    return ExecutableLocation(
        directory=directory.resolve(),
        file=executable.resolve() if executable else None,
    )


def list_library_directories(library_dirs: Iterable[Path]) -> dict[str, Path]:
    found: dict[str, Path] = {}
    for root in library_dirs:
        for child in sorted(root.iterdir()):
            if not child.is_dir():
                continue
            if child.name in found:
                log.warning(
                    "%s exists in %s and %s, using the first",
                    child.name,
                    found[child.name].parent,
                    root,
                )
                continue
            found[child.name] = child
    return found


def scan_library(
    library_dirs: Iterable[Path],
    *,
    unit_of_work_factory: Callable[[], GameUnitOfWork],
    registry: LocatorRegistry,
    rules: ExecutableRules | None = None,
    now: Callable[[], datetime] = _utcnow,
    progress: ProgressReporter | None = None,
) -> ScanResult:
    reporter = progress or NullProgress()
    effective_rules = rules or ExecutableRules()
    result = ScanResult()
    found = list_library_directories(library_dirs)

    with unit_of_work_factory() as uow:
        for record in uow.repositories.games.list(include_deleted=False):
            if record.canonical_id not in found:
                log.info("Directory of %s is gone, marking it deleted", record.canonical_id)
                record.deleted = True
                record.date_modified = now()
                result.marked_deleted += 1
        uow.commit()

    reporter.start("Scanning library directories", total=len(found))
    for name, path in found.items():
        result.examined += 1
        if not registry.claims(name):
            log.debug("No locator claims %s, skipping", name)
            result.unclaimed += 1
        else:
            try:
                _scan_one(
                    name,
                    path,
                    unit_of_work_factory=unit_of_work_factory,
                    rules=effective_rules,
                    now=now,
                    result=result,
                )
            except OSError:
                log.exception("Could not scan %s", path)
                result.failed += 1
        reporter.advance(description=name)
    reporter.finish(f"Scanned {result.examined} directories")

    log.info(
        "Scan finished: examined=%s, created=%s, deleted=%s, restored=%s, executables=%s, "
        "unclaimed=%s, failed=%s",
        result.examined,
        result.created,
        result.marked_deleted,
        result.restored,
        result.executables_updated,
        result.unclaimed,
        result.failed,
    )
    return result


def _scan_one(
    name: str,
    path: Path,
    *,
    unit_of_work_factory: Callable[[], GameUnitOfWork],
    rules: ExecutableRules,
    now: Callable[[], datetime],
    result: ScanResult,
) -> None:
    with unit_of_work_factory() as uow:
        games = uow.repositories.games
        record = games.get(name)
        changed = False
        if record is None:
            timestamp = now()
            record = GameRecord(canonical_id=name, date_added=timestamp, date_modified=timestamp)
            games.add(record)
            result.created += 1

        gone = is_deleted_directory(path)
        if gone and not record.deleted:
            log.info("%s is empty or marked deleted", name)
            record.deleted = True
            result.marked_deleted += 1
            changed = True
        elif not gone and record.deleted:
            log.info("%s is back, restoring it", name)
            record.deleted = False
            result.restored += 1
            changed = True

        needs_executable = record.executable_file is None or record.force_executable_update
        if not record.deleted and needs_executable:
            location = locate_executable(path, rules)
            directory = str(location.directory)
            executable_file = str(location.file) if location.file else None
            if record.force_executable_update:
                record.force_executable_update = False
                changed = True
            if (record.directory, record.executable_file) != (directory, executable_file):
                record.directory = directory
                record.executable_file = executable_file
                result.executables_updated += 1
                changed = True

        if changed:
            record.date_modified = now()
        uow.commit()
