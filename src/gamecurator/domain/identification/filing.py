"""Move a resolved directory under its canonical code."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from pathlib import Path, PurePath

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FiledDirectory:
    code: str
    source: Path
    destination: Path
    duplicate: bool
    moved: bool


def _validate_code(code: str) -> None:
    parts = PurePath(code).parts
    if not code.strip() or len(parts) != 1 or parts[0] in {".", ".."} or "\\" in code:
        raise ValueError(f"Canonical code is not a single path segment: {code!r}")


def file_directory(source: Path, code: str, target_root: Path) -> FiledDirectory:
    """Move ``source`` to ``target_root/code/source.name`` with a single rename.

    An existing code directory means another copy was filed before; that is
    logged and the move proceeds. A source already sitting at its destination
    is left alone, so re-running is safe. Filesystem errors propagate.
    """

    _validate_code(code)
    code_dir = target_root / code
    destination = code_dir / source.name

    if not source.exists() and destination.exists():
        log.debug("%s already filed under %s", source.name, code)
        return FiledDirectory(
            code=code,
            source=source,
            destination=destination,
            duplicate=False,
            moved=False,
        )

    if destination.exists():
        raise FileExistsError(f"Cannot file {source}: {destination} already exists")

    duplicate = code_dir.exists()
    if duplicate:
        log.warning(
            "Code %s already exists in %s, filing %s as a duplicate",
            code,
            target_root,
            source.name,
        )
    code_dir.mkdir(parents=True, exist_ok=True)

    source.rename(destination)
    log.info("Filed %s under %s", source.name, code)
    return FiledDirectory(
        code=code,
        source=source,
        destination=destination,
        duplicate=duplicate,
        moved=True,
    )
