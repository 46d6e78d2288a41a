"""Port for the per-directory resolution state file."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from gamecurator.domain.model import ResolutionState


class StateFileError(ValueError):
    """Raised when a state file is unreadable or misses expected keys."""


@runtime_checkable
class ResolutionStateStore(Protocol):
    def exists(self, directory: Path) -> bool: ...

    def load(self, directory: Path) -> ResolutionState: ...

    def save(self, directory: Path, state: ResolutionState) -> None: ...
