"""Port for the frontend catalog document."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathlib import Path

    from gamecurator.domain.model import CatalogDocument


@runtime_checkable
class CatalogStore(Protocol):
    """Reads, backs up and rewrites one platform's catalog document wholesale."""

    def load(self) -> CatalogDocument | None:
        """Return the current document, or ``None`` when the file does not exist yet."""
        ...

    def backup(self) -> Path | None: ...

    def save(self, document: CatalogDocument) -> None: ...
