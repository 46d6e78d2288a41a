"""Ports for persisting game records."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gamecurator.domain.model import GameRecord


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class GameRepository(Repository["GameRecord"], Protocol):
    """Persistence contract for game records, keyed by canonical id."""

    def get(self, canonical_id: str) -> GameRecord | None: ...

    def get_by_external_id(self, external_id: str) -> GameRecord | None: ...

    def list(self, *, include_deleted: bool = True) -> list[GameRecord]: ...
