"""SQLAlchemy adapter package for the game store."""

from __future__ import annotations

from .mappings import game_table, mapper_registry, start_mappers
from .repositories import SqlAlchemyGameRepository
from .unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup

__all__ = [
    "SqlAlchemyGameRepository",
    "SqlAlchemyUnitOfWork",
    "game_table",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
