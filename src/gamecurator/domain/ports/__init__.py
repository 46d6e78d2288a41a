"""Domain port definitions for adapters."""

from __future__ import annotations

from .catalog import CatalogStore
from .confirmation import ConfirmationProvider
from .locators import CandidateLocator, LocatorError, LocatorRegistry
from .persistence import GameRepository, Repository
from .progress import NullProgress, ProgressReporter
from .state import ResolutionStateStore, StateFileError
from .unit_of_work import (
    GameRepositories,
    GameUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "CandidateLocator",
    "CatalogStore",
    "ConfirmationProvider",
    "GameRepositories",
    "GameRepository",
    "GameUnitOfWork",
    "LocatorError",
    "LocatorRegistry",
    "NullProgress",
    "ProgressReporter",
    "Repository",
    "RepositoryCollection",
    "ResolutionStateStore",
    "StateFileError",
    "UnitOfWork",
]
