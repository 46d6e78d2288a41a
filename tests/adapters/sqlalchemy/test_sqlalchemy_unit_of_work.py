from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from gamecurator.adapters.sqlalchemy import SqlAlchemyUnitOfWork, shutdown, startup
from gamecurator.adapters.sqlalchemy.unit_of_work import StartupError, configured_engine, is_started
from gamecurator.domain.model import GameRecord

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.engine import Engine


def test_unit_of_work_requires_startup() -> None:
    shutdown()

    assert not is_started()
    with pytest.raises(StartupError, match="not initialised"):
        SqlAlchemyUnitOfWork()


def test_startup_refuses_to_reconfigure(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    try:
        assert configured_engine() is sqlite_engine
        with pytest.raises(StartupError, match="already initialised"):
            startup(engine=sqlite_engine)
    finally:
        shutdown()


def test_uncommitted_changes_are_discarded(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    with sqlite_unit_of_work() as uow:
        uow.repositories.games.add(GameRecord(canonical_id="RJ1"))

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.games.get("RJ1") is None


def test_errors_roll_back(sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork]) -> None:
    with pytest.raises(RuntimeError, match="boom"), sqlite_unit_of_work() as uow:
        uow.repositories.games.add(GameRecord(canonical_id="RJ1"))
        raise RuntimeError("boom")

    with sqlite_unit_of_work() as uow:
        assert uow.repositories.games.list() == []


def test_repositories_only_inside_the_context(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    uow = sqlite_unit_of_work()

    with pytest.raises(StartupError):
        _ = uow.repositories
