from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from gamecurator.adapters.sqlalchemy import start_mappers
from gamecurator.adapters.sqlalchemy.migrations import upgrade_head
from gamecurator.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, shutdown, startup
from gamecurator.adapters.state_file import JsonStateFileStore
from tests.helpers.store import InMemoryGameStore

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    start_mappers()
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def game_store() -> InMemoryGameStore:
    return InMemoryGameStore()


@pytest.fixture
def state_store() -> JsonStateFileStore:
    return JsonStateFileStore()


@pytest.fixture
def unsorted_dir(tmp_path: Path) -> Path:
    path = tmp_path / "unsorted"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    return tmp_path / "sorted"
