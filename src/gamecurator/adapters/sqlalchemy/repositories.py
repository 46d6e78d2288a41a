"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from gamecurator.adapters.sqlalchemy.mappings import game_table
from gamecurator.domain.model import GameRecord

if TYPE_CHECKING:
    from sqlalchemy.orm import Session


class SqlAlchemyGameRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: GameRecord) -> None:
        self.session.add(entity)

    def get(self, canonical_id: str) -> GameRecord | None:
        return self.session.get(GameRecord, canonical_id)

    def get_by_external_id(self, external_id: str) -> GameRecord | None:
        stmt = select(GameRecord).where(game_table.c.external_id == external_id).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def list(self, *, include_deleted: bool = True) -> list[GameRecord]:
        stmt = select(GameRecord).order_by(game_table.c.canonical_id)
        if not include_deleted:
            stmt = stmt.where(game_table.c.deleted.is_(False))
        return list(self.session.execute(stmt).scalars())
