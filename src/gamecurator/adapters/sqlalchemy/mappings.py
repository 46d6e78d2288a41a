"""SQLAlchemy mapping metadata for the game store."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Dialect,
    Float,
    Integer,
    String,
    Table,
    TypeDecorator,
    orm,
)
from sqlalchemy.ext.mutable import MutableDict
from sqlalchemy.orm import configure_mappers

from gamecurator.domain.model import GameRecord

if TYPE_CHECKING:
    from sqlalchemy.types import TypeEngine

log = logging.getLogger(__name__)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


def _by_language() -> TypeEngine[dict[str, object]]:
    return MutableDict.as_mutable(JSON())


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

game_table = Table(
    "game",
    mapper_registry.metadata,
    Column("canonical_id", String, primary_key=True),
    Column("external_id", String, nullable=True, unique=True),
    Column("name_by_language", _by_language(), nullable=False, default=dict),
    Column("description_by_language", _by_language(), nullable=False, default=dict),
    Column("genres_by_language", _by_language(), nullable=False, default=dict),
    Column("tags_by_language", _by_language(), nullable=False, default=dict),
    Column("maker_by_language", _by_language(), nullable=False, default=dict),
    Column("image_urls", _by_language(), nullable=False, default=dict),
    Column("release_date", UTCDateTime(), nullable=True),
    Column("date_added", UTCDateTime(), nullable=True),
    Column("date_modified", UTCDateTime(), nullable=True),
    Column("last_played_date", UTCDateTime(), nullable=True),
    Column("rating", String, nullable=True),
    Column("stars", Float, nullable=True),
    Column("community_stars", Float, nullable=True),
    Column("community_star_votes", Integer, nullable=True),
    Column("series", String, nullable=True),
    Column("version", String, nullable=True),
    Column("source_name", String, nullable=True),
    Column("engine", String, nullable=True),
    Column("executable_file", String, nullable=True),
    Column("directory", String, nullable=True),
    Column("completed", Boolean, nullable=False, default=False),
    Column("favorite", Boolean, nullable=False, default=False),
    Column("portable", Boolean, nullable=False, default=False),
    Column("hide", Boolean, nullable=False, default=False),
    Column("broken", Boolean, nullable=False, default=False),
    Column("deleted", Boolean, nullable=False, default=False),
    Column("force_source_update", Boolean, nullable=False, default=False),
    Column("force_executable_update", Boolean, nullable=False, default=False),
    Column("force_additional_images_update", Boolean, nullable=False, default=False),
    Column("source_missing_jp", Boolean, nullable=False, default=False),
    Column("source_missing_en", Boolean, nullable=False, default=False),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(GameRecord, game_table)

    configure_mappers()
    return mapper_registry
