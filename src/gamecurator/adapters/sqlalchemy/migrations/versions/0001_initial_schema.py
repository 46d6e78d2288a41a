"""Create the game table.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from gamecurator.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

_BY_LANGUAGE_COLUMNS = (
    "name_by_language",
    "description_by_language",
    "genres_by_language",
    "tags_by_language",
    "maker_by_language",
    "image_urls",
)
_FLAG_COLUMNS = (
    "completed",
    "favorite",
    "portable",
    "hide",
    "broken",
    "deleted",
    "force_source_update",
    "force_executable_update",
    "force_additional_images_update",
    "source_missing_jp",
    "source_missing_en",
)


def upgrade() -> None:
    op.create_table(
        "game",
        sa.Column("canonical_id", sa.String(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=True),
        *(sa.Column(name, sa.JSON(), nullable=False) for name in _BY_LANGUAGE_COLUMNS),
        sa.Column("release_date", UTCDateTime(), nullable=True),
        sa.Column("date_added", UTCDateTime(), nullable=True),
        sa.Column("date_modified", UTCDateTime(), nullable=True),
        sa.Column("last_played_date", UTCDateTime(), nullable=True),
        sa.Column("rating", sa.String(), nullable=True),
        sa.Column("stars", sa.Float(), nullable=True),
        sa.Column("community_stars", sa.Float(), nullable=True),
        sa.Column("community_star_votes", sa.Integer(), nullable=True),
        sa.Column("series", sa.String(), nullable=True),
        sa.Column("version", sa.String(), nullable=True),
        sa.Column("source_name", sa.String(), nullable=True),
        sa.Column("engine", sa.String(), nullable=True),
        sa.Column("executable_file", sa.String(), nullable=True),
        sa.Column("directory", sa.String(), nullable=True),
        *(sa.Column(name, sa.Boolean(), nullable=False) for name in _FLAG_COLUMNS),
        sa.PrimaryKeyConstraint("canonical_id", name=op.f("pk_game")),
        sa.UniqueConstraint("external_id", name=op.f("uq_game_external_id")),
    )


def downgrade() -> None:
    op.drop_table("game")
