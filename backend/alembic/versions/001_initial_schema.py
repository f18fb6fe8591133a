"""Initial schema — artists and releases as first imported from the flat-file catalog.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _text(name: str) -> sa.Column:
    return sa.Column(name, sa.Text, nullable=False, server_default="")


def upgrade() -> None:
    op.create_table(
        "artists",
        sa.Column("id", sa.String(64), primary_key=True),
        _text("name"),
        _text("bio"),
        _text("image"),
        _text("website_url"),
        _text("instagram_url"),
        _text("soundcloud_url"),
        _text("spotify_url"),
        _text("bandcamp_url"),
        _text("other_url"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )

    op.create_table(
        "releases",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("artist_id", sa.String(64), nullable=False, server_default=""),
        _text("title"),
        sa.Column("date", sa.String(32), nullable=False, server_default=""),
        _text("image"),
        _text("spotify_url"),
        _text("soundcloud_url"),
        _text("bandcamp_url"),
        _text("apple_music_url"),
        _text("youtube_url"),
        _text("other_url"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_releases_artist_id", "releases", ["artist_id"])


def downgrade() -> None:
    op.drop_index("ix_releases_artist_id", table_name="releases")
    op.drop_table("releases")
    op.drop_table("artists")
