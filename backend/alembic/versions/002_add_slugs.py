"""Add slug columns with unique constraints, release description and Tidal URL.

Revision ID: 002_add_slugs
Revises: 001_initial
Create Date: 2026-10-17

Existing rows get slug NULL (addressable by id only) until
`python -m catalog.scripts.backfill_slugs` assigns them. NULL slugs never
collide under the unique constraint.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_add_slugs"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table("artists") as batch:
        batch.add_column(sa.Column("slug", sa.String(255), nullable=True))
        batch.create_unique_constraint("uq_artists_slug", ["slug"])

    with op.batch_alter_table("releases") as batch:
        batch.add_column(sa.Column("slug", sa.String(255), nullable=True))
        batch.add_column(sa.Column("description", sa.Text, nullable=False, server_default=""))
        batch.add_column(sa.Column("tidal_url", sa.Text, nullable=False, server_default=""))
        batch.create_unique_constraint("uq_releases_slug", ["slug"])


def downgrade() -> None:
    with op.batch_alter_table("releases") as batch:
        batch.drop_constraint("uq_releases_slug", type_="unique")
        batch.drop_column("tidal_url")
        batch.drop_column("description")
        batch.drop_column("slug")

    with op.batch_alter_table("artists") as batch:
        batch.drop_constraint("uq_artists_slug", type_="unique")
        batch.drop_column("slug")
