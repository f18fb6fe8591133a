"""Artist ORM — persists label artists.

Invariants:
    - id is an opaque text primary key (uuid hex for new rows, legacy ids kept)
    - slug is nullable and unique (uq_artists_slug); NULL means "no slug"
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class ArtistModel(Base):
    """Artist row — name seeds the slug."""
    __tablename__ = "artists"
    __table_args__ = (UniqueConstraint("slug", name="uq_artists_slug"),)

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    slug: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, default="")
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    website_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    instagram_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    soundcloud_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    spotify_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    bandcamp_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    other_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
