"""Release ORM — persists label releases.

Invariants:
    - slug is nullable and unique (uq_releases_slug)
    - artist_id is NOT a database foreign key: legacy rows carry "" or ids of
      artists that never existed; deletes are guarded in the service layer
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, Index, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from catalog.db.base import Base


class ReleaseModel(Base):
    """Release row — title seeds the slug."""
    __tablename__ = "releases"
    __table_args__ = (
        UniqueConstraint("slug", name="uq_releases_slug"),
        Index("ix_releases_artist_id", "artist_id"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    slug: Mapped[str | None] = mapped_column(String(255), nullable=True)
    artist_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")
    title: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    date: Mapped[str] = mapped_column(String(32), nullable=False, default="")
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    spotify_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    soundcloud_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    bandcamp_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    apple_music_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    youtube_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tidal_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    other_url: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
