"""Release Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ReleaseCreate.title: 1-300 chars, stripped, non-empty (it seeds the slug)
    - date defaults to the current year, as the admin form did
    - artistId is free text: existence is not checked on write
"""

from datetime import date, datetime

from pydantic import Field, field_validator

from catalog.schemas.artist import ArtistResponse
from catalog.schemas.common import CamelModel, URL_MAX, strip_required


def _current_year() -> str:
    return str(date.today().year)


class ReleaseCreate(CamelModel):
    """Release creation payload."""
    title: str = Field(min_length=1, max_length=300)
    artist_id: str = Field("", max_length=64)
    description: str = Field("", max_length=10_000)
    date: str = Field(default_factory=_current_year, max_length=32)
    image: str = Field("", max_length=URL_MAX)
    spotify_url: str = Field("", max_length=URL_MAX)
    soundcloud_url: str = Field("", max_length=URL_MAX)
    bandcamp_url: str = Field("", max_length=URL_MAX)
    apple_music_url: str = Field("", max_length=URL_MAX)
    youtube_url: str = Field("", max_length=URL_MAX)
    tidal_url: str = Field("", max_length=URL_MAX)
    other_url: str = Field("", max_length=URL_MAX)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return strip_required(v, "title")


class ReleaseUpdate(CamelModel):
    """Partial release update — omitted or null fields keep their stored value."""
    title: str | None = Field(None, min_length=1, max_length=300)
    artist_id: str | None = Field(None, max_length=64)
    description: str | None = Field(None, max_length=10_000)
    date: str | None = Field(None, max_length=32)
    image: str | None = Field(None, max_length=URL_MAX)
    spotify_url: str | None = Field(None, max_length=URL_MAX)
    soundcloud_url: str | None = Field(None, max_length=URL_MAX)
    bandcamp_url: str | None = Field(None, max_length=URL_MAX)
    apple_music_url: str | None = Field(None, max_length=URL_MAX)
    youtube_url: str | None = Field(None, max_length=URL_MAX)
    tidal_url: str | None = Field(None, max_length=URL_MAX)
    other_url: str | None = Field(None, max_length=URL_MAX)

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return strip_required(v, "title")

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ReleaseResponse(CamelModel):
    """Release as served to the admin panel and public site."""
    id: str
    slug: str | None = None
    artist_id: str = ""
    title: str
    description: str = ""
    date: str = ""
    image: str = ""
    spotify_url: str = ""
    soundcloud_url: str = ""
    bandcamp_url: str = ""
    apple_music_url: str = ""
    youtube_url: str = ""
    tidal_url: str = ""
    other_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ArtistReleasesResponse(CamelModel):
    """An artist page payload: the artist plus its releases, newest first."""
    artist: ArtistResponse
    releases: list[ReleaseResponse]
