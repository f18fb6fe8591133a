"""Artist Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - ArtistCreate.name: 1-200 chars, stripped, non-empty (it seeds the slug)
    - ArtistUpdate is partial: only fields present in the request body change
    - slug and id are response-only; clients never set them
"""

from datetime import datetime

from pydantic import Field, field_validator

from catalog.schemas.common import CamelModel, URL_MAX, strip_required


class ArtistCreate(CamelModel):
    """Artist creation payload."""
    name: str = Field(min_length=1, max_length=200)
    bio: str = Field("", max_length=10_000)
    image: str = Field("", max_length=URL_MAX)
    website_url: str = Field("", max_length=URL_MAX)
    instagram_url: str = Field("", max_length=URL_MAX)
    soundcloud_url: str = Field("", max_length=URL_MAX)
    spotify_url: str = Field("", max_length=URL_MAX)
    bandcamp_url: str = Field("", max_length=URL_MAX)
    other_url: str = Field("", max_length=URL_MAX)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return strip_required(v, "name")


class ArtistUpdate(CamelModel):
    """Partial artist update — omitted or null fields keep their stored value."""
    name: str | None = Field(None, min_length=1, max_length=200)
    bio: str | None = Field(None, max_length=10_000)
    image: str | None = Field(None, max_length=URL_MAX)
    website_url: str | None = Field(None, max_length=URL_MAX)
    instagram_url: str | None = Field(None, max_length=URL_MAX)
    soundcloud_url: str | None = Field(None, max_length=URL_MAX)
    spotify_url: str | None = Field(None, max_length=URL_MAX)
    bandcamp_url: str | None = Field(None, max_length=URL_MAX)
    other_url: str | None = Field(None, max_length=URL_MAX)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str | None) -> str | None:
        return strip_required(v, "name")

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ArtistResponse(CamelModel):
    """Artist as served to the admin panel and public site."""
    id: str
    slug: str | None = None
    name: str
    bio: str = ""
    image: str = ""
    website_url: str = ""
    instagram_url: str = ""
    soundcloud_url: str = ""
    spotify_url: str = ""
    bandcamp_url: str = ""
    other_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
