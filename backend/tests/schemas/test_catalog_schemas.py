"""Schema tests — camelCase boundary, blank source text, partial updates."""

import pytest
from pydantic import ValidationError

from catalog.core.domain_types import EntityId
from catalog.core.entities import Artist
from catalog.schemas.artist import ArtistCreate, ArtistResponse, ArtistUpdate
from catalog.schemas.release import ReleaseCreate, ReleaseUpdate


def test_create_accepts_camel_case_keys():
    body = ArtistCreate.model_validate({"name": "Echo", "soundcloudUrl": "https://sc/e"})
    assert body.soundcloud_url == "https://sc/e"


def test_name_is_stripped():
    assert ArtistCreate(name="  Echo  ").name == "Echo"


def test_blank_name_rejected():
    with pytest.raises(ValidationError):
        ArtistCreate(name="   ")


def test_blank_title_rejected():
    with pytest.raises(ValidationError):
        ReleaseCreate(title="\t")


def test_update_changes_only_sent_fields():
    body = ArtistUpdate.model_validate({"bio": "Dub techno", "name": None})
    assert body.changes() == {"bio": "Dub techno"}


def test_release_update_maps_camel_case():
    body = ReleaseUpdate.model_validate({"artistId": "42"})
    assert body.changes() == {"artist_id": "42"}


def test_release_date_defaults_to_year():
    assert ReleaseCreate(title="Night Drive").date.isdigit()


def test_response_serializes_camel_case():
    artist = Artist(id=EntityId("a1"), name="Echo", slug="echo", website_url="https://e")
    dumped = ArtistResponse.model_validate(artist).model_dump(by_alias=True)
    assert dumped["websiteUrl"] == "https://e"
    assert dumped["slug"] == "echo"
