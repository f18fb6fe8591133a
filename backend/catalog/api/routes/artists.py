"""Artist Routes — CRUD endpoints for label artists.

Invariants:
    - GET by {identifier} accepts a slug or a primary id (slug wins)
    - PUT/DELETE address the artist by primary id only
    - DELETE returns 409 while releases reference the artist
"""

import logging

from fastapi import APIRouter, Depends, status

from catalog.api.dependencies import get_catalog_service
from catalog.schemas.artist import ArtistCreate, ArtistResponse, ArtistUpdate
from catalog.schemas.common import MessageResponse
from catalog.schemas.release import ArtistReleasesResponse, ReleaseResponse
from catalog.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/artists", tags=["artists"])


@router.get("", response_model=list[ArtistResponse])
async def list_artists(service: CatalogService = Depends(get_catalog_service)):
    """List all artists ordered by name."""
    return [ArtistResponse.model_validate(a) for a in await service.list_artists()]


@router.get("/{identifier}", response_model=ArtistResponse)
async def get_artist(
    identifier: str, service: CatalogService = Depends(get_catalog_service),
):
    """Get one artist by slug or id."""
    return ArtistResponse.model_validate(await service.get_artist(identifier))


@router.get("/{identifier}/releases", response_model=ArtistReleasesResponse)
async def get_artist_releases(
    identifier: str, service: CatalogService = Depends(get_catalog_service),
):
    """Artist page payload: the artist and its releases."""
    artist, releases = await service.list_artist_releases(identifier)
    return ArtistReleasesResponse(
        artist=ArtistResponse.model_validate(artist),
        releases=[ReleaseResponse.model_validate(r) for r in releases],
    )


@router.post(
    "", response_model=ArtistResponse, status_code=status.HTTP_201_CREATED,
)
async def create_artist(
    body: ArtistCreate, service: CatalogService = Depends(get_catalog_service),
):
    """Create an artist; its slug is derived from the name."""
    artist = await service.create_artist(body.model_dump())
    return ArtistResponse.model_validate(artist)


@router.put("/{artist_id}", response_model=ArtistResponse)
async def update_artist(
    artist_id: str,
    body: ArtistUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    """Update an artist; renaming regenerates the slug."""
    artist = await service.update_artist(artist_id, body.changes())
    return ArtistResponse.model_validate(artist)


@router.delete("/{artist_id}", response_model=MessageResponse)
async def delete_artist(
    artist_id: str, service: CatalogService = Depends(get_catalog_service),
):
    """Delete an artist that no release references."""
    await service.delete_artist(artist_id)
    return MessageResponse(message="Artist deleted successfully")
