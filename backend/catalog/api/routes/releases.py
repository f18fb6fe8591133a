"""Release Routes — CRUD endpoints for label releases.

Invariants:
    - GET by {identifier} accepts a slug or a primary id (slug wins)
    - PUT/DELETE address the release by primary id only
"""

from fastapi import APIRouter, Depends, status

from catalog.api.dependencies import get_catalog_service
from catalog.schemas.common import MessageResponse
from catalog.schemas.release import ReleaseCreate, ReleaseResponse, ReleaseUpdate
from catalog.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/v1/releases", tags=["releases"])


@router.get("", response_model=list[ReleaseResponse])
async def list_releases(service: CatalogService = Depends(get_catalog_service)):
    """List all releases, newest first."""
    return [ReleaseResponse.model_validate(r) for r in await service.list_releases()]


@router.get("/{identifier}", response_model=ReleaseResponse)
async def get_release(
    identifier: str, service: CatalogService = Depends(get_catalog_service),
):
    return ReleaseResponse.model_validate(await service.get_release(identifier))


@router.post(
    "", response_model=ReleaseResponse, status_code=status.HTTP_201_CREATED,
)
async def create_release(
    body: ReleaseCreate, service: CatalogService = Depends(get_catalog_service),
):
    release = await service.create_release(body.model_dump())
    return ReleaseResponse.model_validate(release)


@router.put("/{release_id}", response_model=ReleaseResponse)
async def update_release(
    release_id: str,
    body: ReleaseUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    release = await service.update_release(release_id, body.changes())
    return ReleaseResponse.model_validate(release)


@router.delete("/{release_id}", response_model=MessageResponse)
async def delete_release(
    release_id: str, service: CatalogService = Depends(get_catalog_service),
):
    await service.delete_release(release_id)
    return MessageResponse(message="Release deleted successfully")
