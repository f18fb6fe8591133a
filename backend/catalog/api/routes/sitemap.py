"""Sitemap Route — XML sitemap of the public site, built from current catalog data."""

from datetime import date

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from catalog.api.dependencies import get_catalog_service
from catalog.config import get_settings
from catalog.core.sitemap import build_sitemap
from catalog.services.catalog_service import CatalogService

router = APIRouter(tags=["sitemap"])


@router.get("/sitemap.xml")
async def sitemap(service: CatalogService = Depends(get_catalog_service)):
    xml = build_sitemap(
        get_settings().site_base_url,
        await service.list_artists(),
        await service.list_releases(),
        date.today(),
    )
    return Response(content=xml, media_type="application/xml")
