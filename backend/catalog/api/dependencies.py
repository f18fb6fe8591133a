"""Request Dependencies — Store and CatalogService injection for route handlers.

Invariants:
    - A store handle placed on app.state by the lifespan (json/memory backends)
      is shared by all requests
    - Otherwise each request gets a SqlStore over its own database session
"""

from typing import AsyncGenerator

from fastapi import Depends, Request

from catalog.config import get_settings
from catalog.core.repository_protocols import Store
from catalog.infrastructure import database
from catalog.infrastructure.sql_store import SqlStore
from catalog.services.catalog_service import CatalogService


async def get_store(request: Request) -> AsyncGenerator[Store, None]:
    """FastAPI dependency yielding the configured Store adapter."""
    shared = getattr(request.app.state, "store", None)
    if shared is not None:
        yield shared
        return
    if database.db_manager is None:
        raise RuntimeError("Database not initialized")
    async with database.db_manager.session() as session:
        yield SqlStore(session)


def get_catalog_service(store: Store = Depends(get_store)) -> CatalogService:
    return CatalogService(store, max_slug_attempts=get_settings().slug_max_attempts)
