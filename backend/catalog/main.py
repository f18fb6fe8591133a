"""Label Catalog API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CatalogError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The Store backend is opened on startup and closed on shutdown by the lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - sql backend: request-scoped SqlStore over db_manager sessions
      json/memory backends: one store handle on app.state, never a module global
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from catalog.api.error_handlers import register_error_handlers
from catalog.api.routes import artists, health, releases, sitemap
from catalog.config import get_settings
from catalog.infrastructure.database import init_db
from catalog.infrastructure.json_store import JsonFileStore
from catalog.infrastructure.memory_store import MemoryStore
from catalog.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = None
    if settings.store_backend == "json":
        app.state.store = JsonFileStore(settings.data_dir)
    elif settings.store_backend == "memory":
        app.state.store = MemoryStore()
    else:
        manager = init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_url.startswith("sqlite"):
            await manager.create_tables()
    logger.info(f"Label Catalog API started (store backend: {settings.store_backend})")
    yield
    logger.info("Label Catalog API shutting down")
    app.state.store = None
    if manager is not None:
        await manager.dispose()


app = FastAPI(
    title="Label Catalog API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(artists.router)
app.include_router(releases.router)
app.include_router(sitemap.router)

# Static site mounted after API routes: /api/v1/* and /sitemap.xml match first
if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
