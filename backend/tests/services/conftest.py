"""Service test fixtures — async DB, Store adapters and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_store dependency overridden to a SqlStore on the test DB
    - db_manager patched so the readiness probe sees the test engine
    - `store` runs the same test against the memory, JSON file and SQL adapters

Design Decisions:
    - SQLite in-memory with StaticPool: every session shares the one connection
      that holds the schema
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from catalog.api.dependencies import get_store
from catalog.db.base import Base
from catalog.infrastructure.database import DatabaseSessionManager
from catalog.infrastructure.json_store import JsonFileStore
from catalog.infrastructure.memory_store import MemoryStore
from catalog.infrastructure.sql_store import SqlStore
import catalog.infrastructure.database as db_module
import catalog.models  # noqa: F401
from catalog.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture(params=["memory", "json", "sql"])
async def store(request, tmp_path, test_db):
    """Each Store adapter in turn — contract tests run once per backend."""
    if request.param == "memory":
        return MemoryStore()
    if request.param == "json":
        return JsonFileStore(tmp_path / "data")
    return SqlStore(test_db)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with the Store dependency overridden."""
    async def override_get_store():
        async with test_session_factory() as session:
            yield SqlStore(session)

    app.dependency_overrides[get_store] = override_get_store

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
