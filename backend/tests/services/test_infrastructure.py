"""Infrastructure tests — session error mapping and structured log output."""

import json
import logging

import pytest
from sqlalchemy.exc import OperationalError

from catalog.core.errors import DatabaseError
from catalog.infrastructure.database import DatabaseSessionManager
from catalog.infrastructure.observability import JSONFormatter


async def test_operational_error_maps_to_database_error():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        with pytest.raises(DatabaseError) as exc_info:
            async with manager.session():
                raise OperationalError("SELECT 1", {}, Exception("gone"))
        assert exc_info.value.http_status == 503
    finally:
        await manager.dispose()


async def test_health_check_on_reachable_database():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    try:
        assert await manager.health_check() is True
    finally:
        await manager.dispose()


def test_json_formatter_includes_catalog_fields():
    record = logging.LogRecord(
        "catalog.test", logging.INFO, __file__, 1, "Artist created", None, None,
    )
    record.collection = "artists"
    record.slug = "echo"

    log = json.loads(JSONFormatter().format(record))

    assert log["message"] == "Artist created"
    assert log["collection"] == "artists"
    assert log["slug"] == "echo"
    assert "entity_id" not in log
