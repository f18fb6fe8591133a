"""Import Flat Files — load artists.json / releases.json from DATA_DIR into the SQL store.

Usage: python -m catalog.scripts.import_flat_files
Tables must exist (run `alembic upgrade head` first).
"""

import asyncio
import logging

from catalog.config import get_settings
from catalog.db.session import create_session_factory
from catalog.infrastructure.json_store import JsonFileStore
from catalog.infrastructure.observability import setup_logging
from catalog.infrastructure.sql_store import SqlStore
from catalog.services.flat_file_import import ImportReport, import_catalog

logger = logging.getLogger(__name__)


async def run() -> ImportReport:
    settings = get_settings()
    source = JsonFileStore(settings.data_dir)
    engine, session_factory = create_session_factory(settings.database_url)
    try:
        async with session_factory() as session:
            return await import_catalog(
                source, SqlStore(session), settings.slug_max_attempts,
            )
    finally:
        await engine.dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    report = asyncio.run(run())
    for collection, imported in report.imported.items():
        logger.info(
            f"{collection.value}: {imported} imported, "
            f"{len(report.skipped[collection])} skipped",
        )


if __name__ == "__main__":
    main()
