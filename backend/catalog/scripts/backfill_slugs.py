"""Backfill Slugs — assign slugs to legacy artists and releases in the SQL store.

Usage: python -m catalog.scripts.backfill_slugs
Reads DATABASE_URL (and the rest of Settings) from the environment / .env.
"""

import asyncio
import logging

from catalog.config import get_settings
from catalog.core.domain_types import Collection
from catalog.db.session import create_session_factory
from catalog.infrastructure.observability import setup_logging
from catalog.infrastructure.sql_store import SqlStore
from catalog.services.slug_backfill import BackfillReport, backfill_slugs

logger = logging.getLogger(__name__)


async def run() -> list[BackfillReport]:
    settings = get_settings()
    engine, session_factory = create_session_factory(settings.database_url)
    try:
        async with session_factory() as session:
            store = SqlStore(session)
            return [
                await backfill_slugs(store, collection, settings.slug_max_attempts)
                for collection in (Collection.ARTISTS, Collection.RELEASES)
            ]
    finally:
        await engine.dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, "text")
    for report in asyncio.run(run()):
        for entity_id, slug in report.assigned.items():
            logger.info(f"{report.collection.value}: {entity_id} -> {slug}")


if __name__ == "__main__":
    main()
