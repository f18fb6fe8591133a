"""Flat-File Import — copies a catalog from one Store into another (JSON files → SQL).

Invariants:
    - Primary identifiers are preserved verbatim; ids already in the target are skipped
    - Artists are imported before releases
    - A source slug is kept when still free in the target, otherwise a unique slug is
      resolved from it; slug-less records get one from their source field
"""

import logging
from dataclasses import dataclass, field

from catalog.core.domain_types import (
    Collection, DEFAULT_SLUG_MAX_ATTEMPTS, SOURCE_FIELDS,
)
from catalog.core.entities import utc_now
from catalog.core.repository_protocols import Store, where
from catalog.core.slugs import generate_slug
from catalog.services.slug_resolver import write_with_unique_slug

logger = logging.getLogger(__name__)

IMPORT_ORDER = (Collection.ARTISTS, Collection.RELEASES)


@dataclass
class ImportReport:
    """Per-collection counts of imported and skipped records."""
    imported: dict[Collection, int] = field(default_factory=dict)
    skipped: dict[Collection, list[str]] = field(default_factory=dict)


async def import_catalog(
    source: Store,
    target: Store,
    max_attempts: int = DEFAULT_SLUG_MAX_ATTEMPTS,
) -> ImportReport:
    """Copy every artist and release from source to target."""
    report = ImportReport()
    for collection in IMPORT_ORDER:
        report.imported[collection] = 0
        report.skipped[collection] = []
        source_field = SOURCE_FIELDS[collection]

        for entity in await source.find_all(collection):
            if await target.find_one(collection, where(id=entity.id)) is not None:
                report.skipped[collection].append(entity.id)
                continue
            if entity.created_at is None:
                entity = entity.with_changes(created_at=utc_now())
            base = entity.slug or generate_slug(getattr(entity, source_field))

            async def insert(slug: str | None, entity=entity):
                return await target.insert(collection, entity.with_changes(slug=slug))

            await write_with_unique_slug(
                target, collection, base, entity.id, insert, max_attempts,
            )
            report.imported[collection] += 1

        logger.info(
            f"Imported {report.imported[collection]} {collection.value}, "
            f"skipped {len(report.skipped[collection])} existing",
            extra={"collection": collection.value},
        )
    return report
