"""Slug Backfill — assigns slugs to entities created before slugs existed.

Invariants:
    - Entities that already have a slug are never touched
    - Entities whose source field normalizes to "" stay slug-less (id-only addressing)
    - Every assigned slug goes through write_with_unique_slug
"""

import logging
from dataclasses import dataclass, field

from catalog.core.domain_types import (
    Collection, DEFAULT_SLUG_MAX_ATTEMPTS, SOURCE_FIELDS,
)
from catalog.core.repository_protocols import Store
from catalog.core.slugs import generate_slug
from catalog.services.slug_resolver import write_with_unique_slug

logger = logging.getLogger(__name__)


@dataclass
class BackfillReport:
    """Outcome of one backfill pass over a collection."""
    collection: Collection
    assigned: dict[str, str] = field(default_factory=dict)
    already_slugged: int = 0
    unsluggable: list[str] = field(default_factory=list)


async def backfill_slugs(
    store: Store,
    collection: Collection,
    max_attempts: int = DEFAULT_SLUG_MAX_ATTEMPTS,
) -> BackfillReport:
    """Give every slug-less entity in collection a unique slug from its source field."""
    report = BackfillReport(collection=collection)
    source_field = SOURCE_FIELDS[collection]

    for entity in await store.find_all(collection):
        if entity.slug:
            report.already_slugged += 1
            continue
        base = generate_slug(getattr(entity, source_field))
        if not base:
            report.unsluggable.append(entity.id)
            continue

        async def assign(slug: str | None, entity_id=entity.id):
            return await store.update(collection, entity_id, {"slug": slug})

        updated = await write_with_unique_slug(
            store, collection, base, entity.id, assign, max_attempts,
        )
        report.assigned[entity.id] = updated.slug
        logger.info(
            "Backfilled slug",
            extra={
                "collection": collection.value, "entity_id": entity.id,
                "slug": updated.slug,
            },
        )

    logger.info(
        f"Slug backfill complete: {len(report.assigned)} assigned, "
        f"{report.already_slugged} already had one, "
        f"{len(report.unsluggable)} without usable source text",
        extra={"collection": collection.value},
    )
    return report
