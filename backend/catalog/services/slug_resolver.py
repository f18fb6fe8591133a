"""Slug Resolver — store-backed uniqueness, identifier resolution and delete guard.

Invariants:
    - resolve_unique never returns a slug owned by another entity as observed at query time
    - resolve_by_identifier tries the slug FIRST and the primary identifier SECOND;
      reversing the order changes which entity pretty URLs route to
    - guard_delete is advisory: callers run it inside store.transaction() with the delete
    - Store failures propagate unchanged; the only local recovery is the
      SlugCollisionError retry in write_with_unique_slug

Design Decisions:
    - Written once against the Store protocol; every backend is an adapter
    - Pure pieces (normalization, candidate sequence, guard decision) live in core/
"""

import logging
from typing import Awaitable, Callable, TypeVar

from catalog.core.domain_types import (
    Collection, EntityId, GuardDecision, RESOURCE_NAMES,
)
from catalog.core.entities import Entity
from catalog.core.errors import (
    ErrorContext, ResourceNotFoundError, SlugCollisionError,
    SlugResolutionExhaustedError,
)
from catalog.core.integrity import evaluate_delete_guard
from catalog.core.repository_protocols import Predicate, Store, where
from catalog.core.slugs import slug_candidates, stored_slug

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def resolve_unique(
    store: Store,
    collection: Collection,
    base_slug: str,
    exclude_id: EntityId | None = None,
) -> str:
    """Return base_slug or the first free base_slug-N in collection.

    exclude_id is the entity being written, so re-saving an entity with its own
    slug does not pick up a suffix. An empty base is returned unchanged.
    """
    if not base_slug:
        return base_slug
    not_equals = {"id": exclude_id} if exclude_id else {}
    for candidate in slug_candidates(base_slug):
        owner = await store.find_one(
            collection, Predicate(equals={"slug": candidate}, not_equals=not_equals),
        )
        if owner is None:
            if candidate != base_slug:
                logger.debug(
                    f"Slug '{base_slug}' taken, using '{candidate}'",
                    extra={"collection": collection.value, "slug": candidate},
                )
            return candidate
    raise AssertionError("unreachable: slug_candidates is infinite")


async def resolve_by_identifier(
    store: Store, collection: Collection, identifier: str,
) -> Entity:
    """Fetch an entity by slug, falling back to primary identifier."""
    entity = await store.find_one(collection, where(slug=identifier))
    if entity is None:
        entity = await store.find_one(collection, where(id=identifier))
    if entity is None:
        raise ResourceNotFoundError(
            RESOURCE_NAMES[collection], identifier,
            ErrorContext(collection=collection.value, entity_id=identifier),
        )
    return entity


async def guard_delete(
    store: Store,
    parent_collection: Collection,
    parent_id: EntityId,
    child_collection: Collection,
    foreign_key_field: str,
) -> GuardDecision:
    """Count children referencing parent_id and decide Allow / Conflict."""
    child_count = await store.count(
        child_collection, where(**{foreign_key_field: parent_id}),
    )
    return evaluate_delete_guard(
        parent_collection, parent_id, child_collection, foreign_key_field, child_count,
    )


async def write_with_unique_slug(
    store: Store,
    collection: Collection,
    base_slug: str,
    entity_id: EntityId,
    write: Callable[[str | None], Awaitable[T]],
    max_attempts: int,
) -> T:
    """Resolve a free slug and hand it to write(); re-resolve if the store rejects it.

    The store's own uniqueness check closes the gap between resolve_unique and the
    write. write() receives None when base_slug is empty.
    """
    for attempt in range(1, max_attempts + 1):
        slug = await resolve_unique(store, collection, base_slug, entity_id)
        try:
            return await write(stored_slug(slug))
        except SlugCollisionError:
            logger.warning(
                f"Slug '{slug}' claimed concurrently, retrying",
                extra={
                    "collection": collection.value, "slug": slug,
                    "entity_id": entity_id, "attempt": attempt,
                },
            )
    raise SlugResolutionExhaustedError(
        base_slug, max_attempts,
        ErrorContext(collection=collection.value, entity_id=entity_id, slug=base_slug),
    )
