"""Catalog Service — artist/release CRUD orchestrating the slug subsystem over a Store.

Invariants:
    - Create: source field → generate_slug → write_with_unique_slug → store.insert
    - Update: slug regenerated only when the source field changes or no slug exists yet
    - Update/delete address entities by primary identifier; reads accept slug or id
    - Artist delete runs the release guard and the delete inside one store transaction
    - id, slug, created_at and updated_at are never taken from caller input

Design Decisions:
    - Regenerate-on-rename: renaming an artist moves its pretty URL; links by
      primary identifier keep working (ADR: slug regeneration policy, see DESIGN.md)
    - Release.artist_id is not validated on write, matching the store contract;
      only deletion of the referenced artist is guarded
"""

import logging
from typing import Any, Mapping

from catalog.core.domain_types import (
    Collection, Conflict, DEFAULT_SLUG_MAX_ATTEMPTS, EntityId,
    RELEASE_ARTIST_FIELD, RESOURCE_NAMES, SOURCE_FIELDS,
)
from catalog.core.entities import (
    Artist, Entity, Release, from_record, new_entity_id, utc_now,
)
from catalog.core.errors import (
    DeleteConflictError, ErrorContext, ResourceNotFoundError,
)
from catalog.core.repository_protocols import Store, where
from catalog.core.slugs import generate_slug, needs_new_slug
from catalog.services.slug_resolver import (
    guard_delete, resolve_by_identifier, write_with_unique_slug,
)

logger = logging.getLogger(__name__)

_MANAGED_FIELDS = frozenset({"id", "slug", "created_at", "updated_at"})


class CatalogService:
    """Entry point used by routes and scripts for every catalog write and read."""

    def __init__(self, store: Store, max_slug_attempts: int = DEFAULT_SLUG_MAX_ATTEMPTS):
        self._store = store
        self._max_slug_attempts = max_slug_attempts

    # ─── Artists ────────────────────────────────────────────────

    async def list_artists(self) -> list[Artist]:
        artists = await self._store.find_all(Collection.ARTISTS)
        return sorted(artists, key=lambda a: (a.name or "").lower())

    async def get_artist(self, identifier: str) -> Artist:
        return await resolve_by_identifier(self._store, Collection.ARTISTS, identifier)

    async def create_artist(self, fields: Mapping[str, Any]) -> Artist:
        return await self._create(Collection.ARTISTS, fields)

    async def update_artist(self, artist_id: str, changes: Mapping[str, Any]) -> Artist:
        return await self._update(Collection.ARTISTS, EntityId(artist_id), changes)

    async def delete_artist(self, artist_id: str) -> None:
        entity_id = EntityId(artist_id)
        async with self._store.transaction():
            decision = await guard_delete(
                self._store, Collection.ARTISTS, entity_id,
                Collection.RELEASES, RELEASE_ARTIST_FIELD,
            )
            if isinstance(decision, Conflict):
                logger.info(
                    f"Artist delete blocked by {decision.blocking_count} release(s)",
                    extra={"collection": Collection.ARTISTS.value, "entity_id": artist_id},
                )
                raise DeleteConflictError(
                    decision.reason, decision.blocking_count,
                    ErrorContext(collection=Collection.ARTISTS.value, entity_id=artist_id),
                )
            deleted = await self._store.delete(Collection.ARTISTS, entity_id)
        if not deleted:
            raise self._not_found(Collection.ARTISTS, artist_id)
        logger.info(
            "Artist deleted",
            extra={"collection": Collection.ARTISTS.value, "entity_id": artist_id},
        )

    async def list_artist_releases(self, identifier: str) -> tuple[Artist, list[Release]]:
        """Resolve an artist by slug or id and return it with its releases."""
        artist = await self.get_artist(identifier)
        releases = await self._store.find_all(
            Collection.RELEASES, where(**{RELEASE_ARTIST_FIELD: artist.id}),
        )
        return artist, _newest_first(releases)

    # ─── Releases ───────────────────────────────────────────────

    async def list_releases(self) -> list[Release]:
        return _newest_first(await self._store.find_all(Collection.RELEASES))

    async def get_release(self, identifier: str) -> Release:
        return await resolve_by_identifier(self._store, Collection.RELEASES, identifier)

    async def create_release(self, fields: Mapping[str, Any]) -> Release:
        return await self._create(Collection.RELEASES, fields)

    async def update_release(self, release_id: str, changes: Mapping[str, Any]) -> Release:
        return await self._update(Collection.RELEASES, EntityId(release_id), changes)

    async def delete_release(self, release_id: str) -> None:
        if not await self._store.delete(Collection.RELEASES, EntityId(release_id)):
            raise self._not_found(Collection.RELEASES, release_id)
        logger.info(
            "Release deleted",
            extra={"collection": Collection.RELEASES.value, "entity_id": release_id},
        )

    # ─── Shared write paths ─────────────────────────────────────

    async def _create(self, collection: Collection, fields: Mapping[str, Any]) -> Entity:
        entity_id = new_entity_id()
        entity = from_record(collection, {
            **_user_fields(fields), "id": entity_id, "created_at": utc_now(),
        })
        source = getattr(entity, SOURCE_FIELDS[collection])

        async def insert(slug: str | None) -> Entity:
            return await self._store.insert(collection, entity.with_changes(slug=slug))

        created = await write_with_unique_slug(
            self._store, collection, generate_slug(source), entity_id,
            insert, self._max_slug_attempts,
        )
        logger.info(
            f"{RESOURCE_NAMES[collection]} created",
            extra={
                "collection": collection.value, "entity_id": created.id,
                "slug": created.slug,
            },
        )
        return created

    async def _update(
        self, collection: Collection, entity_id: EntityId, changes: Mapping[str, Any],
    ) -> Entity:
        current = await self._store.find_one(collection, where(id=entity_id))
        if current is None:
            raise self._not_found(collection, entity_id)

        source_field = SOURCE_FIELDS[collection]
        changes = {**_user_fields(changes), "updated_at": utc_now()}
        if not needs_new_slug(
            current.slug, getattr(current, source_field), changes.get(source_field),
        ):
            return await self._store.update(collection, entity_id, changes)

        source = changes.get(source_field, getattr(current, source_field))

        async def update(slug: str | None) -> Entity:
            return await self._store.update(
                collection, entity_id, {**changes, "slug": slug},
            )

        updated = await write_with_unique_slug(
            self._store, collection, generate_slug(source), entity_id,
            update, self._max_slug_attempts,
        )
        if updated.slug != current.slug:
            logger.info(
                f"{RESOURCE_NAMES[collection]} slug changed from '{current.slug}'",
                extra={
                    "collection": collection.value, "entity_id": entity_id,
                    "slug": updated.slug,
                },
            )
        return updated

    @staticmethod
    def _not_found(collection: Collection, entity_id: str) -> ResourceNotFoundError:
        return ResourceNotFoundError(
            RESOURCE_NAMES[collection], entity_id,
            ErrorContext(collection=collection.value, entity_id=entity_id),
        )


def _user_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in fields.items() if k not in _MANAGED_FIELDS}


def _newest_first(releases: list[Release]) -> list[Release]:
    """Order by release date, then creation time, both descending."""
    return sorted(
        releases,
        key=lambda r: (
            r.date or "",
            r.created_at.timestamp() if r.created_at else 0.0,
        ),
        reverse=True,
    )
