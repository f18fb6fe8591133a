"""Memory Store — in-process Store adapter holding entities per collection.

Invariants:
    - State lives on the instance; the owner (app lifespan or test) controls its lifetime
    - Slug uniqueness is checked and the write applied under one lock acquisition
    - Writes build a new mapping, persist it, then swap it in: a failed persist
      leaves the cached collection unchanged
    - transaction() snapshots the collections and restores them if the block raises
    - Records are frozen entities, so handing them out never exposes mutable state
    - Iteration order is insertion order

Design Decisions:
    - The lock is re-entrant per task: operations issued inside transaction() by the
      task that opened it do not wait on themselves
    - _load/_persist hooks let JsonFileStore reuse the same semantics on disk
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Iterable, Mapping

from catalog.core.domain_types import Collection, EntityId, RESOURCE_NAMES
from catalog.core.entities import Entity
from catalog.core.errors import (
    ErrorContext, ResourceNotFoundError, SlugCollisionError, StoreError,
)
from catalog.core.repository_protocols import Predicate

logger = logging.getLogger(__name__)


class MemoryStore:
    """Store protocol implementation over plain dicts."""

    def __init__(self, seed: Mapping[Collection, Iterable[Entity]] | None = None):
        self._collections: dict[Collection, dict[str, Entity]] = {}
        self._lock = asyncio.Lock()
        self._owner: asyncio.Task | None = None
        self._snapshot: dict[Collection, dict[str, Entity]] | None = None
        for collection, entities in (seed or {}).items():
            self._collections[collection] = {e.id: e for e in entities}

    # ─── Store protocol ─────────────────────────────────────────

    async def find_one(
        self, collection: Collection, predicate: Predicate,
    ) -> Entity | None:
        async with self._exclusive():
            records = await self._records(collection)
            return next((e for e in records.values() if predicate.matches(e)), None)

    async def find_all(
        self, collection: Collection, predicate: Predicate | None = None,
    ) -> list[Entity]:
        async with self._exclusive():
            records = await self._records(collection)
            return [
                e for e in records.values()
                if predicate is None or predicate.matches(e)
            ]

    async def count(self, collection: Collection, predicate: Predicate) -> int:
        async with self._exclusive():
            records = await self._records(collection)
            return sum(1 for e in records.values() if predicate.matches(e))

    async def insert(self, collection: Collection, entity: Entity) -> Entity:
        async with self._exclusive():
            records = await self._records(collection)
            if entity.id in records:
                raise StoreError(
                    f"duplicate id '{entity.id}'", "insert",
                    ErrorContext(collection=collection.value, entity_id=entity.id),
                )
            self._check_slug_free(collection, records, entity.slug, entity.id)
            await self._commit(collection, {**records, entity.id: entity})
            return entity

    async def update(
        self, collection: Collection, entity_id: EntityId, changes: Mapping[str, Any],
    ) -> Entity:
        async with self._exclusive():
            records = await self._records(collection)
            current = records.get(entity_id)
            if current is None:
                raise ResourceNotFoundError(
                    RESOURCE_NAMES[collection], entity_id,
                    ErrorContext(collection=collection.value, entity_id=entity_id),
                )
            updated = current.with_changes(**changes)
            self._check_slug_free(collection, records, updated.slug, entity_id)
            await self._commit(collection, {**records, entity_id: updated})
            return updated

    async def delete(self, collection: Collection, entity_id: EntityId) -> bool:
        async with self._exclusive():
            records = await self._records(collection)
            if entity_id not in records:
                return False
            await self._commit(
                collection, {k: e for k, e in records.items() if k != entity_id},
            )
            return True

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Hold the lock for the block; restore every collection if it raises."""
        async with self._exclusive():
            if self._snapshot is not None:
                yield
                return
            self._snapshot = dict(self._collections)
            try:
                yield
            except Exception:
                await self._restore(self._snapshot)
                raise
            finally:
                self._snapshot = None

    # ─── Internals ──────────────────────────────────────────────

    @asynccontextmanager
    async def _exclusive(self) -> AsyncIterator[None]:
        task = asyncio.current_task()
        if task is not None and self._owner is task:
            yield
            return
        async with self._lock:
            self._owner = task
            try:
                yield
            finally:
                self._owner = None

    async def _records(self, collection: Collection) -> dict[str, Entity]:
        if collection not in self._collections:
            self._collections[collection] = await self._load(collection)
            if self._snapshot is not None:
                self._snapshot[collection] = self._collections[collection]
        return self._collections[collection]

    async def _commit(self, collection: Collection, records: dict[str, Entity]) -> None:
        """Persist first; the cache only sees records that reached the backend."""
        await self._persist(collection, records)
        self._collections[collection] = records

    async def _restore(self, snapshot: dict[Collection, dict[str, Entity]]) -> None:
        changed = [
            c for c, records in snapshot.items() if self._collections.get(c) is not records
        ]
        for collection in changed:
            records = snapshot[collection]
            await self._persist(collection, records)
            self._collections[collection] = records
        logger.info(f"Rolled back {len(changed)} collection(s)")

    async def _load(self, collection: Collection) -> dict[str, Entity]:
        return {}

    async def _persist(self, collection: Collection, records: dict[str, Entity]) -> None:
        return None

    @staticmethod
    def _check_slug_free(
        collection: Collection, records: dict[str, Entity], slug: str | None, owner_id: str,
    ) -> None:
        if not slug:
            return
        for other in records.values():
            if other.slug == slug and other.id != owner_id:
                raise SlugCollisionError(collection.value, slug)
