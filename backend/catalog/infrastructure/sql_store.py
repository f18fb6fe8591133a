"""SQL Store — relational Store adapter over an SQLAlchemy AsyncSession.

Invariants:
    - Predicates become WHERE clauses; nothing is filtered in Python
    - Slug uniqueness is enforced by the uq_<table>_slug constraint; a violation
      rolls back and surfaces as SlugCollisionError
    - Outside transaction() every write commits immediately; inside it, writes are
      flushed and committed together when the block exits
    - Returned entities are detached dataclass values, never ORM rows

Design Decisions:
    - The caller owns the AsyncSession (request-scoped via get_store, or a script's
      session factory); the session must use expire_on_commit=False
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Mapping

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.domain_types import Collection, EntityId, RESOURCE_NAMES
from catalog.core.entities import Entity, field_names, from_record, to_record
from catalog.core.errors import (
    DatabaseError, ErrorContext, ResourceNotFoundError, SlugCollisionError,
)
from catalog.core.repository_protocols import Predicate
from catalog.models import MODELS

logger = logging.getLogger(__name__)


class SqlStore:
    """Store protocol implementation backed by PostgreSQL / SQLite tables."""

    def __init__(self, session: AsyncSession):
        self._session = session
        self._in_transaction = False

    async def find_one(
        self, collection: Collection, predicate: Predicate,
    ) -> Entity | None:
        model = MODELS[collection]
        result = await self._session.execute(
            select(model).where(*_clauses(model, predicate)).limit(1),
        )
        row = result.scalar_one_or_none()
        return _to_entity(collection, row) if row is not None else None

    async def find_all(
        self, collection: Collection, predicate: Predicate | None = None,
    ) -> list[Entity]:
        model = MODELS[collection]
        query = select(model)
        if predicate is not None:
            query = query.where(*_clauses(model, predicate))
        result = await self._session.execute(query)
        return [_to_entity(collection, row) for row in result.scalars().all()]

    async def count(self, collection: Collection, predicate: Predicate) -> int:
        model = MODELS[collection]
        result = await self._session.execute(
            select(func.count()).select_from(model).where(*_clauses(model, predicate)),
        )
        return int(result.scalar_one())

    async def insert(self, collection: Collection, entity: Entity) -> Entity:
        values = {
            name: value for name, value in to_record(entity).items()
            if value is not None or name == "slug"
        }
        row = MODELS[collection](**values)
        self._session.add(row)
        await self._write(collection, entity.id, entity.slug, "insert")
        return _to_entity(collection, row)

    async def update(
        self, collection: Collection, entity_id: EntityId, changes: Mapping[str, Any],
    ) -> Entity:
        row = await self._session.get(MODELS[collection], entity_id)
        if row is None:
            raise ResourceNotFoundError(
                RESOURCE_NAMES[collection], entity_id,
                ErrorContext(collection=collection.value, entity_id=entity_id),
            )
        for name, value in changes.items():
            setattr(row, name, value)
        await self._write(collection, entity_id, changes.get("slug"), "update")
        return _to_entity(collection, row)

    async def delete(self, collection: Collection, entity_id: EntityId) -> bool:
        model = MODELS[collection]
        result = await self._session.execute(
            delete(model).where(model.id == entity_id),
        )
        if not self._in_transaction:
            await self._session.commit()
        return result.rowcount > 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        """Group operations into one commit; roll everything back on error."""
        if self._in_transaction:
            yield
            return
        self._in_transaction = True
        try:
            yield
            await self._session.commit()
        except Exception:
            await self._session.rollback()
            raise
        finally:
            self._in_transaction = False

    async def _write(
        self, collection: Collection, entity_id: str, slug: str | None, operation: str,
    ) -> None:
        try:
            await self._session.flush()
            if not self._in_transaction:
                await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            if slug and "slug" in str(e.orig).lower():
                logger.info(
                    f"Slug constraint rejected {operation}",
                    extra={"collection": collection.value, "slug": slug},
                )
                raise SlugCollisionError(collection.value, slug) from e
            logger.error(f"DB integrity error on {operation}: {e}")
            raise DatabaseError(
                "Integrity constraint violated", operation,
                ErrorContext(collection=collection.value, entity_id=entity_id),
            ) from e


def _clauses(model, predicate: Predicate) -> list:
    clauses = [getattr(model, name) == value for name, value in predicate.equals.items()]
    clauses.extend(
        getattr(model, name) != value for name, value in predicate.not_equals.items()
    )
    return clauses


def _to_entity(collection: Collection, row) -> Entity:
    return from_record(
        collection, {name: getattr(row, name) for name in field_names(collection)},
    )
