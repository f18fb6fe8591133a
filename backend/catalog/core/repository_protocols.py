"""Boundary Protocols — contracts between the slug subsystem and store adapters.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - Every persistence backend is reached through the Store protocol
    - Adapters enforce non-empty slug uniqueness atomically and raise SlugCollisionError
    - update() returns a NEW entity value; stored values are never mutated in place

Design Decisions:
    - Protocol over ABC: structural subtyping, adapters share no base class
    - Predicate is data, not a callable: SQL adapters translate it to WHERE clauses,
      in-process adapters evaluate it with matches()
"""

from dataclasses import dataclass, field
from typing import Any, AsyncContextManager, Mapping, Protocol

from catalog.core.domain_types import Collection, EntityId
from catalog.core.entities import Entity


@dataclass(frozen=True)
class Predicate:
    """Conjunction of field == value and field != value filters."""
    equals: Mapping[str, Any] = field(default_factory=dict)
    not_equals: Mapping[str, Any] = field(default_factory=dict)

    def matches(self, entity: Entity) -> bool:
        for name, value in self.equals.items():
            if getattr(entity, name) != value:
                return False
        for name, value in self.not_equals.items():
            if getattr(entity, name) == value:
                return False
        return True


def where(**equals: Any) -> Predicate:
    """Shorthand for an equality-only predicate."""
    return Predicate(equals=equals)


class Store(Protocol):
    """Contract for collection-scoped entity persistence — implemented by adapters."""
    async def find_one(
        self, collection: Collection, predicate: Predicate,
    ) -> Entity | None: ...
    async def find_all(
        self, collection: Collection, predicate: Predicate | None = None,
    ) -> list[Entity]: ...
    async def count(self, collection: Collection, predicate: Predicate) -> int: ...
    async def insert(self, collection: Collection, entity: Entity) -> Entity: ...
    async def update(
        self, collection: Collection, entity_id: EntityId, changes: Mapping[str, Any],
    ) -> Entity: ...
    async def delete(self, collection: Collection, entity_id: EntityId) -> bool: ...
    def transaction(self) -> AsyncContextManager[None]: ...
