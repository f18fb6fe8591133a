"""Referential Integrity — pure delete-guard decision from an observed child count.

Invariants:
    - PURE: the caller counts children, this module only decides
    - child_count > 0 always yields Conflict naming the blocking relationship
"""

from catalog.core.domain_types import (
    Allow, Collection, Conflict, EntityId, GuardDecision, RESOURCE_NAMES,
)


def evaluate_delete_guard(
    parent_collection: Collection,
    parent_id: EntityId,
    child_collection: Collection,
    foreign_key_field: str,
    child_count: int,
) -> GuardDecision:
    """Allow when nothing references the parent, Conflict otherwise."""
    if child_count <= 0:
        return Allow()
    parent = RESOURCE_NAMES[parent_collection]
    return Conflict(
        reason=(
            f"Cannot delete {parent.lower()} '{parent_id}': "
            f"{child_count} {child_collection.value} still reference it "
            f"via {foreign_key_field}. Delete them first."
        ),
        parent_collection=parent_collection,
        parent_id=parent_id,
        child_collection=child_collection,
        foreign_key_field=foreign_key_field,
        blocking_count=child_count,
    )
