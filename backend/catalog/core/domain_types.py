"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EntityId is an opaque string: assigned once, never recomputed, never reused
    - Collection names are the only namespaces for slug uniqueness
    - A guard decision is exactly one of Allow or Conflict

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log without custom encoders
    - EntityId is str, not UUID: ids imported from the flat-file catalog are
      millisecond timestamps and must survive verbatim
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType, Union


# ─── Identity Types ──────────────────────────────────────────────

EntityId = NewType("EntityId", str)


# ─── Enums ───────────────────────────────────────────────────────

class Collection(str, Enum):
    """Independent namespaces of entities — maps to table / file names."""
    ARTISTS = "artists"
    RELEASES = "releases"


# Field that seeds the slug for each collection
SOURCE_FIELDS: dict[Collection, str] = {
    Collection.ARTISTS: "name",
    Collection.RELEASES: "title",
}

# Human-readable resource names for error messages
RESOURCE_NAMES: dict[Collection, str] = {
    Collection.ARTISTS: "Artist",
    Collection.RELEASES: "Release",
}

# Release -> artist foreign reference
RELEASE_ARTIST_FIELD = "artist_id"

DEFAULT_SLUG_MAX_ATTEMPTS = 3


# ─── Guard Decisions ─────────────────────────────────────────────

@dataclass(frozen=True)
class Allow:
    """Delete may proceed — no dependent entities observed."""


@dataclass(frozen=True)
class Conflict:
    """Delete is blocked by dependent entities."""
    reason: str
    parent_collection: Collection
    parent_id: EntityId
    child_collection: Collection
    foreign_key_field: str
    blocking_count: int


GuardDecision = Union[Allow, Conflict]
