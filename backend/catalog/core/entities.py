"""Catalog Entities — immutable Artist and Release values shared by every store adapter.

Invariants:
    - Entities are frozen: changes produce a new value via with_changes()
    - id is the only attribute guaranteed present; slug is None when unassigned
    - from_record() ignores unknown keys so older/newer records still load

Design Decisions:
    - Plain dataclasses over ORM objects in core: adapters map to/from their own
      representation (ORM rows, JSON dicts) at the boundary
"""

import uuid
from dataclasses import asdict, dataclass, fields, replace
from datetime import datetime, timezone
from typing import Any, Mapping, Union

from catalog.core.domain_types import Collection, EntityId


@dataclass(frozen=True)
class Artist:
    """Label artist — slug seeded from name."""
    id: EntityId
    name: str = ""
    slug: str | None = None
    bio: str = ""
    image: str = ""
    website_url: str = ""
    instagram_url: str = ""
    soundcloud_url: str = ""
    spotify_url: str = ""
    bandcamp_url: str = ""
    other_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def with_changes(self, **changes: Any) -> "Artist":
        return replace(self, **changes)


@dataclass(frozen=True)
class Release:
    """Label release — slug seeded from title, artist_id references an Artist."""
    id: EntityId
    title: str = ""
    slug: str | None = None
    artist_id: str = ""
    description: str = ""
    date: str = ""
    image: str = ""
    spotify_url: str = ""
    soundcloud_url: str = ""
    bandcamp_url: str = ""
    apple_music_url: str = ""
    youtube_url: str = ""
    tidal_url: str = ""
    other_url: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def with_changes(self, **changes: Any) -> "Release":
        return replace(self, **changes)


Entity = Union[Artist, Release]

ENTITY_TYPES: dict[Collection, type] = {
    Collection.ARTISTS: Artist,
    Collection.RELEASES: Release,
}


def new_entity_id() -> EntityId:
    return EntityId(uuid.uuid4().hex)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def field_names(collection: Collection) -> tuple[str, ...]:
    return tuple(f.name for f in fields(ENTITY_TYPES[collection]))


def from_record(collection: Collection, record: Mapping[str, Any]) -> Entity:
    """Build an entity from a mapping, dropping keys the entity does not define."""
    known = field_names(collection)
    return ENTITY_TYPES[collection](**{k: v for k, v in record.items() if k in known})


def to_record(entity: Entity) -> dict[str, Any]:
    return asdict(entity)
