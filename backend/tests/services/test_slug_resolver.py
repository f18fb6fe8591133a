"""Slug resolver tests — uniqueness, identifier lookup, delete guard, write retry.

Tests cover:
    - resolve_unique: free base, numeric suffixing, self-exclusion, empty base
    - resolve_by_identifier: slug first, id fallback, not found
    - guard_delete: Allow with no children, Conflict with a count
    - write_with_unique_slug: retry after a concurrent claim, exhaustion
"""

import pytest

from catalog.core.domain_types import Allow, Collection, Conflict, EntityId
from catalog.core.entities import Artist, Release
from catalog.core.errors import (
    ResourceNotFoundError, SlugCollisionError, SlugResolutionExhaustedError,
)
from catalog.core.repository_protocols import where
from catalog.infrastructure.memory_store import MemoryStore
from catalog.services.slug_resolver import (
    guard_delete, resolve_by_identifier, resolve_unique, write_with_unique_slug,
)


def _artists(*specs: tuple[str, str, str | None]) -> MemoryStore:
    return MemoryStore({
        Collection.ARTISTS: [
            Artist(id=EntityId(i), name=n, slug=s) for i, n, s in specs
        ],
    })


class RacingStore(MemoryStore):
    """Claims the requested slug for a rival entity right before the first insert."""

    def __init__(self):
        super().__init__()
        self.raced = False

    async def insert(self, collection, entity):
        if not self.raced and entity.slug:
            self.raced = True
            await super().insert(
                collection, Artist(id=EntityId("rival"), name="Rival", slug=entity.slug),
            )
        return await super().insert(collection, entity)


class AlwaysCollidingStore(MemoryStore):
    async def insert(self, collection, entity):
        raise SlugCollisionError(collection.value, entity.slug)


# ─── resolve_unique ──────────────────────────────────────────────

async def test_free_base_is_returned_unchanged(store):
    assert await resolve_unique(store, Collection.ARTISTS, "echo") == "echo"


async def test_taken_base_gets_first_free_suffix():
    store = _artists(("a1", "Echo", "echo"), ("a2", "Echo", "echo-1"))

    assert await resolve_unique(store, Collection.ARTISTS, "echo") == "echo-2"


async def test_gaps_in_suffixes_are_reused():
    store = _artists(("a1", "Echo", "echo"), ("a3", "Echo", "echo-2"))

    assert await resolve_unique(store, Collection.ARTISTS, "echo") == "echo-1"


async def test_entity_keeps_its_own_slug():
    store = _artists(("a1", "Echo", "echo"))

    slug = await resolve_unique(store, Collection.ARTISTS, "echo", EntityId("a1"))
    assert slug == "echo"


async def test_empty_base_stays_empty():
    store = _artists(("a1", "???", None))

    assert await resolve_unique(store, Collection.ARTISTS, "") == ""


async def test_collections_have_independent_slug_spaces():
    store = _artists(("a1", "Echo", "echo"))

    assert await resolve_unique(store, Collection.RELEASES, "echo") == "echo"


# ─── resolve_by_identifier ───────────────────────────────────────

async def test_resolves_by_slug():
    store = _artists(("a1", "Echo", "echo"))

    artist = await resolve_by_identifier(store, Collection.ARTISTS, "echo")
    assert artist.id == "a1"


async def test_falls_back_to_primary_id():
    store = _artists(("1712345678901", "???", None))

    artist = await resolve_by_identifier(store, Collection.ARTISTS, "1712345678901")
    assert artist.name == "???"


async def test_slug_takes_precedence_over_id():
    # One artist's slug equals another artist's id
    store = _artists(("echo", "Original", "original"), ("a2", "Echo", "echo"))

    artist = await resolve_by_identifier(store, Collection.ARTISTS, "echo")
    assert artist.id == "a2"


async def test_unknown_identifier_is_not_found(store):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        await resolve_by_identifier(store, Collection.RELEASES, "night-drive")
    assert exc_info.value.http_status == 404
    assert exc_info.value.context.collection == "releases"


# ─── guard_delete ────────────────────────────────────────────────

async def test_guard_allows_artist_without_releases(store):
    decision = await guard_delete(
        store, Collection.ARTISTS, EntityId("42"), Collection.RELEASES, "artist_id",
    )
    assert decision == Allow()


async def test_guard_blocks_artist_with_releases(store):
    for n in range(2):
        await store.insert(Collection.RELEASES, Release(
            id=EntityId(f"r{n}"), title=f"Release {n}", slug=f"release-{n}",
            artist_id="42",
        ))

    decision = await guard_delete(
        store, Collection.ARTISTS, EntityId("42"), Collection.RELEASES, "artist_id",
    )
    assert isinstance(decision, Conflict)
    assert decision.blocking_count == 2


# ─── write_with_unique_slug ──────────────────────────────────────

async def test_write_receives_none_for_empty_base():
    store = MemoryStore()
    seen = []

    async def write(slug):
        seen.append(slug)
        return slug

    await write_with_unique_slug(
        store, Collection.ARTISTS, "", EntityId("a1"), write, 3,
    )
    assert seen == [None]


async def test_concurrent_claim_is_retried_with_next_suffix():
    store = RacingStore()

    async def write(slug):
        return await store.insert(
            Collection.ARTISTS, Artist(id=EntityId("a1"), name="Echo", slug=slug),
        )

    artist = await write_with_unique_slug(
        store, Collection.ARTISTS, "echo", EntityId("a1"), write, 3,
    )
    assert artist.slug == "echo-1"
    rival = await store.find_one(Collection.ARTISTS, where(slug="echo"))
    assert rival.id == "rival"


async def test_gives_up_after_max_attempts():
    store = AlwaysCollidingStore()
    calls = 0

    async def write(slug):
        nonlocal calls
        calls += 1
        return await store.insert(
            Collection.ARTISTS, Artist(id=EntityId("a1"), name="Echo", slug=slug),
        )

    with pytest.raises(SlugResolutionExhaustedError) as exc_info:
        await write_with_unique_slug(
            store, Collection.ARTISTS, "echo", EntityId("a1"), write, 3,
        )
    assert calls == 3
    assert exc_info.value.http_status == 409
