"""Catalog service tests — CRUD flows with slug assignment and the artist delete guard.

Tests cover:
    - Create assigns "echo", then "echo-1" for a same-named artist
    - Unsluggable names produce id-only entities
    - Update keeps the slug unless the source field changes
    - Rename regenerates, and never collides with the entity's own slug
    - Update backfills a slug for an entity that had none
    - Managed fields (id, slug, timestamps) ignore caller input
    - Artist delete blocked while releases reference it
    - Listing order for artists and releases
"""

import pytest

from catalog.core.domain_types import Collection, EntityId
from catalog.core.entities import Artist
from catalog.core.errors import DeleteConflictError, ResourceNotFoundError
from catalog.infrastructure.memory_store import MemoryStore
from catalog.services.catalog_service import CatalogService


@pytest.fixture
def service(store):
    return CatalogService(store)


# ─── Create ──────────────────────────────────────────────────────

async def test_create_assigns_slug_from_name(service):
    artist = await service.create_artist({"name": "Night Drive, Vol. 2!"})

    assert artist.slug == "night-drive-vol-2"
    assert artist.id
    assert artist.created_at is not None


async def test_same_name_gets_suffixed_slug(service):
    first = await service.create_artist({"name": "Echo"})
    second = await service.create_artist({"name": "ECHO"})

    assert first.slug == "echo"
    assert second.slug == "echo-1"
    assert first.id != second.id


async def test_unsluggable_name_is_reachable_by_id_only(service):
    artist = await service.create_artist({"name": "!!!"})

    assert artist.slug is None
    fetched = await service.get_artist(artist.id)
    assert fetched.name == "!!!"


async def test_managed_fields_ignore_caller_input(service):
    artist = await service.create_artist(
        {"name": "Echo", "id": "forged", "slug": "forged-slug"},
    )

    assert artist.id != "forged"
    assert artist.slug == "echo"


async def test_release_slug_from_title(service):
    release = await service.create_release(
        {"title": "Night Drive", "artist_id": "42", "date": "2024"},
    )

    assert release.slug == "night-drive"
    assert release.artist_id == "42"


# ─── Read ────────────────────────────────────────────────────────

async def test_get_by_slug_or_id(service):
    artist = await service.create_artist({"name": "Echo"})

    assert (await service.get_artist("echo")).id == artist.id
    assert (await service.get_artist(artist.id)).slug == "echo"


async def test_get_unknown_raises_not_found(service):
    with pytest.raises(ResourceNotFoundError):
        await service.get_release("does-not-exist")


async def test_artists_listed_by_name(service):
    for name in ("delta", "Alpha", "charlie"):
        await service.create_artist({"name": name})

    names = [a.name for a in await service.list_artists()]
    assert names == ["Alpha", "charlie", "delta"]


async def test_releases_listed_newest_first(service):
    for title, year in (("Old", "2019"), ("New", "2024"), ("Mid", "2021")):
        await service.create_release({"title": title, "date": year})

    titles = [r.title for r in await service.list_releases()]
    assert titles == ["New", "Mid", "Old"]


async def test_artist_releases(service):
    artist = await service.create_artist({"name": "Echo"})
    await service.create_release({"title": "A", "artist_id": artist.id, "date": "2020"})
    await service.create_release({"title": "B", "artist_id": artist.id, "date": "2023"})
    await service.create_release({"title": "C", "artist_id": "someone-else"})

    found, releases = await service.list_artist_releases("echo")

    assert found.id == artist.id
    assert [r.title for r in releases] == ["B", "A"]


# ─── Update ──────────────────────────────────────────────────────

async def test_update_without_rename_keeps_slug(service):
    artist = await service.create_artist({"name": "Echo"})

    updated = await service.update_artist(artist.id, {"bio": "Dub techno"})

    assert updated.slug == "echo"
    assert updated.bio == "Dub techno"
    assert updated.updated_at is not None


async def test_resaving_same_name_keeps_slug(service):
    artist = await service.create_artist({"name": "Echo"})

    updated = await service.update_artist(artist.id, {"name": "Echo"})

    assert updated.slug == "echo"


async def test_rename_regenerates_slug(service):
    artist = await service.create_artist({"name": "Echo"})

    updated = await service.update_artist(artist.id, {"name": "Echo Chamber"})

    assert updated.slug == "echo-chamber"
    with pytest.raises(ResourceNotFoundError):
        await service.get_artist("echo")
    assert (await service.get_artist(artist.id)).name == "Echo Chamber"


async def test_rename_to_case_variant_keeps_own_slug(service):
    artist = await service.create_artist({"name": "Echo"})

    updated = await service.update_artist(artist.id, {"name": "ECHO"})

    assert updated.slug == "echo"


async def test_rename_onto_taken_slug_is_suffixed(service):
    await service.create_artist({"name": "Echo"})
    other = await service.create_artist({"name": "Delta"})

    updated = await service.update_artist(other.id, {"name": "Echo"})

    assert updated.slug == "echo-1"


async def test_update_backfills_missing_slug():
    store = MemoryStore({
        Collection.ARTISTS: [Artist(id=EntityId("1712345678901"), name="Echo")],
    })
    service = CatalogService(store)

    updated = await service.update_artist("1712345678901", {"bio": "x"})

    assert updated.slug == "echo"


async def test_update_ignores_slug_in_changes(service):
    artist = await service.create_artist({"name": "Echo"})

    updated = await service.update_artist(artist.id, {"slug": "hijack", "bio": "x"})

    assert updated.slug == "echo"


async def test_update_unknown_id_raises(service):
    with pytest.raises(ResourceNotFoundError):
        await service.update_release("missing", {"title": "x"})


async def test_update_does_not_resolve_slugs(service):
    artist = await service.create_artist({"name": "Echo"})

    with pytest.raises(ResourceNotFoundError):
        await service.update_artist("echo", {"bio": "x"})
    assert artist.slug == "echo"


# ─── Delete ──────────────────────────────────────────────────────

async def test_delete_artist_without_releases(service):
    artist = await service.create_artist({"name": "Echo"})

    await service.delete_artist(artist.id)

    with pytest.raises(ResourceNotFoundError):
        await service.get_artist(artist.id)


async def test_delete_artist_with_releases_is_blocked(service):
    artist = await service.create_artist({"name": "Echo"})
    await service.create_release({"title": "A", "artist_id": artist.id})
    await service.create_release({"title": "B", "artist_id": artist.id})

    with pytest.raises(DeleteConflictError) as exc_info:
        await service.delete_artist(artist.id)

    assert exc_info.value.blocking_count == 2
    assert (await service.get_artist("echo")).id == artist.id


async def test_delete_artist_allowed_after_releases_removed(service):
    artist = await service.create_artist({"name": "Echo"})
    release = await service.create_release({"title": "A", "artist_id": artist.id})

    await service.delete_release(release.id)
    await service.delete_artist(artist.id)

    assert await service.list_artists() == []


async def test_delete_unknown_raises_not_found(service):
    with pytest.raises(ResourceNotFoundError):
        await service.delete_artist("missing")
    with pytest.raises(ResourceNotFoundError):
        await service.delete_release("missing")


async def test_deleted_slug_is_reusable(service):
    first = await service.create_artist({"name": "Echo"})
    await service.delete_artist(first.id)

    again = await service.create_artist({"name": "Echo"})

    assert again.slug == "echo"
