"""Flat-file import tests — copying a JSON catalog into another store.

Tests cover:
    - Ids and slugs carried over; slug-less records get one
    - Existing ids in the target are skipped
    - A source slug taken in the target is suffixed
"""

import json

from catalog.core.domain_types import Collection, EntityId
from catalog.core.entities import Artist
from catalog.core.repository_protocols import where
from catalog.infrastructure.json_store import JsonFileStore
from catalog.infrastructure.memory_store import MemoryStore
from catalog.services.flat_file_import import import_catalog


def _write(path, name, records):
    path.mkdir(parents=True, exist_ok=True)
    (path / f"{name}.json").write_text(json.dumps(records), encoding="utf-8")


async def test_imports_artists_and_releases(tmp_path, store):
    _write(tmp_path / "src", "artists", [
        {"id": "1712345678901", "name": "Echo", "slug": "echo"},
        {"id": "1712345678902", "name": "Delta"},
    ])
    _write(tmp_path / "src", "releases", [
        {"id": "1712345679000", "title": "Night Drive", "artistId": "1712345678901"},
    ])

    report = await import_catalog(JsonFileStore(tmp_path / "src"), store)

    assert report.imported == {Collection.ARTISTS: 2, Collection.RELEASES: 1}
    delta = await store.find_one(Collection.ARTISTS, where(id="1712345678902"))
    assert delta.slug == "delta"
    assert delta.created_at is not None
    release = await store.find_one(Collection.RELEASES, where(slug="night-drive"))
    assert release.artist_id == "1712345678901"


async def test_existing_ids_are_skipped(tmp_path):
    _write(tmp_path, "artists", [{"id": "1", "name": "Echo", "slug": "echo"}])
    target = MemoryStore({
        Collection.ARTISTS: [Artist(id=EntityId("1"), name="Kept", slug="kept")],
    })

    report = await import_catalog(JsonFileStore(tmp_path), target)

    assert report.skipped[Collection.ARTISTS] == ["1"]
    kept = await target.find_one(Collection.ARTISTS, where(id="1"))
    assert kept.name == "Kept"


async def test_taken_source_slug_is_suffixed(tmp_path):
    _write(tmp_path, "artists", [{"id": "2", "name": "Echo", "slug": "echo"}])
    target = MemoryStore({
        Collection.ARTISTS: [Artist(id=EntityId("1"), name="Echo", slug="echo")],
    })

    await import_catalog(JsonFileStore(tmp_path), target)

    imported = await target.find_one(Collection.ARTISTS, where(id="2"))
    assert imported.slug == "echo-1"
