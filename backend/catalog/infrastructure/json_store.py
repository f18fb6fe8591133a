"""JSON File Store — flat-file Store adapter (<data_dir>/artists.json, releases.json).

Invariants:
    - Each collection file is a JSON array of camelCase records, the format the
      public site and the legacy flat-file admin both read
    - A collection is read from disk once per store instance, then written through
      on every mutation (write to temp file + atomic replace)
    - Missing files are treated as empty collections; unreadable files, records
      without an id, duplicate ids and malformed timestamps raise StoreError

Design Decisions:
    - Subclass of MemoryStore: identical locking, uniqueness and predicate semantics,
      only _load/_persist differ
    - File IO runs in a worker thread (asyncio.to_thread) to keep the event loop free
"""

import asyncio
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any

from pydantic.alias_generators import to_camel, to_snake

from catalog.core.domain_types import Collection
from catalog.core.entities import Entity, from_record, to_record
from catalog.core.errors import ErrorContext, StoreError
from catalog.infrastructure.memory_store import MemoryStore

logger = logging.getLogger(__name__)

_DATETIME_FIELDS = ("created_at", "updated_at")


class JsonFileStore(MemoryStore):
    """Store protocol implementation persisting each collection to a JSON file."""

    def __init__(self, data_dir: str | Path):
        super().__init__()
        self.data_dir = Path(data_dir)

    def path_for(self, collection: Collection) -> Path:
        return self.data_dir / f"{collection.value}.json"

    async def _load(self, collection: Collection) -> dict[str, Entity]:
        raw = await asyncio.to_thread(self._read_file, collection)
        records: dict[str, Entity] = {}
        for position, item in enumerate(raw):
            try:
                entity = from_record(collection, _decode(item))
            except (TypeError, ValueError, AttributeError) as e:
                raise StoreError(
                    f"bad record #{position} in {self.path_for(collection).name}: {e}",
                    "load", ErrorContext(collection=collection.value),
                ) from e
            if entity.id in records:
                raise StoreError(
                    f"duplicate id '{entity.id}' in {self.path_for(collection).name}",
                    "load", ErrorContext(collection=collection.value, entity_id=entity.id),
                )
            records[entity.id] = entity
        logger.info(
            f"Loaded {len(records)} records from {self.path_for(collection)}",
            extra={"collection": collection.value},
        )
        return records

    async def _persist(self, collection: Collection, records: dict[str, Entity]) -> None:
        payload = [_encode(e) for e in records.values()]
        await asyncio.to_thread(self._write_file, collection, payload)

    def _read_file(self, collection: Collection) -> list[dict[str, Any]]:
        path = self.path_for(collection)
        if not path.exists():
            return []
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise StoreError(
                f"cannot read {path.name}: {e}", "load",
                ErrorContext(collection=collection.value),
            ) from e
        if not isinstance(data, list):
            raise StoreError(
                f"{path.name} must contain a JSON array", "load",
                ErrorContext(collection=collection.value),
            )
        return data

    def _write_file(self, collection: Collection, payload: list[dict[str, Any]]) -> None:
        path = self.path_for(collection)
        tmp = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
            os.replace(tmp, path)
        except OSError as e:
            raise StoreError(
                f"cannot write {path.name}: {e}", "persist",
                ErrorContext(collection=collection.value),
            ) from e


# ─── Record codec ────────────────────────────────────────────────

def _encode(entity: Entity) -> dict[str, Any]:
    record = {}
    for name, value in to_record(entity).items():
        if isinstance(value, datetime):
            value = value.isoformat()
        record[to_camel(name)] = value
    return record


def _decode(item: dict[str, Any]) -> dict[str, Any]:
    record = {to_snake(key): value for key, value in item.items()}
    if record.get("id") in (None, ""):
        raise ValueError("record has no id")
    record["id"] = str(record["id"])
    for name in _DATETIME_FIELDS:
        value = record.get(name)
        if isinstance(value, str) and value:
            record[name] = datetime.fromisoformat(value.replace("Z", "+00:00"))
        elif not value:
            record[name] = None
    record["slug"] = record.get("slug") or None
    return record
