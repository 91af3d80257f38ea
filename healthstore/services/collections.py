"""
In-memory mirror of the entity collections.

CollectionCache owns the process-side copy of every collection with an
explicit lifecycle: reload() pulls every blob from the backing store before
a request is served, and replace() writes a collection straight through to
the backing store after a mutation. Construct one per client (or per test);
nothing here is module-level state.
"""

import json
from typing import Any

from healthstore.services.backing_store import BackingStore
from healthstore.services.results import MalformedStateError, Result, logger
from healthstore.services.routes import ENTITY_KINDS

Record = dict[str, Any]


def storage_key(collection_key: str, key_prefix: str = "") -> str:
    return f"{key_prefix}{collection_key}"


def encode_collection(items: list[Record]) -> str:
    """Canonical serialization: the same records always produce the same bytes."""
    return json.dumps(items, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def decode_collection(key: str, blob: str) -> Result[list[Record], MalformedStateError]:
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        return Result.err(MalformedStateError(key, f"invalid JSON ({e.msg})"))
    if not isinstance(data, list):
        return Result.err(MalformedStateError(key, f"expected a list, got {type(data).__name__}"))
    if not all(isinstance(item, dict) for item in data):
        return Result.err(MalformedStateError(key, "every item must be an object"))
    return Result.ok(data)


class CollectionCache:
    """Typed-by-key mirror of the backing store's collection blobs."""

    def __init__(self, backing_store: BackingStore, key_prefix: str = "") -> None:
        self.backing_store = backing_store
        self.key_prefix = key_prefix
        self.logger = logger.bind(component="collection_cache")
        self._collections: dict[str, list[Record]] = {
            kind.collection_key: [] for kind in ENTITY_KINDS
        }
        self.malformed: set[str] = set()

    def reload(self) -> None:
        """Refresh every collection from the backing store.

        Absent blobs load as empty collections. Malformed blobs also load as
        empty and are remembered in `malformed`; they are not rewritten here.
        """
        self.malformed.clear()
        for collection_key in self._collections:
            self._collections[collection_key] = self._load(collection_key)

    def _load(self, collection_key: str) -> list[Record]:
        key = storage_key(collection_key, self.key_prefix)
        blob = self.backing_store.read(key)
        if blob is None:
            return []
        decoded = decode_collection(key, blob)
        if decoded.is_err():
            self.malformed.add(collection_key)
            self.logger.warning(
                "collection_malformed", key=key, error=str(decoded.unwrap_err())
            )
            return []
        return decoded.unwrap()

    def items(self, collection_key: str) -> list[Record]:
        return self._collections[collection_key]

    def find(self, collection_key: str, entity_id: str) -> Record | None:
        return next(
            (item for item in self._collections[collection_key] if item.get("id") == entity_id),
            None,
        )

    def replace(self, collection_key: str, items: list[Record]) -> None:
        """Swap in a new collection and persist it as one blob."""
        self._collections[collection_key] = items
        self.malformed.discard(collection_key)
        key = storage_key(collection_key, self.key_prefix)
        self.backing_store.write(key, encode_collection(items))
        self.logger.debug("collection_persisted", key=key, count=len(items))

    def counts(self) -> dict[str, int]:
        return {key: len(items) for key, items in self._collections.items()}
