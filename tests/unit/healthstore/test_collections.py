"""Tests for the collection cache and blob codec."""

from healthstore.services import CollectionCache, MemoryBackingStore
from healthstore.services.collections import decode_collection, encode_collection
from healthstore.services.routes import ENTITY_KINDS


def test_encoding_is_canonical() -> None:
    assert encode_collection([{"b": 1, "a": 2}]) == '[{"a":2,"b":1}]'


def test_decode_rejects_non_list_blobs() -> None:
    assert decode_collection("k", "[]").unwrap() == []
    assert decode_collection("k", "{").is_err()
    assert decode_collection("k", '{"a": 1}').is_err()
    assert decode_collection("k", "[1, 2]").is_err()


def test_reload_reads_latest_blobs(store: MemoryBackingStore, cache: CollectionCache) -> None:
    cache.reload()
    assert cache.items("medications") == []

    store.write("medications", '[{"id":"med_1"}]')
    assert cache.items("medications") == []

    cache.reload()
    assert cache.find("medications", "med_1") == {"id": "med_1"}


def test_replace_writes_through(store: MemoryBackingStore, cache: CollectionCache) -> None:
    cache.replace("appointments", [{"id": "apt_1"}])

    assert store.read("appointments") == '[{"id":"apt_1"}]'
    other = CollectionCache(store)
    other.reload()
    assert other.items("appointments") == [{"id": "apt_1"}]


def test_malformed_blob_loads_as_empty_and_is_kept(
    store: MemoryBackingStore, cache: CollectionCache
) -> None:
    store.write("reports", "garbage")
    cache.reload()

    assert cache.items("reports") == []
    assert cache.malformed == {"reports"}
    assert store.read("reports") == "garbage"


def test_counts_cover_every_collection(cache: CollectionCache) -> None:
    cache.replace("medications", [{"id": "a"}, {"id": "b"}])
    counts = cache.counts()
    assert counts["medications"] == 2
    assert counts["prescriptions"] == 0
    assert len(counts) == len(ENTITY_KINDS)
