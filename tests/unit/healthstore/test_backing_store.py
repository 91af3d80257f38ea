"""Tests for the key-value backing stores."""

from pathlib import Path

import pytest

from healthstore.services.backing_store import (
    MemoryBackingStore,
    SQLiteBackingStore,
    create_backing_store,
)


@pytest.fixture(params=["memory", "sqlite"])
def backing_store(request: pytest.FixtureRequest, tmp_path: Path):
    if request.param == "memory":
        return MemoryBackingStore()
    return SQLiteBackingStore(tmp_path / "store.db")


def test_absent_key_reads_none(backing_store) -> None:
    assert backing_store.read("medications") is None


def test_write_then_read(backing_store) -> None:
    backing_store.write("medications", '[{"id":"med_1"}]')
    assert backing_store.read("medications") == '[{"id":"med_1"}]'


def test_write_replaces_blob(backing_store) -> None:
    backing_store.write("reports", "[]")
    backing_store.write("reports", '[{"id":"report_1"}]')
    assert backing_store.read("reports") == '[{"id":"report_1"}]'
    assert backing_store.keys() == ["reports"]


def test_delete_and_keys(backing_store) -> None:
    backing_store.write("b", "[]")
    backing_store.write("a", "[]")
    assert backing_store.keys() == ["a", "b"]

    backing_store.delete("a")
    backing_store.delete("never-written")
    assert backing_store.keys() == ["b"]
    assert backing_store.read("a") is None


def test_sqlite_store_survives_reopen(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "health.db"
    SQLiteBackingStore(path).write("prescriptions", '[{"id":"pres1"}]')

    reopened = SQLiteBackingStore(path)
    assert reopened.read("prescriptions") == '[{"id":"pres1"}]'


class TestCreateBackingStore:
    def test_memory_url(self) -> None:
        assert isinstance(create_backing_store("memory://"), MemoryBackingStore)

    def test_sqlite_url(self, tmp_path: Path) -> None:
        store = create_backing_store(f"sqlite:///{tmp_path / 'x.db'}")
        assert isinstance(store, SQLiteBackingStore)
        assert store.path == tmp_path / "x.db"

    @pytest.mark.parametrize("url", ["sqlite:///", "postgres://db", "memory"])
    def test_rejects_unusable_urls(self, url: str) -> None:
        with pytest.raises(ValueError):
            create_backing_store(url)
