"""Shared fixtures: a fresh in-memory stack per test."""

import pytest

from healthstore.api import HealthStoreClient
from healthstore.services import (
    CollectionCache,
    DemoSeeder,
    MemoryBackingStore,
    RequestDispatcher,
)


@pytest.fixture
def store() -> MemoryBackingStore:
    return MemoryBackingStore()


@pytest.fixture
def cache(store: MemoryBackingStore) -> CollectionCache:
    return CollectionCache(store)


@pytest.fixture
def seeder(store: MemoryBackingStore) -> DemoSeeder:
    return DemoSeeder(store)


@pytest.fixture
def dispatcher(cache: CollectionCache, seeder: DemoSeeder) -> RequestDispatcher:
    """Dispatcher without auto-seeding, so collections start empty."""
    return RequestDispatcher(cache, seeder=seeder)


@pytest.fixture
def make_client(dispatcher: RequestDispatcher, seeder: DemoSeeder):
    """Build clients for different callers that share one store, with no latency."""

    def _make(caller_id: str) -> HealthStoreClient:
        return HealthStoreClient(dispatcher, caller_id, latency_seconds=0.0, seeder=seeder)

    return _make


@pytest.fixture
def client(make_client) -> HealthStoreClient:
    return make_client("u1")
