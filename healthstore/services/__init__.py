"""
Core services for the store.

This package contains the embedded entity store: backing storage, the
collection cache, demo seeding, owner scoping and request dispatch.
"""

from .backing_store import (
    BackingStore,
    MemoryBackingStore,
    SQLiteBackingStore,
    create_backing_store,
)
from .collections import CollectionCache
from .dispatcher import RequestDispatcher
from .ownership import scope
from .results import (
    InvalidRecordError,
    InvalidTransitionError,
    MalformedStateError,
    NotFoundError,
    PreconditionFailedError,
    Result,
    StoreError,
)
from .routes import HttpVerb, Operation, SimulatedRequest
from .seeder import DemoSeeder, fixture_factory

__all__ = [
    "BackingStore",
    "MemoryBackingStore",
    "SQLiteBackingStore",
    "create_backing_store",
    "CollectionCache",
    "RequestDispatcher",
    "scope",
    "Result",
    "StoreError",
    "NotFoundError",
    "MalformedStateError",
    "InvalidRecordError",
    "InvalidTransitionError",
    "PreconditionFailedError",
    "HttpVerb",
    "Operation",
    "SimulatedRequest",
    "DemoSeeder",
    "fixture_factory",
]
