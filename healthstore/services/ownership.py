"""
Owner scoping for collection reads.

An entity is visible to the identity named in its owner field. Demo
identities share one relaxation: demo-owned fixtures are visible to any
caller, and a demo caller sees everything, so randomly generated demo
session ids still see the canonical fixtures. Two explicit non-demo
identities never see each other's records.
"""

from collections.abc import Iterable
from typing import Any

DEFAULT_DEMO_PREFIX = "demo-"


def is_demo_identity(identity: Any, demo_prefix: str = DEFAULT_DEMO_PREFIX) -> bool:
    return isinstance(identity, str) and bool(demo_prefix) and identity.startswith(demo_prefix)


def is_visible(
    entity: dict[str, Any],
    owner_field: str,
    caller_id: str | None,
    demo_prefix: str = DEFAULT_DEMO_PREFIX,
) -> bool:
    owner = entity.get(owner_field)
    if caller_id and owner == caller_id:
        return True
    return is_demo_identity(owner, demo_prefix) or is_demo_identity(caller_id, demo_prefix)


def scope(
    collection: Iterable[dict[str, Any]],
    owner_field: str,
    caller_id: str | None,
    demo_prefix: str = DEFAULT_DEMO_PREFIX,
) -> list[dict[str, Any]]:
    """Return the subset of `collection` that `caller_id` may see, preserving order."""
    return [
        entity
        for entity in collection
        if is_visible(entity, owner_field, caller_id, demo_prefix)
    ]
