"""
Idempotent demo-data seeding.

A collection is seeded only when its blob has never been written. Existing
blobs are never overwritten, including empty collections and collections
full of live user data. A malformed blob reads as empty and is replaced with
fixtures only when the caller asks for repair explicitly.
"""

from collections.abc import Callable, Sequence

from healthstore.domain import fixtures
from healthstore.services.backing_store import BackingStore
from healthstore.services.collections import (
    Record,
    decode_collection,
    encode_collection,
    storage_key,
)
from healthstore.services.results import logger
from healthstore.services.routes import ENTITY_KINDS

FixtureFactory = Callable[[], list[Record]]


def fixture_factory(
    collection_key: str,
    owner_id: str = fixtures.DEMO_OWNER_ID,
    family_member_ids: Sequence[str] = (),
) -> FixtureFactory:
    """Return the zero-argument fixture factory for one collection."""
    member_ids = tuple(family_member_ids)
    factories: dict[str, FixtureFactory] = {
        "family_members": lambda: fixtures.family_members(owner_id),
        "medications": lambda: fixtures.medications(owner_id, member_ids),
        "dose_records": lambda: fixtures.dose_records(owner_id),
        "reports": lambda: fixtures.reports(owner_id, member_ids),
        "prescriptions": lambda: fixtures.prescriptions(owner_id),
        "appointments": lambda: fixtures.appointments(owner_id),
        "health_metrics": lambda: fixtures.health_metrics(owner_id),
        "disease_analysis": lambda: fixtures.disease_analysis(owner_id, member_ids),
        "health_trends": lambda: fixtures.health_trends(owner_id),
        "insurance_policies": lambda: fixtures.insurance_policies(owner_id, member_ids),
        "self_reminders": lambda: fixtures.self_reminders(owner_id),
        "ai_insights": lambda: fixtures.ai_insights(owner_id),
        "users": lambda: fixtures.users(owner_id),
    }
    try:
        return factories[collection_key]
    except KeyError:
        raise ValueError(f"No fixtures for collection '{collection_key}'") from None


class DemoSeeder:
    """Writes canonical fixtures into collections that do not exist yet."""

    def __init__(self, backing_store: BackingStore, key_prefix: str = "") -> None:
        self.backing_store = backing_store
        self.key_prefix = key_prefix
        self.logger = logger.bind(component="demo_seeder")

    def ensure_seeded(
        self, collection_key: str, factory: FixtureFactory, *, repair: bool = False
    ) -> list[Record]:
        """Return the collection, seeding it from `factory` if it was never written."""
        key = storage_key(collection_key, self.key_prefix)
        blob = self.backing_store.read(key)

        if blob is not None:
            decoded = decode_collection(key, blob)
            if decoded.is_ok():
                return decoded.unwrap()
            if not repair:
                self.logger.warning(
                    "seed_skipped_malformed_collection",
                    key=key,
                    error=str(decoded.unwrap_err()),
                )
                return []
            self.logger.warning("malformed_collection_repaired", key=key)

        items = factory()
        self.backing_store.write(key, encode_collection(items))
        self.logger.info("collection_seeded", key=key, count=len(items))
        return items

    def family_member_ids(self, owner_id: str) -> list[str]:
        """Ids of the stored family members owned by `owner_id`, without seeding anything."""
        key = storage_key("family_members", self.key_prefix)
        blob = self.backing_store.read(key)
        if blob is None:
            return []
        members = decode_collection(key, blob).unwrap_or([])
        return [
            member["id"]
            for member in members
            if member.get("id") and member.get("userId") == owner_id
        ]

    def seed_demo_profile(
        self, owner_id: str = fixtures.DEMO_OWNER_ID, *, repair: bool = False
    ) -> dict[str, int]:
        """Seed every collection for one demo owner.

        Family members go first so that dependent fixtures can reference the
        member ids actually stored.
        """
        members = self.ensure_seeded(
            "family_members", fixture_factory("family_members", owner_id), repair=repair
        )
        member_ids = [member["id"] for member in members if member.get("id")]

        counts = {"family_members": len(members)}
        for kind in ENTITY_KINDS:
            if kind.collection_key in counts:
                continue
            items = self.ensure_seeded(
                kind.collection_key,
                fixture_factory(kind.collection_key, owner_id, member_ids),
                repair=repair,
            )
            counts[kind.collection_key] = len(items)

        self.logger.info("demo_profile_seeded", owner_id=owner_id, counts=counts)
        return counts
