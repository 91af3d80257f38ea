"""Tests for idempotent demo seeding."""

import json

import pytest

from healthstore.domain import fixtures
from healthstore.services import DemoSeeder, MemoryBackingStore, fixture_factory
from healthstore.services.routes import ENTITY_KINDS


def test_absent_collection_is_seeded_and_persisted(
    store: MemoryBackingStore, seeder: DemoSeeder
) -> None:
    items = seeder.ensure_seeded("prescriptions", fixture_factory("prescriptions"))

    assert [item["id"] for item in items] == ["pres1", "pres2", "pres3", "pres4", "pres5"]
    assert json.loads(store.read("prescriptions") or "") == items


def test_seeding_twice_is_byte_identical(store: MemoryBackingStore, seeder: DemoSeeder) -> None:
    seeder.ensure_seeded("medications", fixture_factory("medications"))
    first = store.read("medications")
    seeder.ensure_seeded("medications", fixture_factory("medications"))

    assert store.read("medications") == first


def test_independent_stores_seed_identical_bytes() -> None:
    blobs = []
    for _ in range(2):
        store = MemoryBackingStore()
        DemoSeeder(store).seed_demo_profile()
        blobs.append({key: store.read(key) for key in store.keys()})
    assert blobs[0] == blobs[1]


def test_insurance_seeded_twice_keeps_its_length(seeder: DemoSeeder) -> None:
    first = seeder.ensure_seeded("insurance_policies", fixture_factory("insurance_policies"))
    second = seeder.ensure_seeded("insurance_policies", fixture_factory("insurance_policies"))
    assert len(first) == len(second) == 4


def test_empty_collection_is_never_reseeded(store: MemoryBackingStore, seeder: DemoSeeder) -> None:
    store.write("prescriptions", "[]")
    assert seeder.ensure_seeded("prescriptions", fixture_factory("prescriptions")) == []
    assert store.read("prescriptions") == "[]"


def test_live_data_is_never_overwritten(store: MemoryBackingStore, seeder: DemoSeeder) -> None:
    live = '[{"id":"pres_live","patientId":"u1"}]'
    store.write("prescriptions", live)

    items = seeder.ensure_seeded("prescriptions", fixture_factory("prescriptions"))

    assert items == [{"id": "pres_live", "patientId": "u1"}]
    assert store.read("prescriptions") == live


def test_malformed_collection_is_left_alone_without_repair(
    store: MemoryBackingStore, seeder: DemoSeeder
) -> None:
    store.write("reports", "{not json")

    assert seeder.ensure_seeded("reports", fixture_factory("reports")) == []
    assert store.read("reports") == "{not json"


def test_malformed_collection_is_replaced_on_repair(
    store: MemoryBackingStore, seeder: DemoSeeder
) -> None:
    store.write("reports", '{"not": "a list"}')

    items = seeder.ensure_seeded("reports", fixture_factory("reports"), repair=True)

    assert [item["id"] for item in items] == ["report_1", "report_2", "report_3"]
    assert json.loads(store.read("reports") or "") == items


def test_seed_demo_profile_links_family_members(store: MemoryBackingStore, seeder: DemoSeeder) -> None:
    counts = seeder.seed_demo_profile()

    assert set(counts) == {kind.collection_key for kind in ENTITY_KINDS}
    assert counts["family_members"] == 4
    medications = json.loads(store.read("medications") or "")
    member_ids = {medication["familyMemberId"] for medication in medications[1:]}
    assert member_ids == {"family_1", "family_2", "family_3", "family_4"}
    assert medications[0]["familyMemberId"] is None


def test_seed_demo_profile_for_another_owner(store: MemoryBackingStore, seeder: DemoSeeder) -> None:
    seeder.seed_demo_profile("demo-caregiver")

    prescriptions = json.loads(store.read("prescriptions") or "")
    assert {item["patientId"] for item in prescriptions} == {"demo-caregiver"}


def test_key_prefix_namespaces_blobs(store: MemoryBackingStore) -> None:
    DemoSeeder(store, key_prefix="tenant-a:").ensure_seeded(
        "appointments", fixture_factory("appointments")
    )
    assert store.keys() == ["tenant-a:appointments"]


def test_fixture_factories_are_pure() -> None:
    for kind in ENTITY_KINDS:
        factory = fixture_factory(kind.collection_key)
        assert factory() == factory()


def test_unknown_collection_has_no_fixtures() -> None:
    with pytest.raises(ValueError, match="No fixtures"):
        fixture_factory("spaceships")


def test_fixtures_are_owned_by_demo_identity() -> None:
    assert fixtures.DEMO_OWNER_ID.startswith("demo-")
    assert all(member["userId"] == fixtures.DEMO_OWNER_ID for member in fixtures.family_members())


def test_family_member_ids_reads_without_seeding(store: MemoryBackingStore, seeder: DemoSeeder) -> None:
    assert seeder.family_member_ids(fixtures.DEMO_OWNER_ID) == []
    assert store.read("family_members") is None

    store.write(
        "family_members",
        json.dumps([{"id": "fm_a", "userId": "demo-patient-1"}, {"id": "fm_b", "userId": "u2"}]),
    )
    assert seeder.family_member_ids("demo-patient-1") == ["fm_a"]


def test_family_member_ids_of_malformed_collection(store: MemoryBackingStore, seeder: DemoSeeder) -> None:
    store.write("family_members", "{broken")
    assert seeder.family_member_ids(fixtures.DEMO_OWNER_ID) == []
