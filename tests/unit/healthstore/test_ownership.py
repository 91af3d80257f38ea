"""
Tests for owner scoping.

Property-based tests cover isolation between arbitrary non-demo identities
and visibility of demo records.
"""

from hypothesis import assume, given
from hypothesis import strategies as st

from healthstore.services.ownership import is_demo_identity, scope

identities = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789-_", min_size=1, max_size=20)
regular_identities = identities.filter(lambda value: not value.startswith("demo-"))


@given(owner=regular_identities, other=regular_identities)
def test_regular_identities_never_see_each_other(owner: str, other: str) -> None:
    assume(owner != other)
    collection = [{"id": "1", "userId": owner}, {"id": "2", "userId": other}]

    assert [item["id"] for item in scope(collection, "userId", owner)] == ["1"]
    assert [item["id"] for item in scope(collection, "userId", other)] == ["2"]


@given(caller=identities)
def test_demo_owned_records_are_visible_to_everyone(caller: str) -> None:
    collection = [{"id": "seed", "userId": "demo-patient-1"}]
    assert scope(collection, "userId", caller) == collection


@given(suffix=identities, owners=st.lists(regular_identities, max_size=5))
def test_demo_callers_see_everything(suffix: str, owners: list[str]) -> None:
    collection = [{"id": str(index), "userId": owner} for index, owner in enumerate(owners)]
    assert scope(collection, "userId", f"demo-{suffix}") == collection


def test_owner_field_is_per_kind() -> None:
    prescriptions = [{"id": "p1", "patientId": "u1"}, {"id": "p2", "patientId": "u2"}]
    assert scope(prescriptions, "patientId", "u1") == [prescriptions[0]]
    assert scope(prescriptions, "userId", "u1") == []


def test_empty_caller_sees_only_demo_records() -> None:
    collection = [{"id": "1", "userId": ""}, {"id": "2"}, {"id": "3", "userId": "demo-x"}]
    assert [item["id"] for item in scope(collection, "userId", "")] == ["3"]
    assert [item["id"] for item in scope(collection, "userId", None)] == ["3"]


def test_scope_preserves_order() -> None:
    collection = [{"id": str(n), "userId": "u1"} for n in range(5)]
    assert scope(collection, "userId", "u1") == collection


def test_custom_demo_prefix() -> None:
    collection = [{"id": "1", "userId": "sandbox:alice"}]
    assert scope(collection, "userId", "u9", demo_prefix="sandbox:") == collection
    assert scope(collection, "userId", "u9") == []
    assert is_demo_identity("sandbox:bob", "sandbox:")
    assert not is_demo_identity(None)
