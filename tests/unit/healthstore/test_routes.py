"""Tests for path resolution and the route table."""

import pytest

from healthstore.services.routes import (
    ENTITY_KINDS,
    INSURANCE_POLICIES,
    MEDICATIONS,
    PRESCRIPTIONS,
    USERS,
    HttpVerb,
    Operation,
    SpecialEndpoint,
    entity_path,
    resolve,
)


@pytest.mark.parametrize(
    ("path", "verb", "operation", "entity_id"),
    [
        ("/medications", HttpVerb.GET, Operation.LIST, None),
        ("/medications/med_1", HttpVerb.GET, Operation.GET, "med_1"),
        ("/medications", HttpVerb.POST, Operation.CREATE, None),
        ("/medications/med_1", HttpVerb.PUT, Operation.UPDATE, "med_1"),
        ("/medications/med_1", HttpVerb.DELETE, Operation.DELETE, "med_1"),
        ("/medications/", HttpVerb.GET, Operation.LIST, None),
    ],
)
def test_verb_and_id_select_operation(
    path: str, verb: HttpVerb, operation: Operation, entity_id: str | None
) -> None:
    route = resolve(path, verb)
    assert route is not None
    assert route.kind is MEDICATIONS
    assert route.operation is operation
    assert route.entity_id == entity_id


@pytest.mark.parametrize(
    ("path", "verb"),
    [
        ("/unknown", HttpVerb.GET),
        ("/medications", HttpVerb.PUT),
        ("/medications", HttpVerb.DELETE),
        ("/medications/med_1", HttpVerb.POST),
        ("/medications/med_1/extra", HttpVerb.GET),
        ("/medicationsX", HttpVerb.GET),
        ("/dashboard/stats", HttpVerb.POST),
    ],
)
def test_unresolvable_requests(path: str, verb: HttpVerb) -> None:
    assert resolve(path, verb) is None


def test_query_string_is_parsed() -> None:
    route = resolve("/dose-records?date=2024-01-15", HttpVerb.GET)
    assert route is not None
    assert route.operation is Operation.LIST
    assert route.query == {"date": "2024-01-15"}


def test_dashboard_stats_route() -> None:
    route = resolve("/dashboard/stats", HttpVerb.GET)
    assert route is not None
    assert route.special is SpecialEndpoint.DASHBOARD_STATS
    assert route.kind is None


def test_hyphenated_paths_resolve_to_their_kind() -> None:
    route = resolve("/insurance-policies/policy1", HttpVerb.GET)
    assert route is not None
    assert route.kind is INSURANCE_POLICIES
    assert route.entity_id == "policy1"


def test_every_kind_round_trips_through_entity_path() -> None:
    for kind in ENTITY_KINDS:
        route = resolve(entity_path(kind, "abc"), HttpVerb.GET)
        assert route is not None
        assert route.kind is kind


def test_kinds_are_unique() -> None:
    assert len({kind.path for kind in ENTITY_KINDS}) == len(ENTITY_KINDS)
    assert len({kind.collection_key for kind in ENTITY_KINDS}) == len(ENTITY_KINDS)


def test_prescriptions_are_owned_by_patient() -> None:
    assert PRESCRIPTIONS.owner_field == "patientId"
    assert MEDICATIONS.owner_field == "userId"


@pytest.mark.parametrize(
    ("path", "verb", "special"),
    [
        ("/dose-records/generate", HttpVerb.POST, SpecialEndpoint.GENERATE_DOSES),
        ("/health-metrics/latest", HttpVerb.GET, SpecialEndpoint.LATEST_HEALTH_METRIC),
        ("/health-metrics/latest?name=Weight", HttpVerb.GET, SpecialEndpoint.LATEST_HEALTH_METRIC),
    ],
)
def test_special_endpoints_take_precedence_over_entity_ids(
    path: str, verb: HttpVerb, special: SpecialEndpoint
) -> None:
    route = resolve(path, verb)
    assert route is not None
    assert route.special is special
    assert route.kind is None


def test_special_paths_with_other_verbs_fall_back_to_entities() -> None:
    route = resolve("/dose-records/generate", HttpVerb.GET)
    assert route is not None
    assert route.operation is Operation.GET
    assert route.entity_id == "generate"


def test_users_are_keyed_by_their_own_id() -> None:
    assert USERS.owner_field == "id"
    route = resolve("/users/u1", HttpVerb.PUT)
    assert route is not None
    assert route.kind is USERS
