"""
Route definitions for the simulated API.

Every entity kind declares its endpoint path, collection key, id prefix and
the single field that names its owner. Requests resolve to a Route: the
entity kind (or a special endpoint), the Operation, and the optional id and
query parameters.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from urllib.parse import parse_qsl

from pydantic import BaseModel, Field

from healthstore.domain import models


class HttpVerb(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Operation(str, Enum):
    LIST = "list"
    GET = "get"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class SpecialEndpoint(str, Enum):
    DASHBOARD_STATS = "/dashboard/stats"
    GENERATE_DOSES = "/dose-records/generate"
    LATEST_HEALTH_METRIC = "/health-metrics/latest"


@dataclass(frozen=True)
class EntityKind:
    """Static description of one entity collection."""

    name: str
    path: str
    collection_key: str
    id_prefix: str
    model: type[models.Entity]
    owner_field: str = "userId"


MEDICATIONS = EntityKind("medication", "/medications", "medications", "med", models.Medication)
DOSE_RECORDS = EntityKind("dose_record", "/dose-records", "dose_records", "dose", models.DoseRecord)
FAMILY_MEMBERS = EntityKind(
    "family_member", "/family-members", "family_members", "family", models.FamilyMember
)
REPORTS = EntityKind("report", "/reports", "reports", "report", models.HealthReport)
PRESCRIPTIONS = EntityKind(
    "prescription",
    "/prescriptions",
    "prescriptions",
    "pres",
    models.Prescription,
    owner_field="patientId",
)
APPOINTMENTS = EntityKind("appointment", "/appointments", "appointments", "apt", models.Appointment)
HEALTH_METRICS = EntityKind(
    "health_metric", "/health-metrics", "health_metrics", "metric", models.HealthMetric
)
DISEASE_ANALYSIS = EntityKind(
    "disease_analysis", "/disease-analysis", "disease_analysis", "disease", models.DiseaseAnalysis
)
HEALTH_TRENDS = EntityKind(
    "health_trend", "/health-trends", "health_trends", "trend", models.HealthTrend
)
INSURANCE_POLICIES = EntityKind(
    "insurance_policy",
    "/insurance-policies",
    "insurance_policies",
    "policy",
    models.InsurancePolicy,
)
SELF_REMINDERS = EntityKind(
    "self_reminder", "/self-reminders", "self_reminders", "reminder", models.SelfReminder
)
AI_INSIGHTS = EntityKind("ai_insight", "/ai-insights", "ai_insights", "insight", models.AIInsight)
USERS = EntityKind("user", "/users", "users", "user", models.User, owner_field="id")

ENTITY_KINDS: tuple[EntityKind, ...] = (
    MEDICATIONS,
    DOSE_RECORDS,
    FAMILY_MEMBERS,
    REPORTS,
    PRESCRIPTIONS,
    APPOINTMENTS,
    HEALTH_METRICS,
    DISEASE_ANALYSIS,
    HEALTH_TRENDS,
    INSURANCE_POLICIES,
    SELF_REMINDERS,
    AI_INSIGHTS,
    USERS,
)

KINDS_BY_KEY: dict[str, EntityKind] = {kind.collection_key: kind for kind in ENTITY_KINDS}

# Longest path first so that a prefix never shadows a longer endpoint
_KINDS_BY_PATH_LENGTH = sorted(ENTITY_KINDS, key=lambda kind: len(kind.path), reverse=True)


class SimulatedRequest(BaseModel):
    """A request as the facade would have sent it over the wire."""

    path: str = Field(min_length=1)
    verb: HttpVerb = HttpVerb.GET
    caller_id: str = ""
    body: dict[str, Any] | None = None
    # UPDATE precondition: field -> accepted current values (None matches a missing field)
    expect: dict[str, list[Any]] | None = None


SPECIAL_ROUTES: dict[tuple[str, HttpVerb], SpecialEndpoint] = {
    (SpecialEndpoint.DASHBOARD_STATS.value, HttpVerb.GET): SpecialEndpoint.DASHBOARD_STATS,
    (SpecialEndpoint.GENERATE_DOSES.value, HttpVerb.POST): SpecialEndpoint.GENERATE_DOSES,
    (SpecialEndpoint.LATEST_HEALTH_METRIC.value, HttpVerb.GET): (
        SpecialEndpoint.LATEST_HEALTH_METRIC
    ),
}


@dataclass(frozen=True)
class Route:
    operation: Operation | None
    kind: EntityKind | None = None
    special: SpecialEndpoint | None = None
    entity_id: str | None = None
    query: dict[str, str] = field(default_factory=dict)


def _operation_for(verb: HttpVerb, has_id: bool) -> Operation | None:
    if verb is HttpVerb.GET:
        return Operation.GET if has_id else Operation.LIST
    if verb is HttpVerb.POST:
        return None if has_id else Operation.CREATE
    if verb is HttpVerb.PUT:
        return Operation.UPDATE if has_id else None
    if verb is HttpVerb.DELETE:
        return Operation.DELETE if has_id else None
    return None


def resolve(path: str, verb: HttpVerb) -> Route | None:
    """Resolve a request path and verb to a Route, or None when nothing matches."""
    raw_path, _, raw_query = path.partition("?")
    query = dict(parse_qsl(raw_query))
    raw_path = raw_path.rstrip("/") or "/"

    special = SPECIAL_ROUTES.get((raw_path, verb))
    if special is not None:
        return Route(operation=None, special=special, query=query)

    for kind in _KINDS_BY_PATH_LENGTH:
        if raw_path == kind.path:
            entity_id = None
        elif raw_path.startswith(kind.path + "/"):
            entity_id = raw_path[len(kind.path) + 1 :]
            if not entity_id or "/" in entity_id:
                return None
        else:
            continue

        operation = _operation_for(verb, entity_id is not None)
        if operation is None:
            return None
        return Route(operation=operation, kind=kind, entity_id=entity_id, query=query)

    return None


def entity_path(kind: EntityKind, entity_id: str | None = None) -> str:
    return kind.path if entity_id is None else f"{kind.path}/{entity_id}"
