"""
Request dispatcher for the simulated backend.

The dispatcher maps a SimulatedRequest to a handler and returns what a
remote API would have answered, wrapped in a Result:

1. Reload every collection from the backing store (reload-before-use: other
   component instances may have written since the last request)
2. Seed the configured auto-seed collections if they were never written
3. Resolve (path, verb) to a Route through the explicit route table
4. Run the handler: owner-scoped read, or mutate + write through

Dispatch is synchronous on purpose: a request's read-modify-write runs to
completion before any other coroutine can issue another request.
"""

import copy
import uuid
from collections.abc import Callable, Sequence
from datetime import UTC, date, datetime, timedelta
from typing import Any

from healthstore.services.collections import CollectionCache, Record
from healthstore.services.ownership import DEFAULT_DEMO_PREFIX, scope
from healthstore.services.results import (
    InvalidRecordError,
    NotFoundError,
    PreconditionFailedError,
    Result,
    StoreError,
    logger,
)
from healthstore.services.routes import (
    DOSE_RECORDS,
    ENTITY_KINDS,
    HEALTH_METRICS,
    MEDICATIONS,
    EntityKind,
    Operation,
    Route,
    SimulatedRequest,
    SpecialEndpoint,
    resolve,
)
from healthstore.services.seeder import DemoSeeder, fixture_factory

Handler = Callable[[EntityKind, Route, SimulatedRequest], Result[Any, StoreError]]
SpecialHandler = Callable[[Route, SimulatedRequest], Result[Any, StoreError]]

DELETE_SUCCESS: dict[str, bool] = {"success": True}

# Upper bound on the number of days one generate request may span
MAX_GENERATE_DAYS = 366


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:16]}"


def _instant(value: Any) -> datetime:
    """Parse an ISO timestamp for ordering; unparseable values sort first."""
    if not isinstance(value, str):
        return datetime.min.replace(tzinfo=UTC)
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return datetime.min.replace(tzinfo=UTC)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class RequestDispatcher:
    """
    Routes simulated requests to collection operations.

    The handler table covers every (Operation, EntityKind) pair and every
    special endpoint; a missing entry is a programming error and fails at
    construction.
    """

    def __init__(
        self,
        cache: CollectionCache,
        seeder: DemoSeeder | None = None,
        auto_seed_collections: Sequence[str] = (),
        demo_prefix: str = DEFAULT_DEMO_PREFIX,
        demo_owner_id: str = "demo-patient-1",
    ) -> None:
        self.cache = cache
        self.seeder = seeder
        self.auto_seed_collections = tuple(auto_seed_collections)
        self.demo_prefix = demo_prefix
        self.demo_owner_id = demo_owner_id
        self.logger = logger.bind(component="request_dispatcher")

        operation_handlers: dict[Operation, Handler] = {
            Operation.LIST: self._handle_list,
            Operation.GET: self._handle_get,
            Operation.CREATE: self._handle_create,
            Operation.UPDATE: self._handle_update,
            Operation.DELETE: self._handle_delete,
        }
        self.handlers: dict[tuple[Operation, str], Handler] = {
            (operation, kind.name): handler
            for kind in ENTITY_KINDS
            for operation, handler in operation_handlers.items()
        }
        self.special_handlers: dict[SpecialEndpoint, SpecialHandler] = {
            SpecialEndpoint.DASHBOARD_STATS: self._handle_dashboard_stats,
            SpecialEndpoint.GENERATE_DOSES: self._handle_generate_doses,
            SpecialEndpoint.LATEST_HEALTH_METRIC: self._handle_latest_health_metric,
        }
        self._check_route_table()

    def _check_route_table(self) -> None:
        missing = [
            f"{operation.value} {kind.path}"
            for kind in ENTITY_KINDS
            for operation in Operation
            if (operation, kind.name) not in self.handlers
        ]
        missing += [
            special.value for special in SpecialEndpoint if special not in self.special_handlers
        ]
        if missing:
            raise RuntimeError(f"Route table incomplete: {', '.join(missing)}")

    def refresh(self) -> None:
        """Seed missing auto-seed collections, then reload the cache from the backing store.

        Seeded fixtures reference the demo owner's stored family members, the
        same way an explicit seed_demo_profile() links them.
        """
        if self.seeder is not None and self.auto_seed_collections:
            member_ids = self.seeder.family_member_ids(self.demo_owner_id)
            for collection_key in self.auto_seed_collections:
                self.seeder.ensure_seeded(
                    collection_key,
                    fixture_factory(collection_key, self.demo_owner_id, member_ids),
                )
        self.cache.reload()

    def dispatch(self, request: SimulatedRequest) -> Result[Any, StoreError]:
        """Serve one request. Never raises for unknown routes or missing entities."""
        self.refresh()

        route = resolve(request.path, request.verb)
        if route is None:
            self.logger.warning("unknown_endpoint", path=request.path, verb=request.verb.value)
            return Result.err(NotFoundError("Endpoint not found"))

        if route.special is not None:
            return self.special_handlers[route.special](route, request)

        if route.kind is None or route.operation is None:
            return Result.err(NotFoundError("Endpoint not found"))
        handler = self.handlers[(route.operation, route.kind.name)]
        result = handler(route.kind, route, request)

        self.logger.debug(
            "request_dispatched",
            operation=route.operation.value,
            kind=route.kind.name,
            entity_id=route.entity_id,
            ok=result.is_ok(),
        )
        return result

    # Read handlers

    def _scoped(self, kind: EntityKind, caller_id: str) -> list[Record]:
        return scope(
            self.cache.items(kind.collection_key),
            kind.owner_field,
            caller_id,
            self.demo_prefix,
        )

    def _handle_list(
        self, kind: EntityKind, route: Route, request: SimulatedRequest
    ) -> Result[Any, StoreError]:
        items = self._scoped(kind, request.caller_id)
        on_date = route.query.get("date")
        if on_date and kind.collection_key == "dose_records":
            items = [
                item
                for item in items
                if isinstance(item.get("scheduledTime"), str)
                and item["scheduledTime"].startswith(on_date)
            ]
        return Result.ok(copy.deepcopy(items))

    def _handle_get(
        self, kind: EntityKind, route: Route, request: SimulatedRequest
    ) -> Result[Any, StoreError]:
        entity = self.cache.find(kind.collection_key, route.entity_id or "")
        if entity is None:
            return Result.err(NotFoundError(f"{kind.name} '{route.entity_id}' not found"))
        return Result.ok(copy.deepcopy(entity))

    # Write handlers

    def _stamp_new(self, kind: EntityKind, body: Record, caller_id: str) -> Record:
        timestamp = _now_iso()
        entity: Record = {
            **body,
            "id": _new_id(kind.id_prefix),
            "createdAt": timestamp,
            "updatedAt": timestamp,
        }
        if not entity.get(kind.owner_field) and caller_id:
            entity[kind.owner_field] = caller_id
        return entity

    def _handle_create(
        self, kind: EntityKind, route: Route, request: SimulatedRequest
    ) -> Result[Any, StoreError]:
        entity = self._stamp_new(kind, copy.deepcopy(request.body or {}), request.caller_id)
        items = [*self.cache.items(kind.collection_key), entity]
        self.cache.replace(kind.collection_key, items)
        self.logger.info("entity_created", kind=kind.name, entity_id=entity["id"])
        return Result.ok(copy.deepcopy(entity))

    def _unmet_precondition(
        self, item: Record, request: SimulatedRequest
    ) -> PreconditionFailedError | None:
        for field_name, accepted in (request.expect or {}).items():
            actual = item.get(field_name)
            if actual not in accepted:
                return PreconditionFailedError(item.get("id", ""), field_name, actual)
        return None

    def _handle_update(
        self, kind: EntityKind, route: Route, request: SimulatedRequest
    ) -> Result[Any, StoreError]:
        patch = {
            key: value
            for key, value in copy.deepcopy(request.body or {}).items()
            if key not in ("id", "createdAt", "updatedAt")
        }
        updated: Record | None = None
        items: list[Record] = []
        for item in self.cache.items(kind.collection_key):
            if item.get("id") == route.entity_id:
                unmet = self._unmet_precondition(item, request)
                if unmet is not None:
                    self.logger.info(
                        "update_precondition_failed",
                        kind=kind.name,
                        entity_id=route.entity_id,
                        field=unmet.field,
                    )
                    return Result.err(unmet)
                item = {**item, **patch, "updatedAt": _now_iso()}
                updated = item
            items.append(item)

        if updated is None:
            return Result.err(NotFoundError(f"{kind.name} '{route.entity_id}' not found"))

        self.cache.replace(kind.collection_key, items)
        self.logger.info("entity_updated", kind=kind.name, entity_id=route.entity_id)
        return Result.ok(copy.deepcopy(updated))

    def _handle_delete(
        self, kind: EntityKind, route: Route, request: SimulatedRequest
    ) -> Result[Any, StoreError]:
        current = self.cache.items(kind.collection_key)
        items = [item for item in current if item.get("id") != route.entity_id]
        if len(items) == len(current):
            return Result.err(NotFoundError(f"{kind.name} '{route.entity_id}' not found"))

        self.cache.replace(kind.collection_key, items)
        self.logger.info("entity_deleted", kind=kind.name, entity_id=route.entity_id)
        return Result.ok(dict(DELETE_SUCCESS))

    # Special endpoints

    def _handle_dashboard_stats(
        self, route: Route, request: SimulatedRequest
    ) -> Result[Any, StoreError]:
        return Result.ok(
            {
                kind.collection_key: len(self._scoped(kind, request.caller_id))
                for kind in ENTITY_KINDS
            }
        )

    def _handle_generate_doses(
        self, route: Route, request: SimulatedRequest
    ) -> Result[Any, StoreError]:
        """Expand a medication's daily times into pending doses over [startDate, endDate]."""
        body = request.body or {}
        medication = self.cache.find(MEDICATIONS.collection_key, str(body.get("medicationId", "")))
        if medication is None:
            return Result.err(NotFoundError("Medication not found"))

        try:
            start = date.fromisoformat(str(body.get("startDate", "")))
            end = date.fromisoformat(str(body.get("endDate", "")))
        except ValueError:
            return Result.err(InvalidRecordError("startDate and endDate must be YYYY-MM-DD dates"))
        days = (end - start).days + 1
        if days > MAX_GENERATE_DAYS:
            return Result.err(
                InvalidRecordError(f"Cannot generate more than {MAX_GENERATE_DAYS} days of doses")
            )

        times = [time for time in medication.get("times") or [] if isinstance(time, str)]
        owner = request.caller_id or medication.get(MEDICATIONS.owner_field, "")
        doses: list[Record] = []
        for offset in range(max(days, 0)):
            day = start + timedelta(days=offset)
            for time in times:
                dose: Record = {
                    "medicationId": medication["id"],
                    "medicationName": medication.get("name"),
                    "dosage": medication.get("dosage"),
                    "scheduledTime": f"{day.isoformat()}T{time}",
                    "status": "pending",
                }
                if medication.get("familyMemberId"):
                    dose["familyMemberId"] = medication["familyMemberId"]
                doses.append(self._stamp_new(DOSE_RECORDS, {**dose, "userId": owner}, owner))

        if doses:
            items = [*self.cache.items(DOSE_RECORDS.collection_key), *doses]
            self.cache.replace(DOSE_RECORDS.collection_key, items)
        self.logger.info("doses_generated", medication_id=medication["id"], count=len(doses))
        return Result.ok(
            {"message": f"{len(doses)} doses generated", "doses": copy.deepcopy(doses)}
        )

    def _handle_latest_health_metric(
        self, route: Route, request: SimulatedRequest
    ) -> Result[Any, StoreError]:
        metrics = self._scoped(HEALTH_METRICS, request.caller_id)
        name = route.query.get("name")
        if name:
            metrics = [metric for metric in metrics if metric.get("name") == name]
        if not metrics:
            return Result.err(NotFoundError("No health metrics found"))
        latest = max(
            metrics,
            key=lambda metric: _instant(metric.get("recordedAt") or metric.get("createdAt")),
        )
        return Result.ok(copy.deepcopy(latest))
