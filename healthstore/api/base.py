"""
Generic entity API on top of the request dispatcher.

Every call builds the SimulatedRequest a remote client would have sent,
waits out the configured network latency and dispatches it. Results come
back as typed models inside a Result; nothing here raises for a missing
entity, an unknown endpoint or a record that no longer fits its model.

Payloads may be models or plain dicts in the persisted camelCase form. A
payload that does not fit the model is rejected before it is sent; the
store itself does not validate writes.
"""

from __future__ import annotations

import asyncio
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import ValidationError

from healthstore.domain.models import Entity, RecordModel
from healthstore.services.dispatcher import RequestDispatcher
from healthstore.services.results import InvalidRecordError, Result, StoreError, logger
from healthstore.services.routes import EntityKind, HttpVerb, SimulatedRequest, entity_path

ModelT = TypeVar("ModelT", bound=Entity)

Payload = RecordModel | dict[str, Any]


def to_wire(payload: Payload) -> dict[str, Any]:
    if isinstance(payload, RecordModel):
        return payload.to_record()
    return dict(payload)


class EntityAPI(Generic[ModelT]):
    """list/get/create/update/delete for one entity kind, scoped to one caller."""

    kind: ClassVar[EntityKind]

    def __init__(
        self, dispatcher: RequestDispatcher, caller_id: str, latency_seconds: float = 0.1
    ) -> None:
        self.dispatcher = dispatcher
        self.caller_id = caller_id
        self.latency_seconds = latency_seconds
        self.logger = logger.bind(component=f"{self.kind.name}_api", caller_id=caller_id)

    @property
    def model(self) -> type[ModelT]:
        return self.kind.model  # type: ignore[return-value]

    async def _request(
        self,
        verb: HttpVerb,
        path: str,
        body: dict[str, Any] | None = None,
        caller_id: str | None = None,
        expect: dict[str, list[Any]] | None = None,
    ) -> Result[Any, StoreError]:
        await asyncio.sleep(self.latency_seconds)
        request = SimulatedRequest(
            path=path, verb=verb, caller_id=caller_id or self.caller_id, body=body, expect=expect
        )
        return self.dispatcher.dispatch(request)

    def _parse(self, record: dict[str, Any]) -> Result[ModelT, StoreError]:
        try:
            return Result.ok(self.model.model_validate(record))
        except ValidationError as e:
            self.logger.warning(
                "record_validation_failed", entity_id=record.get("id"), errors=e.error_count()
            )
            return Result.err(
                InvalidRecordError(f"{self.kind.name} '{record.get('id')}' is invalid: {e}")
            )

    def _parse_many(self, records: list[dict[str, Any]]) -> list[ModelT]:
        """Parse a collection, skipping records that fail validation."""
        parsed = (self._parse(record) for record in records)
        return [result.unwrap() for result in parsed if result.is_ok()]

    def _parse_result(self, result: Result[Any, StoreError]) -> Result[ModelT, StoreError]:
        if result.is_err():
            return Result.err(result.unwrap_err())
        return self._parse(result.unwrap())

    def _parse_written(self, result: Result[Any, StoreError]) -> Result[ModelT, StoreError]:
        """Parse the answer to a committed write.

        The write already happened, so a stored record that no longer fits the
        model (e.g. an older field merged with a valid patch) comes back
        unvalidated instead of as an error.
        """
        if result.is_err():
            return Result.err(result.unwrap_err())
        record = result.unwrap()
        parsed = self._parse(record)
        if parsed.is_ok():
            return parsed
        return Result.ok(self.model.model_construct(**record))

    def _check_payload(self, body: dict[str, Any]) -> Result[dict[str, Any], StoreError]:
        """Reject a payload that does not fit the model before anything is sent."""
        try:
            self.model.model_validate(body)
        except ValidationError as e:
            self.logger.warning("payload_rejected", errors=e.error_count())
            return Result.err(InvalidRecordError(f"Invalid {self.kind.name} payload: {e}"))
        return Result.ok(body)

    async def list(self, owner_id: str | None = None) -> Result[list[ModelT], StoreError]:
        """List the entities visible to `owner_id` (defaults to this client's caller)."""
        result = await self._request(HttpVerb.GET, entity_path(self.kind), caller_id=owner_id)
        if result.is_err():
            return Result.err(result.unwrap_err())
        return Result.ok(self._parse_many(result.unwrap()))

    async def get(self, entity_id: str) -> Result[ModelT, StoreError]:
        result = await self._request(HttpVerb.GET, entity_path(self.kind, entity_id))
        return self._parse_result(result)

    async def create(self, payload: Payload) -> Result[ModelT, StoreError]:
        checked = self._check_payload(to_wire(payload))
        if checked.is_err():
            return Result.err(checked.unwrap_err())
        result = await self._request(HttpVerb.POST, entity_path(self.kind), body=checked.unwrap())
        return self._parse_written(result)

    async def update(
        self,
        entity_id: str,
        patch: Payload,
        expect: dict[str, list[Any]] | None = None,
    ) -> Result[ModelT, StoreError]:
        """Merge `patch` into the entity.

        With `expect`, the update only applies while every named field still
        holds one of the accepted values; otherwise PreconditionFailedError.
        """
        checked = self._check_payload(to_wire(patch))
        if checked.is_err():
            return Result.err(checked.unwrap_err())
        result = await self._request(
            HttpVerb.PUT, entity_path(self.kind, entity_id), body=checked.unwrap(), expect=expect
        )
        return self._parse_written(result)

    async def delete(self, entity_id: str) -> Result[dict[str, bool], StoreError]:
        return await self._request(HttpVerb.DELETE, entity_path(self.kind, entity_id))
