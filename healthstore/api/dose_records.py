"""
Dose tracking API.

A dose starts `pending` and moves once to `taken`, `missed` or `skipped`;
the terminal states are final. record_outcome() enforces that with a
conditional update; plain update() does not. generate() expands a
medication schedule into pending doses.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Any

from healthstore.api.base import EntityAPI
from healthstore.domain.models import DoseRecord, DoseStatus
from healthstore.services.results import (
    InvalidTransitionError,
    PreconditionFailedError,
    Result,
    StoreError,
)
from healthstore.services.routes import DOSE_RECORDS, HttpVerb, SpecialEndpoint, entity_path

# A dose without a status is pending
PENDING_ONLY: dict[str, list[Any]] = {"status": [DoseStatus.PENDING.value, None]}


class DoseRecordAPI(EntityAPI[DoseRecord]):
    kind = DOSE_RECORDS

    async def list(
        self, owner_id: str | None = None, on_date: date | str | None = None
    ) -> Result[list[DoseRecord], StoreError]:
        """List visible dose records, optionally only those scheduled on `on_date`."""
        path = entity_path(self.kind)
        if on_date is not None:
            day = on_date.isoformat() if isinstance(on_date, date) else on_date
            path = f"{path}?date={day}"
        result = await self._request(HttpVerb.GET, path, caller_id=owner_id)
        if result.is_err():
            return Result.err(result.unwrap_err())
        return Result.ok(self._parse_many(result.unwrap()))

    async def record_outcome(
        self,
        dose_id: str,
        status: DoseStatus | str,
        taken_at: datetime | None = None,
    ) -> Result[DoseRecord, StoreError]:
        """Move a pending dose to a terminal status.

        The pending check and the write happen in one request, so of two
        concurrent outcomes for the same dose exactly one is applied.
        """
        try:
            target = DoseStatus(status)
        except ValueError:
            return Result.err(InvalidTransitionError(f"Unknown dose status '{status}'"))
        if not target.is_terminal:
            return Result.err(InvalidTransitionError("A dose can only move to a terminal status"))

        patch: dict[str, str] = {"status": target.value}
        if target is DoseStatus.TAKEN:
            patch["takenAt"] = (taken_at or datetime.now(UTC)).isoformat()
        result = await self.update(dose_id, patch, expect=PENDING_ONLY)
        if result.is_err() and isinstance(result.unwrap_err(), PreconditionFailedError):
            actual = result.unwrap_err().actual
            return Result.err(
                InvalidTransitionError(
                    f"Dose '{dose_id}' is already {actual}; cannot mark {target.value}"
                )
            )
        return result

    async def generate(
        self, medication_id: str, start: date | str, end: date | str
    ) -> Result[list[DoseRecord], StoreError]:
        """Create a pending dose for each of the medication's times on every day in [start, end]."""
        body = {
            "medicationId": medication_id,
            "startDate": start.isoformat() if isinstance(start, date) else start,
            "endDate": end.isoformat() if isinstance(end, date) else end,
        }
        result = await self._request(HttpVerb.POST, SpecialEndpoint.GENERATE_DOSES.value, body=body)
        if result.is_err():
            return Result.err(result.unwrap_err())
        return Result.ok(self._parse_many(result.unwrap()["doses"]))
