"""
Insurance policy API.

Policies own their documents and claims as nested lists; adding either one
reads the policy, appends a record with a fresh id and writes the list back
under an updatedAt precondition, rereading when a concurrent write won.
Policy status is operator-settable: any of active, expired, pending_renewal
or cancelled may be set from any other.
"""

import uuid
from datetime import UTC, datetime
from typing import Any

from healthstore.api.base import EntityAPI
from healthstore.domain.models import (
    InsuranceClaim,
    InsuranceDocument,
    InsurancePolicy,
    PolicyStatus,
)
from healthstore.services.results import (
    InvalidTransitionError,
    PreconditionFailedError,
    Result,
    StoreError,
)
from healthstore.services.routes import INSURANCE_POLICIES, HttpVerb, entity_path

MAX_APPEND_ATTEMPTS = 3


def _nested_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class InsurancePolicyAPI(EntityAPI[InsurancePolicy]):
    kind = INSURANCE_POLICIES

    async def set_status(
        self, policy_id: str, status: PolicyStatus | str
    ) -> Result[InsurancePolicy, StoreError]:
        try:
            target = PolicyStatus(status)
        except ValueError:
            return Result.err(InvalidTransitionError(f"Unknown policy status '{status}'"))
        return await self.update(policy_id, {"status": target.value})

    async def _append_nested(
        self, policy_id: str, field: str, record: dict[str, Any]
    ) -> Result[InsurancePolicy, StoreError]:
        """Append `record` to a nested list, retrying when another write got in first."""
        result: Result[InsurancePolicy, StoreError] = Result.err(
            PreconditionFailedError(policy_id, "updatedAt", None)
        )
        for _ in range(MAX_APPEND_ATTEMPTS):
            current = await self._request(HttpVerb.GET, entity_path(self.kind, policy_id))
            if current.is_err():
                return Result.err(current.unwrap_err())
            stored = current.unwrap()
            result = await self.update(
                policy_id,
                {field: [*(stored.get(field) or []), record]},
                expect={"updatedAt": [stored.get("updatedAt")]},
            )
            if result.is_ok() or not isinstance(result.unwrap_err(), PreconditionFailedError):
                return result
            self.logger.info("nested_append_retried", policy_id=policy_id, field=field)
        return result

    async def add_claim(
        self, policy_id: str, claim: InsuranceClaim
    ) -> Result[InsurancePolicy, StoreError]:
        now = datetime.now(UTC)
        stored = claim.model_copy(
            update={"id": claim.id or _nested_id("claim"), "policy_id": policy_id}
        )
        record = {**stored.to_record(), "createdAt": now.isoformat(), "updatedAt": now.isoformat()}
        return await self._append_nested(policy_id, "claims", record)

    async def add_document(
        self, policy_id: str, document: InsuranceDocument
    ) -> Result[InsurancePolicy, StoreError]:
        stored = document.model_copy(
            update={
                "id": document.id or _nested_id("doc"),
                "uploaded_at": document.uploaded_at or datetime.now(UTC),
            }
        )
        return await self._append_nested(policy_id, "documents", stored.to_record())
