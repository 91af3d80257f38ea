"""
Family member API.

Deleting a member does not cascade: medications, reports, disease analyses
and insurance policies that point at the member keep their `familyMemberId`.
dependents() lists those records so callers can reassign or clean them up.
"""

from typing import Any

from healthstore.api.base import EntityAPI
from healthstore.domain.models import FamilyMember
from healthstore.services.results import Result, StoreError
from healthstore.services.routes import (
    DISEASE_ANALYSIS,
    FAMILY_MEMBERS,
    INSURANCE_POLICIES,
    MEDICATIONS,
    REPORTS,
    HttpVerb,
    entity_path,
)

MEMBER_SCOPED_KINDS = (MEDICATIONS, REPORTS, DISEASE_ANALYSIS, INSURANCE_POLICIES)


class FamilyMemberAPI(EntityAPI[FamilyMember]):
    kind = FAMILY_MEMBERS

    async def dependents(
        self, member_id: str
    ) -> Result[dict[str, list[dict[str, Any]]], StoreError]:
        """Records visible to this caller that reference `member_id`, keyed by collection."""
        found: dict[str, list[dict[str, Any]]] = {}
        for kind in MEMBER_SCOPED_KINDS:
            result = await self._request(HttpVerb.GET, entity_path(kind))
            if result.is_err():
                return Result.err(result.unwrap_err())
            found[kind.collection_key] = [
                record for record in result.unwrap() if record.get("familyMemberId") == member_id
            ]
        return Result.ok(found)
