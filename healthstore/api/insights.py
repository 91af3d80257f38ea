"""
AI insight API.

Insights are produced by the rule-based generators from reports, metrics and
prescriptions; this API only stores them. An insight that does not name at
least one source record is rejected.
"""

from healthstore.api.base import EntityAPI, Payload, to_wire
from healthstore.domain.models import AIInsight
from healthstore.services.results import InvalidRecordError, Result, StoreError
from healthstore.services.routes import AI_INSIGHTS

SOURCE_FIELDS = ("relatedReports", "relatedMetrics", "relatedPrescriptions")


class AIInsightAPI(EntityAPI[AIInsight]):
    kind = AI_INSIGHTS

    async def create(self, payload: Payload) -> Result[AIInsight, StoreError]:
        record = to_wire(payload)
        if not any(record.get(field) for field in SOURCE_FIELDS):
            return Result.err(
                InvalidRecordError("An insight must reference the records it was derived from")
            )
        return await super().create(record)
