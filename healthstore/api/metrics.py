"""Health metric API."""

from urllib.parse import urlencode

from healthstore.api.base import EntityAPI
from healthstore.domain.models import HealthMetric
from healthstore.services.results import Result, StoreError
from healthstore.services.routes import HEALTH_METRICS, HttpVerb, SpecialEndpoint


class HealthMetricAPI(EntityAPI[HealthMetric]):
    kind = HEALTH_METRICS

    async def latest(self, name: str | None = None) -> Result[HealthMetric, StoreError]:
        """Most recently recorded visible metric, optionally only readings named `name`."""
        path = SpecialEndpoint.LATEST_HEALTH_METRIC.value
        if name:
            path = f"{path}?{urlencode({'name': name})}"
        result = await self._request(HttpVerb.GET, path)
        return self._parse_result(result)
