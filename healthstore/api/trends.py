"""Monthly health trend API."""

from healthstore.api.base import EntityAPI
from healthstore.domain.models import HealthTrend
from healthstore.services.routes import HEALTH_TRENDS


class HealthTrendAPI(EntityAPI[HealthTrend]):
    kind = HEALTH_TRENDS
