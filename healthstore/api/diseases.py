"""Disease risk analysis API."""

from healthstore.api.base import EntityAPI
from healthstore.domain.models import DiseaseAnalysis
from healthstore.services.routes import DISEASE_ANALYSIS


class DiseaseAnalysisAPI(EntityAPI[DiseaseAnalysis]):
    kind = DISEASE_ANALYSIS
