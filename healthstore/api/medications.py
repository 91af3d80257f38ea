"""Medication API."""

from healthstore.api.base import EntityAPI
from healthstore.domain.models import Medication
from healthstore.services.routes import MEDICATIONS


class MedicationAPI(EntityAPI[Medication]):
    """Medications owned by the user, optionally scoped to a family member."""

    kind = MEDICATIONS
