"""Prescription API. Prescriptions are owned through `patientId`."""

from healthstore.api.base import EntityAPI
from healthstore.domain.models import Prescription
from healthstore.services.routes import PRESCRIPTIONS


class PrescriptionAPI(EntityAPI[Prescription]):
    kind = PRESCRIPTIONS
