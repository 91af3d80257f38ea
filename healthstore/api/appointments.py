"""Appointment API."""

from healthstore.api.base import EntityAPI
from healthstore.domain.models import Appointment
from healthstore.services.routes import APPOINTMENTS


class AppointmentAPI(EntityAPI[Appointment]):
    kind = APPOINTMENTS
