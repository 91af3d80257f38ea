"""
Public async API.

One module per entity family; HealthStoreClient groups them for a caller and
create_client() builds the whole stack from configuration.
"""

from .base import EntityAPI
from .client import HealthStoreClient, create_client
from .dose_records import DoseRecordAPI
from .family import FamilyMemberAPI
from .insights import AIInsightAPI
from .insurance import InsurancePolicyAPI
from .reminders import SelfReminderAPI
from .reports import HealthReportAPI, summarize_parameters
from .users import UserAPI

__all__ = [
    "EntityAPI",
    "HealthStoreClient",
    "create_client",
    "DoseRecordAPI",
    "FamilyMemberAPI",
    "AIInsightAPI",
    "InsurancePolicyAPI",
    "SelfReminderAPI",
    "HealthReportAPI",
    "summarize_parameters",
    "UserAPI",
]
