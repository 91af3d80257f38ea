"""
Client facade: every entity API for one caller identity.

create_client() wires the whole stack from configuration:
backing store -> collection cache -> demo seeder -> request dispatcher.
"""

import asyncio
from typing import Any

from healthstore.api.appointments import AppointmentAPI
from healthstore.api.diseases import DiseaseAnalysisAPI
from healthstore.api.dose_records import DoseRecordAPI
from healthstore.api.family import FamilyMemberAPI
from healthstore.api.insights import AIInsightAPI
from healthstore.api.insurance import InsurancePolicyAPI
from healthstore.api.medications import MedicationAPI
from healthstore.api.metrics import HealthMetricAPI
from healthstore.api.prescriptions import PrescriptionAPI
from healthstore.api.reminders import SelfReminderAPI
from healthstore.api.reports import HealthReportAPI
from healthstore.api.trends import HealthTrendAPI
from healthstore.api.users import UserAPI
from healthstore.config import AppConfig, get_config
from healthstore.services.backing_store import BackingStore, create_backing_store
from healthstore.services.collections import CollectionCache
from healthstore.services.dispatcher import RequestDispatcher
from healthstore.services.results import Result, StoreError, configure_logging, logger
from healthstore.services.routes import HttpVerb, SimulatedRequest, SpecialEndpoint
from healthstore.services.seeder import DemoSeeder


class HealthStoreClient:
    """All entity APIs bound to one caller id and one dispatcher."""

    def __init__(
        self,
        dispatcher: RequestDispatcher,
        caller_id: str,
        latency_seconds: float = 0.1,
        seeder: DemoSeeder | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.caller_id = caller_id
        self.latency_seconds = latency_seconds
        self.seeder = seeder

        args = (dispatcher, caller_id, latency_seconds)
        self.medications = MedicationAPI(*args)
        self.dose_records = DoseRecordAPI(*args)
        self.family_members = FamilyMemberAPI(*args)
        self.reports = HealthReportAPI(*args)
        self.prescriptions = PrescriptionAPI(*args)
        self.appointments = AppointmentAPI(*args)
        self.health_metrics = HealthMetricAPI(*args)
        self.disease_analysis = DiseaseAnalysisAPI(*args)
        self.health_trends = HealthTrendAPI(*args)
        self.insurance_policies = InsurancePolicyAPI(*args)
        self.self_reminders = SelfReminderAPI(*args)
        self.ai_insights = AIInsightAPI(*args)
        self.users = UserAPI(*args)

    async def dashboard_stats(self) -> Result[dict[str, int], StoreError]:
        """Per-collection counts of the records this caller can see."""
        await asyncio.sleep(self.latency_seconds)
        request = SimulatedRequest(
            path=SpecialEndpoint.DASHBOARD_STATS.value,
            verb=HttpVerb.GET,
            caller_id=self.caller_id,
        )
        return self.dispatcher.dispatch(request)

    def seed_demo_profile(
        self, owner_id: str | None = None, *, repair: bool = False
    ) -> dict[str, int]:
        """Seed every collection with demo fixtures owned by `owner_id`."""
        if self.seeder is None:
            raise RuntimeError("Client was created without a demo seeder")
        return self.seeder.seed_demo_profile(
            owner_id or self.dispatcher.demo_owner_id, repair=repair
        )


def create_client(
    caller_id: str,
    config: AppConfig | None = None,
    backing_store: BackingStore | None = None,
) -> HealthStoreClient:
    """Build a client for `caller_id` from configuration.

    `backing_store` overrides the configured storage URL, which lets several
    clients share one in-memory store.
    """
    config = config or get_config()
    configure_logging(config.logging.format, config.logging.level)

    store = backing_store if backing_store is not None else create_backing_store(config.storage.url)
    key_prefix = config.storage.key_prefix
    seeder = DemoSeeder(store, key_prefix)
    dispatcher = RequestDispatcher(
        CollectionCache(store, key_prefix),
        seeder=seeder,
        auto_seed_collections=config.demo.auto_seed_collections if config.demo.auto_seed else (),
        demo_prefix=config.demo.demo_prefix,
        demo_owner_id=config.demo.demo_owner_id,
    )

    summary: dict[str, Any] = {
        "storage": config.storage.url if backing_store is None else type(store).__name__,
        "auto_seed": list(dispatcher.auto_seed_collections),
    }
    logger.info("client_created", caller_id=caller_id, **summary)
    return HealthStoreClient(dispatcher, caller_id, config.storage.latency_seconds, seeder)
