"""Self reminder API. The active flag is independent of the schedule."""

from healthstore.api.base import EntityAPI
from healthstore.domain.models import SelfReminder
from healthstore.services.results import Result, StoreError
from healthstore.services.routes import SELF_REMINDERS


class SelfReminderAPI(EntityAPI[SelfReminder]):
    kind = SELF_REMINDERS

    async def set_active(self, reminder_id: str, active: bool) -> Result[SelfReminder, StoreError]:
        return await self.update(reminder_id, {"isActive": active})
