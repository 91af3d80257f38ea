"""User account API. A user record is keyed, and owned, by its own id."""

from healthstore.api.base import EntityAPI
from healthstore.domain.models import User
from healthstore.services.routes import USERS


class UserAPI(EntityAPI[User]):
    kind = USERS
