"""
Get Profile Use Case

Loads the caller's profile header, commissioned leagues and teams in one
call to app.sp_GetUserProfile.
"""

import logging

from src.app.repositories.user_repository import IUserRepository
from src.app.services.errors import BackingStoreError, DatabaseError
from src.app.use_cases.common import SERVICE_ERROR
from src.core.result import Error, Result, Return
from src.domain.entities import UserProfile

logger = logging.getLogger(__name__)


class GetProfileUseCase:
    def __init__(self, users: IUserRepository):
        self.users = users

    async def execute(self, user_id: int) -> Result[UserProfile]:
        try:
            profile = await self.users.get_profile(user_id)
        except BackingStoreError as e:
            return Return.err(Error("PROFILE_NOT_FOUND", e.message))
        except DatabaseError:
            logger.exception(f"Could not load profile for user_id={user_id}")
            return Return.err(SERVICE_ERROR)

        if profile is None:
            return Return.err(Error("PROFILE_NOT_FOUND", "User profile not found."))
        return Return.ok(profile)
