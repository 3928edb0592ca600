"""
Validate Session Use Case

Checks a bearer token and slides its expiry in one store round-trip.
"""

import logging
from uuid import UUID

from src.app.repositories.session_repository import ISessionRepository
from src.app.services.errors import DatabaseError
from src.app.use_cases.common import SERVICE_ERROR
from src.core.result import Result, Return
from src.domain.entities import SessionValidation

logger = logging.getLogger(__name__)


class ValidateSessionUseCase:
    """
    Business Rules:
    - Never cached; every request asks the store
    - A valid session is extended to now + sliding window by the same call
    - An expired session is invalidated and stays invalid
    - A session reporting no user is treated as invalid
    """

    def __init__(self, sessions: ISessionRepository):
        self.sessions = sessions

    async def execute(self, session_id: UUID) -> Result[SessionValidation]:
        try:
            validation = await self.sessions.validate(session_id)
        except DatabaseError:
            logger.exception("Session validation failed")
            return Return.err(SERVICE_ERROR)

        if not validation.is_valid or validation.user_id <= 0:
            return Return.ok(SessionValidation(is_valid=False, user_id=0))
        return Return.ok(validation)
