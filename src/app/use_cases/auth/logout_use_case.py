"""
Logout Use Cases

Invalidate one session, or every session of a user. Both are idempotent:
logging out an already-invalid session succeeds with the store's message.
"""

import logging
from uuid import UUID

from src.app.repositories.session_repository import ISessionRepository
from src.app.services.errors import BackingStoreError, DatabaseError
from src.app.use_cases.common import SERVICE_ERROR
from src.core.result import Error, Result, Return
from src.domain.entities import AuditContext
from .dtos import MessageResponse

logger = logging.getLogger(__name__)


class LogoutUseCase:
    def __init__(self, sessions: ISessionRepository):
        self.sessions = sessions

    async def execute(self, session_id: UUID, context: AuditContext) -> Result[MessageResponse]:
        try:
            message = await self.sessions.logout(session_id, context)
        except BackingStoreError as e:
            return Return.err(Error("LOGOUT_FAILED", e.message))
        except DatabaseError:
            logger.exception("Logout failed")
            return Return.err(SERVICE_ERROR)

        return Return.ok(MessageResponse(message=message))


class LogoutAllUseCase:
    """Invalidates every session of the user; other users are untouched"""

    def __init__(self, sessions: ISessionRepository):
        self.sessions = sessions

    async def execute(self, user_id: int, context: AuditContext) -> Result[MessageResponse]:
        try:
            message = await self.sessions.logout_all(user_id, context)
        except BackingStoreError as e:
            return Return.err(Error("LOGOUT_FAILED", e.message))
        except DatabaseError:
            logger.exception(f"Logout-all failed for user_id={user_id}")
            return Return.err(SERVICE_ERROR)

        logger.info(f"All sessions closed for user_id={user_id}")
        return Return.ok(MessageResponse(message=message))
