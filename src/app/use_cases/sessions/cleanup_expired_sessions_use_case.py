"""
Cleanup Expired Sessions Use Case

Maintenance operation: deletes sessions and reset tokens that expired more
than ``retention_days`` ago.
"""

import logging

from src.app.repositories.session_repository import ISessionRepository
from src.app.services.errors import BackingStoreError, DatabaseError
from src.app.use_cases.common import SERVICE_ERROR
from src.core.result import Error, Result, Return
from .dtos import CleanupResponse

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 30


class CleanupExpiredSessionsUseCase:
    def __init__(self, sessions: ISessionRepository):
        self.sessions = sessions

    async def execute(self, retention_days: int = DEFAULT_RETENTION_DAYS) -> Result[CleanupResponse]:
        if retention_days < 1:
            return Return.err(Error("INVALID_RETENTION", "Retention days must be at least 1."))

        try:
            result = await self.sessions.cleanup_expired(retention_days)
        except BackingStoreError as e:
            return Return.err(Error("CLEANUP_FAILED", e.message))
        except DatabaseError:
            logger.exception("Session cleanup failed")
            return Return.err(SERVICE_ERROR)

        logger.info(
            f"Cleanup removed {result.deleted_sessions} session(s) "
            f"and {result.deleted_reset_tokens} reset token(s)"
        )
        return Return.ok(
            CleanupResponse(
                deleted_sessions=result.deleted_sessions,
                deleted_reset_tokens=result.deleted_reset_tokens,
                message=result.message or "Cleanup completed.",
            )
        )
