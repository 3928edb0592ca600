"""
List Active Sessions Use Case

Reads vw_UserActiveSessions for one user.
"""

import logging
from typing import Optional
from uuid import UUID

from src.app.repositories.session_repository import ISessionRepository
from src.app.services.errors import DatabaseError
from src.app.use_cases.common import SERVICE_ERROR
from src.core.result import Result, Return
from .dtos import ActiveSessionInfo, ActiveSessionsResponse

logger = logging.getLogger(__name__)


class ListActiveSessionsUseCase:
    def __init__(self, sessions: ISessionRepository):
        self.sessions = sessions

    async def execute(
        self, user_id: int, current_session_id: Optional[UUID] = None
    ) -> Result[ActiveSessionsResponse]:
        try:
            rows = await self.sessions.get_active_by_user_id(user_id)
        except DatabaseError:
            logger.exception(f"Could not list sessions for user_id={user_id}")
            return Return.err(SERVICE_ERROR)

        return Return.ok(
            ActiveSessionsResponse(
                sessions=[
                    ActiveSessionInfo(
                        session_id=str(row.session_id),
                        created_at=row.created_at,
                        last_activity_at=row.last_activity_at,
                        expires_at=row.expires_at,
                        is_current=row.session_id == current_session_id,
                    )
                    for row in rows
                    if row.is_valid
                ]
            )
        )
