"""
Login Use Case

Authenticates against the store and returns an opaque session token.
"""

import logging

from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.services.errors import DatabaseError
from src.app.use_cases.common import SERVICE_ERROR
from src.core.result import Error, Result, Return
from src.domain.entities import AuditContext, SystemRole
from .dtos import LoginResponse

logger = logging.getLogger(__name__)


class LoginUseCase:
    """
    Use case for user login.

    Business Rules:
    - Credential check, failure counting and lockout happen in app.sp_Login
    - A locked account is refused even with the correct password
    - The store's message is returned verbatim on failure
    - Profile fields come from vw_UserProfileHeader; when the header cannot
      be read the login still succeeds with fallback values
    """

    def __init__(self, sessions: ISessionRepository, users: IUserRepository):
        self.sessions = sessions
        self.users = users

    async def execute(
        self, email: str, password: str, context: AuditContext
    ) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password, forwarded to the store
            context: Source IP and user agent for the audit trail

        Returns:
            Result with LoginResponse, or Error(LOGIN_FAILED | SERVICE_ERROR)
        """
        try:
            outcome = await self.sessions.login(email, password, context)
        except DatabaseError:
            logger.exception(f"Login call failed for {email}")
            return Return.err(SERVICE_ERROR)

        if not outcome.success or outcome.session_id is None:
            return Return.err(Error("LOGIN_FAILED", outcome.message or "Invalid credentials."))

        try:
            header = await self.users.get_header_by_email(email)
        except DatabaseError:
            logger.exception(f"Could not load profile header for {email} after login")
            header = None

        return Return.ok(
            LoginResponse(
                session_id=str(outcome.session_id),
                message=outcome.message,
                user_id=header.user_id if header else 0,
                email=header.email if header and header.email else email,
                name=header.name if header else "",
                system_role_code=(
                    header.system_role_code if header else SystemRole.user.value
                ),
            )
        )

