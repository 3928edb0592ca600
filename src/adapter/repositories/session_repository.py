from typing import Any, List, Optional
from uuid import UUID

from src.adapter.services.record import EMPTY_UUID, Record
from src.app.repositories.session_repository import ISessionRepository
from src.app.services.database import Database, output_param, param
from src.app.services.errors import BackingStoreError
from src.app.services.view_filter import Operator, ViewFilter
from src.domain.entities import (
    ActiveSession,
    AuditContext,
    CleanupResult,
    LoginOutcome,
    SessionValidation,
)

ACTIVE_SESSION_COLUMNS = ("UserID", "SessionID", "CreatedAt", "LastActivityAt", "ExpiresAt", "IsValid")


def _as_uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def map_active_session(record: Record) -> ActiveSession:
    return ActiveSession(
        user_id=record.get_int32("UserID"),
        session_id=record.get_uuid("SessionID"),
        created_at=record.get_datetime("CreatedAt"),
        last_activity_at=record.get_datetime("LastActivityAt"),
        expires_at=record.get_datetime("ExpiresAt"),
        is_valid=record.get_bool("IsValid"),
    )


def map_cleanup_result(record: Record) -> CleanupResult:
    return CleanupResult(
        deleted_sessions=record.get_int32("DeletedSessions"),
        deleted_reset_tokens=record.get_int32("DeletedResetTokens"),
        message=record.get_string("Message"),
    )


class SessionRepository(ISessionRepository):
    """Session repository implementation over stored procedures"""

    def __init__(self, db: Database):
        self.db = db

    async def login(self, email: str, password: str, context: AuditContext) -> LoginOutcome:
        """
        app.sp_Login

        The store owns the failure counter and lockout window; its message is
        returned verbatim so API wording never drifts from store policy.
        """
        output = await self.db.call_with_output_params(
            "app.sp_Login",
            [
                param("Email", email),
                param("Password", password),
                param("SourceIp", context.source_ip),
                param("UserAgent", context.user_agent),
                output_param("SessionID", "UNIQUEIDENTIFIER"),
                output_param("Message", "NVARCHAR", 200),
            ],
        )
        if output.failure is not None and not isinstance(output.failure, BackingStoreError):
            raise output.failure

        session_id = _as_uuid(output.outputs.get("SessionID"))
        if session_id == EMPTY_UUID:
            session_id = None

        message = output.outputs.get("Message")
        if not message:
            message = "Login successful." if output.ok else (output.error_message or "Unknown error.")

        return LoginOutcome(
            success=output.ok and session_id is not None,
            session_id=session_id,
            message=message,
        )

    async def validate(self, session_id: UUID) -> SessionValidation:
        """app.sp_ValidateAndRefreshSession - checks expiry and slides it atomically"""
        output = await self.db.call_with_output_params(
            "app.sp_ValidateAndRefreshSession",
            [
                param("SessionID", str(session_id)),
                output_param("IsValid", "BIT"),
                output_param("UserID", "INT"),
            ],
        )
        if output.failure is not None and not isinstance(output.failure, BackingStoreError):
            raise output.failure

        is_valid = output.outputs.get("IsValid")
        user_id = output.outputs.get("UserID")
        return SessionValidation(
            is_valid=bool(is_valid) if is_valid is not None else False,
            user_id=int(user_id) if user_id is not None else 0,
        )

    async def logout(self, session_id: UUID, context: AuditContext) -> str:
        return await self.db.for_message(
            "app.sp_Logout",
            [
                param("SessionID", str(session_id)),
                param("SourceIp", context.source_ip),
                param("UserAgent", context.user_agent),
            ],
        )

    async def logout_all(self, user_id: int, context: AuditContext) -> str:
        return await self.db.for_message(
            "app.sp_LogoutAllSessions",
            [
                param("ActorUserID", user_id),
                param("SourceIp", context.source_ip),
                param("UserAgent", context.user_agent),
            ],
        )

    async def get_active_by_user_id(self, user_id: int) -> List[ActiveSession]:
        view_filter = (
            ViewFilter(ACTIVE_SESSION_COLUMNS)
            .where("UserID", Operator.eq, user_id)
            .order_by("LastActivityAt", descending=True)
        )
        return await self.db.query_filtered("vw_UserActiveSessions", map_active_session, view_filter)

    async def cleanup_expired(self, retention_days: int) -> CleanupResult:
        result = await self.db.call_for_optional_row(
            "app.sp_CleanupExpiredSessions",
            [param("RetentionDays", retention_days)],
            map_cleanup_result,
        )
        if result is None:
            return CleanupResult(message="Cleanup completed (nothing to delete).")
        return result
