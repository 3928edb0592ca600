"""
Session Read Models

Sessions live only in the backing store. These models carry what the store
reports back; nothing here is cached or persisted by the service.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel


class LoginOutcome(SQLModel):
    """
    Result of app.sp_Login.

    Business Rules:
    - Credential check, failure counter and lockout live in the store
    - ``message`` is store-authored and surfaced verbatim
    - A login only counts as successful with a non-empty session id
    """

    success: bool
    session_id: Optional[UUID] = None
    message: str = ""


class SessionValidation(SQLModel):
    """
    Result of app.sp_ValidateAndRefreshSession.

    A valid session has already had its expiry pushed to
    ``now + sliding window`` by the store in the same call.
    """

    is_valid: bool = False
    user_id: int = 0


class ActiveSession(SQLModel):
    """Row of vw_UserActiveSessions"""

    user_id: int
    session_id: UUID
    created_at: datetime
    last_activity_at: datetime
    expires_at: datetime
    is_valid: bool = Field(default=True)


class CleanupResult(SQLModel):
    """Result of app.sp_CleanupExpiredSessions"""

    deleted_sessions: int = 0
    deleted_reset_tokens: int = 0
    message: str = ""
