from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from src.domain.entities import ActiveSession, AuditContext, CleanupResult, LoginOutcome, SessionValidation


class ISessionRepository(ABC):
    """Session repository interface - application layer"""

    @abstractmethod
    async def login(self, email: str, password: str, context: AuditContext) -> LoginOutcome:
        """Verify credentials and mint a session. Lockout is enforced by the store."""
        pass

    @abstractmethod
    async def validate(self, session_id: UUID) -> SessionValidation:
        """Check a session and extend its sliding expiry in the same call"""
        pass

    @abstractmethod
    async def logout(self, session_id: UUID, context: AuditContext) -> str:
        """Invalidate one session. Returns the store's message."""
        pass

    @abstractmethod
    async def logout_all(self, user_id: int, context: AuditContext) -> str:
        """Invalidate every session of a user. Returns the store's message."""
        pass

    @abstractmethod
    async def get_active_by_user_id(self, user_id: int) -> List[ActiveSession]:
        """Get all active sessions for a user, most recent activity first"""
        pass

    @abstractmethod
    async def cleanup_expired(self, retention_days: int) -> CleanupResult:
        """Delete sessions and reset tokens expired longer than retention_days"""
        pass
