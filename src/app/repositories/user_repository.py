from abc import ABC, abstractmethod
from typing import Optional

from src.domain.entities import (
    AuditContext,
    NewUserAccount,
    RegistrationResult,
    UserProfile,
    UserProfileHeader,
)


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def register(
        self, account: NewUserAccount, context: AuditContext
    ) -> Optional[RegistrationResult]:
        """Create a user account. Raises BackingStoreError on duplicates or policy violations."""
        pass

    @abstractmethod
    async def get_header_by_email(self, email: str) -> Optional[UserProfileHeader]:
        """Get minimal profile fields by email address"""
        pass

    @abstractmethod
    async def get_profile(self, user_id: int) -> Optional[UserProfile]:
        """Get profile header plus commissioned leagues and teams"""
        pass
