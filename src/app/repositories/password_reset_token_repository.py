from abc import ABC, abstractmethod

from src.domain.entities import AuditContext, PasswordResetTokenResult


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def request(self, email: str, context: AuditContext) -> PasswordResetTokenResult:
        """Mint a reset token if the email belongs to an account"""
        pass

    @abstractmethod
    async def redeem(
        self,
        token: str,
        new_password: str,
        confirm_password: str,
        context: AuditContext,
    ) -> None:
        """
        Consume a token and set the new password.

        The store also resets the failure counter, unlocks the account and
        invalidates all sessions of the user in the same transaction.
        Raises BackingStoreError when the token is invalid, used or expired.
        """
        pass
