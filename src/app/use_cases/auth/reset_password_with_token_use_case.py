"""
Reset Password With Token Use Case

Redeems a single-use reset token. The store consumes the token, sets the
password, clears the failure counter, unlocks the account and closes every
session of the user in one transaction.
"""

import logging

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.services.errors import BackingStoreError, DatabaseError
from src.app.use_cases.common import SERVICE_ERROR
from src.core.result import Error, Result, Return
from src.domain.entities import AuditContext
from .dtos import MessageResponse
from .password_policy import check_new_password

logger = logging.getLogger(__name__)


class ResetPasswordWithTokenUseCase:
    """
    Business Rules:
    - Weak or unconfirmed passwords are refused without calling the store
    - Invalid, used or expired tokens are refused by the store
    - A refused token leaves the old password valid
    """

    def __init__(self, reset_tokens: IPasswordResetTokenRepository):
        self.reset_tokens = reset_tokens

    async def execute(
        self,
        token: str,
        new_password: str,
        confirm_password: str,
        context: AuditContext,
    ) -> Result[MessageResponse]:
        password_error = check_new_password(new_password, confirm_password)
        if password_error:
            return Return.err(password_error)

        try:
            await self.reset_tokens.redeem(token, new_password, confirm_password, context)
        except BackingStoreError as e:
            return Return.err(Error("INVALID_TOKEN", e.message))
        except DatabaseError:
            logger.exception("Password reset with token failed")
            return Return.err(SERVICE_ERROR)

        return Return.ok(MessageResponse(message="Password reset successfully."))
