"""
PasswordResetToken Read Model

Reset tokens are minted and redeemed by the store.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import SQLModel


class PasswordResetTokenResult(SQLModel):
    """
    Output of app.sp_RequestPasswordReset.

    Business Rules:
    - Single-use; redemption also unlocks the account and revokes sessions
    - Expires well before a session would
    - Both fields are None when the email does not belong to an account
    """

    token: Optional[str] = None
    expires_at: Optional[datetime] = None

    @property
    def issued(self) -> bool:
        return bool(self.token and self.token.strip()) and self.expires_at is not None
