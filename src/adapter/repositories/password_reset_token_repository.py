from datetime import datetime

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.services.database import Database, output_param, param
from src.domain.entities import AuditContext, PasswordResetTokenResult


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation over stored procedures"""

    def __init__(self, db: Database):
        self.db = db

    async def request(self, email: str, context: AuditContext) -> PasswordResetTokenResult:
        """app.sp_RequestPasswordReset - outputs stay NULL for unknown emails"""
        output = await self.db.call_with_output_params(
            "app.sp_RequestPasswordReset",
            [
                param("Email", email),
                param("SourceIp", context.source_ip),
                output_param("Token", "NVARCHAR", 100),
                output_param("ExpiresAt", "DATETIME2"),
            ],
        )
        if output.failure is not None:
            raise output.failure

        token = output.outputs.get("Token")
        expires_at = output.outputs.get("ExpiresAt")
        if isinstance(expires_at, str):
            expires_at = datetime.fromisoformat(expires_at)

        return PasswordResetTokenResult(
            token=str(token) if token is not None else None,
            expires_at=expires_at,
        )

    async def redeem(
        self,
        token: str,
        new_password: str,
        confirm_password: str,
        context: AuditContext,
    ) -> None:
        """app.sp_ResetPasswordWithToken"""
        await self.db.call_non_query(
            "app.sp_ResetPasswordWithToken",
            [
                param("Token", token),
                param("NewPassword", new_password),
                param("ConfirmPassword", confirm_password),
                param("SourceIp", context.source_ip),
                param("UserAgent", context.user_agent),
            ],
        )
