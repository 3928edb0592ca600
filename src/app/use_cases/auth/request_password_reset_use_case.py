"""
Request Password Reset Use Case

Asks the store for a reset token and emails the reset link.
"""

import logging
from typing import Any, Callable, Optional
from urllib.parse import quote

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.services import email_templates
from src.app.services.email_sender import IEmailSender
from src.app.services.errors import DatabaseError
from src.core.result import Result, Return
from src.domain.entities import AuditContext, PasswordResetTokenResult
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

FALLBACK_RESET_PASSWORD_URL = "https://example.com/reset-password"

RESET_REQUESTED = RequestPasswordResetResponse(
    status="sent",
    message="If the email exists, a password reset link has been sent.",
)

# Same signature as fastapi.BackgroundTasks.add_task
Scheduler = Callable[..., Any]


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - The store mints the token and decides whether the email exists
    - No email enumeration: the response is identical for known emails,
      unknown emails and store or transport failures
    - The email is sent after the response when a scheduler is supplied;
      delivery failures are logged, never reported to the caller
    """

    def __init__(
        self,
        reset_tokens: IPasswordResetTokenRepository,
        email_sender: IEmailSender,
        app_name: str,
        reset_password_url: Optional[str] = None,
    ):
        self.reset_tokens = reset_tokens
        self.email_sender = email_sender
        self.app_name = app_name
        self.reset_password_url = reset_password_url

    async def execute(
        self,
        email: str,
        context: AuditContext,
        schedule: Optional[Scheduler] = None,
    ) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Address the reset was requested for
            context: Source IP for the audit trail
            schedule: Defers the email send (e.g. BackgroundTasks.add_task);
                the email is sent inline when omitted

        Returns:
            Result with the uniform RequestPasswordResetResponse
        """
        try:
            issued = await self.reset_tokens.request(email, context)
        except DatabaseError:
            logger.exception(f"Password reset request failed for {email}")
            return Return.ok(RESET_REQUESTED)

        if not issued.issued:
            logger.info(f"Password reset requested for {email}; no token issued")
            return Return.ok(RESET_REQUESTED)

        if schedule is not None:
            schedule(self.send_reset_email, email, issued)
        else:
            await self.send_reset_email(email, issued)

        logger.info(f"Password reset requested for {email}; token issued")
        return Return.ok(RESET_REQUESTED)

    def build_reset_url(self, token: str) -> str:
        base_url = self.reset_password_url
        if not base_url or not base_url.strip():
            base_url = FALLBACK_RESET_PASSWORD_URL
            logger.warning(f"RESET_PASSWORD_URL is not configured; using {base_url}")
        return f"{base_url}?token={quote(token, safe='')}"

    async def send_reset_email(self, email: str, issued: PasswordResetTokenResult) -> None:
        html = email_templates.password_reset(
            self.app_name, self.build_reset_url(issued.token), issued.expires_at
        )
        try:
            await self.email_sender.send(email, f"{self.app_name} - Password reset", html)
        except Exception:
            logger.exception(f"Could not send password reset email to {email}")
