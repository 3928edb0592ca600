from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from config import ApplicationConfig
from src.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from src.adapter.repositories.session_repository import SessionRepository
from src.adapter.repositories.user_repository import UserRepository
from src.adapter.services.database import SqlAlchemyDatabase
from src.adapter.services.email_sender import LoggingEmailSender, SmtpEmailSender
from src.api.error import ClientError, ServerError
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.services.database import Database
from src.app.services.email_sender import IEmailSender
from src.app.use_cases.auth import ValidateSessionUseCase
from src.core.result import Error

# Built on first use so importing the app never needs the ODBC driver
_engine: Optional[AsyncEngine] = None

security = HTTPBearer(auto_error=False)


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is None:
        _engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)
    return _engine


def get_database() -> Database:
    return SqlAlchemyDatabase(get_engine(), command_timeout=ApplicationConfig.DB_COMMAND_TIMEOUT)


def get_session_repository(db: Database = Depends(get_database)) -> ISessionRepository:
    return SessionRepository(db)


def get_password_reset_token_repository(
    db: Database = Depends(get_database),
) -> IPasswordResetTokenRepository:
    return PasswordResetTokenRepository(db)


def get_user_repository(db: Database = Depends(get_database)) -> IUserRepository:
    return UserRepository(db)


def get_email_sender() -> IEmailSender:
    if ApplicationConfig.EMAIL_BACKEND == "smtp":
        return SmtpEmailSender(
            host=ApplicationConfig.SMTP_HOST,
            port=ApplicationConfig.SMTP_PORT,
            from_address=ApplicationConfig.EMAIL_FROM_ADDRESS,
            from_name=ApplicationConfig.EMAIL_FROM_NAME,
            username=ApplicationConfig.SMTP_USERNAME or None,
            password=ApplicationConfig.SMTP_PASSWORD or None,
            use_tls=ApplicationConfig.SMTP_USE_TLS,
        )
    return LoggingEmailSender(ApplicationConfig.EMAIL_FROM_ADDRESS)


@dataclass(frozen=True)
class CurrentSession:
    session_id: UUID
    user_id: int


async def get_current_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    sessions: ISessionRepository = Depends(get_session_repository),
) -> CurrentSession:
    """
    Dependency to extract and validate the session token from the Authorization header.

    Every call round-trips to the store, which also slides the session expiry.

    Raises:
        ClientError: 401 if the token is missing, malformed, unknown or expired
        ServerError: 503 if the store cannot be reached
    """
    if credentials is None or not credentials.credentials:
        raise ClientError(
            Error("UNAUTHORIZED", "Session token required"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        session_id = UUID(credentials.credentials.strip())
    except ValueError:
        raise ClientError(
            Error("INVALID_SESSION", "Invalid session token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    result = await ValidateSessionUseCase(sessions).execute(session_id)
    if result.is_err():
        raise ServerError(result.error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    if not result.value.is_valid:
        raise ClientError(
            Error("INVALID_SESSION", "Session is invalid or expired"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    return CurrentSession(session_id=session_id, user_id=result.value.user_id)
