from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from src.api.error import raise_for_error
from src.api.utils.request_context import get_audit_context
from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.app.repositories.session_repository import ISessionRepository
from src.app.repositories.user_repository import IUserRepository
from src.app.services.email_sender import IEmailSender
from src.app.use_cases.auth import (
    RegisterCommand,
    RegisterResponse,
    RegisterUseCase,
    LoginUseCase,
    LogoutUseCase,
    LogoutAllUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordWithTokenUseCase,
    LoginResponse,
    MessageResponse,
    RequestPasswordResetResponse,
)
from src.depends import (
    CurrentSession,
    get_current_session,
    get_email_sender,
    get_password_reset_token_repository,
    get_session_repository,
    get_user_repository,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class RegisterRequest(BaseModel):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    """

    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    alias: Optional[str] = Field(None, max_length=50, description="Public alias")
    password: str = Field(..., description="8-12 chars with upper, lower and digit")
    password_confirm: str = Field(..., description="Must match password")
    language_code: str = Field("en", min_length=2, max_length=10)
    profile_image_url: Optional[str] = Field(None, max_length=400)
    profile_image_width: Optional[int] = Field(None, gt=0)
    profile_image_height: Optional[int] = Field(None, gt=0)
    profile_image_bytes: Optional[int] = Field(None, gt=0)


@router.post(
    "/register", status_code=status.HTTP_201_CREATED, response_model=RegisterResponse
)
async def register(
    body: RegisterRequest,
    request: Request,
    users: IUserRepository = Depends(get_user_repository),
):
    """
    User Registration

    Raises:
        - 400 Bad Request: Weak password, invalid image size or store rejection
          (e.g. email already registered)
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 503 Service Unavailable: Store unreachable
    """
    command = RegisterCommand(**body.model_dump())

    use_case = RegisterUseCase(users)
    result = await use_case.execute(command, get_audit_context(request))

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
                "INVALID_PROFILE_IMAGE": status.HTTP_400_BAD_REQUEST,
                "REGISTRATION_FAILED": status.HTTP_400_BAD_REQUEST,
            },
        )

    return result.value


class LoginRequest(BaseModel):
    """Login HTTP request payload"""

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    sessions: ISessionRepository = Depends(get_session_repository),
    users: IUserRepository = Depends(get_user_repository),
):
    """
    User Login

    Returns an opaque session token to send as ``Authorization: Bearer <token>``.

    Raises:
        - 401 Unauthorized: Invalid credentials or locked account (store message)
        - 503 Service Unavailable: Store unreachable
    """
    use_case = LoginUseCase(sessions, users)
    result = await use_case.execute(body.email, body.password, get_audit_context(request))

    if result.is_err():
        raise_for_error(result.error, {"LOGIN_FAILED": status.HTTP_401_UNAUTHORIZED})

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout(
    request: Request,
    current_session: CurrentSession = Depends(get_current_session),
    sessions: ISessionRepository = Depends(get_session_repository),
):
    """Invalidate the session used to make this request"""
    use_case = LogoutUseCase(sessions)
    result = await use_case.execute(current_session.session_id, get_audit_context(request))

    if result.is_err():
        raise_for_error(result.error, {"LOGOUT_FAILED": status.HTTP_400_BAD_REQUEST})

    return result.value


@router.post("/logout-all", status_code=status.HTTP_200_OK, response_model=MessageResponse)
async def logout_all(
    request: Request,
    current_session: CurrentSession = Depends(get_current_session),
    sessions: ISessionRepository = Depends(get_session_repository),
):
    """Invalidate every session of the authenticated user, this one included"""
    use_case = LogoutAllUseCase(sessions)
    result = await use_case.execute(current_session.user_id, get_audit_context(request))

    if result.is_err():
        raise_for_error(result.error, {"LOGOUT_FAILED": status.HTTP_400_BAD_REQUEST})

    return result.value


class RequestPasswordResetRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")


@router.post(
    "/request-password-reset",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def request_password_reset(
    body: RequestPasswordResetRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    reset_tokens: IPasswordResetTokenRepository = Depends(get_password_reset_token_repository),
    email_sender: IEmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Always answers with the same body so the endpoint cannot be used to
    discover registered emails. The email is sent after the response.
    """
    use_case = RequestPasswordResetUseCase(
        reset_tokens,
        email_sender,
        app_name=ApplicationConfig.APP_NAME,
        reset_password_url=ApplicationConfig.RESET_PASSWORD_URL,
    )
    result = await use_case.execute(
        body.email, get_audit_context(request), schedule=background_tasks.add_task
    )
    return result.value


class ResetPasswordWithTokenRequest(BaseModel):
    token: str = Field(..., min_length=1, max_length=100, description="Token from the reset email")
    new_password: str = Field(..., description="8-12 chars with upper, lower and digit")
    confirm_password: str = Field(..., description="Must match new_password")


@router.post(
    "/reset-password-with-token",
    status_code=status.HTTP_200_OK,
    response_model=MessageResponse,
)
async def reset_password_with_token(
    body: ResetPasswordWithTokenRequest,
    request: Request,
    reset_tokens: IPasswordResetTokenRepository = Depends(get_password_reset_token_repository),
):
    """
    Reset Password With Token

    Raises:
        - 400 Bad Request: Weak password, mismatched confirmation, or an
          invalid, used or expired token
        - 503 Service Unavailable: Store unreachable
    """
    use_case = ResetPasswordWithTokenUseCase(reset_tokens)
    result = await use_case.execute(
        body.token, body.new_password, body.confirm_password, get_audit_context(request)
    )

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_PASSWORD": status.HTTP_400_BAD_REQUEST,
                "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
            },
        )

    return result.value
