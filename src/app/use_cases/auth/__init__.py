"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .login_use_case import LoginUseCase
from .validate_session_use_case import ValidateSessionUseCase
from .logout_use_case import LogoutUseCase, LogoutAllUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_with_token_use_case import ResetPasswordWithTokenUseCase
from .dtos import (
    RegisterCommand,
    RegisterResponse,
    LoginResponse,
    MessageResponse,
    RequestPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "ValidateSessionUseCase",
    "LogoutUseCase",
    "LogoutAllUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordWithTokenUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "RegisterResponse",
    "LoginResponse",
    "MessageResponse",
    "RequestPasswordResetResponse",
]
