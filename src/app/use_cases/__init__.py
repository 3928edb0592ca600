"""
Use Cases

Organized into domain folders:
- auth/: Registration, login, session validation, logout, password reset
- sessions/: Session listing and maintenance
- users/: Profile reads
"""

from .auth import (
    RegisterUseCase,
    LoginUseCase,
    ValidateSessionUseCase,
    LogoutUseCase,
    LogoutAllUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordWithTokenUseCase,
)
from .sessions import (
    ListActiveSessionsUseCase,
    CleanupExpiredSessionsUseCase,
)
from .users import (
    GetProfileUseCase,
)

__all__ = [
    # Auth
    "RegisterUseCase",
    "LoginUseCase",
    "ValidateSessionUseCase",
    "LogoutUseCase",
    "LogoutAllUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordWithTokenUseCase",
    # Sessions
    "ListActiveSessionsUseCase",
    "CleanupExpiredSessionsUseCase",
    # Users
    "GetProfileUseCase",
]
