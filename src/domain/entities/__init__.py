"""
Fantasy League Domain Entities

Read models for data owned by the backing store.
Each model in its own file for better maintainability.
"""

# Export all enums
from .enums import AccountStatus, SystemRole

# Export all read models
from .audit import AuditContext
from .password_reset_token import PasswordResetTokenResult
from .session import ActiveSession, CleanupResult, LoginOutcome, SessionValidation
from .user import (
    CommissionedLeague,
    NewUserAccount,
    RegistrationResult,
    UserProfile,
    UserProfileHeader,
    UserTeam,
)

__all__ = [
    # Enums
    "AccountStatus",
    "SystemRole",
    # Read models
    "AuditContext",
    "PasswordResetTokenResult",
    "ActiveSession",
    "CleanupResult",
    "LoginOutcome",
    "SessionValidation",
    "CommissionedLeague",
    "NewUserAccount",
    "RegistrationResult",
    "UserProfile",
    "UserProfileHeader",
    "UserTeam",
]
