"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional
from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class RegisterCommand(BaseModel):
    """Validated registration intent, built by the API layer"""

    name: str
    email: str
    alias: Optional[str] = None
    password: str
    password_confirm: str
    language_code: str = "en"
    profile_image_url: Optional[str] = None
    profile_image_width: Optional[int] = None
    profile_image_height: Optional[int] = None
    profile_image_bytes: Optional[int] = None


# ============================================================================
# Response DTOs
# ============================================================================


class RegisterResponse(BaseModel):
    """Response for user registration use case"""

    user_id: int
    system_role_code: str
    message: str


class LoginResponse(BaseModel):
    """Response for user login use case"""

    session_id: str
    message: str
    user_id: int
    email: str
    name: str
    system_role_code: str


class MessageResponse(BaseModel):
    """Store-authored confirmation for logout, logout-all and password reset"""

    message: str


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case; identical for every email"""

    status: str
    message: str
