"""
User Read Models

Profile data as exposed by vw_UserProfileHeader and app.sp_GetUserProfile.
"""

from datetime import datetime
from typing import List, Optional

from sqlmodel import Field, SQLModel

from .enums import SystemRole


class UserProfileHeader(SQLModel):
    """Row of vw_UserProfileHeader"""

    user_id: int
    email: str
    name: str
    alias: Optional[str] = None
    system_role_code: str = SystemRole.user.value
    language_code: str = "en"
    profile_image_url: Optional[str] = None
    account_status: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CommissionedLeague(SQLModel):
    league_id: int
    league_name: str
    status: int
    team_slots: int
    role_code: str
    is_primary_commissioner: bool
    joined_at: datetime


class UserTeam(SQLModel):
    team_id: int
    league_id: int
    league_name: str
    team_name: str
    created_at: datetime


class UserProfile(SQLModel):
    """
    Result sets of app.sp_GetUserProfile:
    1. profile header
    2. leagues the user commissions
    3. teams the user owns
    """

    header: Optional[UserProfileHeader] = None
    commissioned_leagues: List[CommissionedLeague] = Field(default_factory=list)
    teams: List[UserTeam] = Field(default_factory=list)


class RegistrationResult(SQLModel):
    """Row returned by app.sp_RegisterUser"""

    user_id: int
    system_role_code: str = SystemRole.user.value
    message: str = ""


class NewUserAccount(SQLModel):
    """Input of app.sp_RegisterUser; the store hashes the password"""

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
