from typing import Optional

from src.adapter.services.record import Record
from src.app.repositories.user_repository import IUserRepository
from src.app.services.database import Database, param
from src.app.services.view_filter import Operator, ViewFilter
from src.domain.entities import (
    AuditContext,
    CommissionedLeague,
    NewUserAccount,
    RegistrationResult,
    SystemRole,
    UserProfile,
    UserProfileHeader,
    UserTeam,
)

HEADER_COLUMNS = ("UserID", "Email", "Name", "SystemRoleCode")


def map_profile_header(record: Record) -> UserProfileHeader:
    return UserProfileHeader(
        user_id=record.get_int32("UserID"),
        email=record.get_string("Email"),
        name=record.get_string("Name"),
        alias=record.get_nullable_string("Alias"),
        system_role_code=record.get_string("SystemRoleCode") or SystemRole.user.value,
        language_code=record.get_string("LanguageCode") or "en",
        profile_image_url=record.get_nullable_string("ProfileImageUrl"),
        account_status=record.get_byte("AccountStatus"),
        created_at=record.get_nullable_datetime("CreatedAt"),
        updated_at=record.get_nullable_datetime("UpdatedAt"),
    )


def map_commissioned_league(record: Record) -> CommissionedLeague:
    return CommissionedLeague(
        league_id=record.get_int32("LeagueID"),
        league_name=record.get_string("LeagueName"),
        status=record.get_byte("Status"),
        team_slots=record.get_byte("TeamSlots"),
        role_code=record.get_string("RoleCode"),
        is_primary_commissioner=record.get_bool("IsPrimaryCommissioner"),
        joined_at=record.get_datetime("JoinedAt"),
    )


def map_user_team(record: Record) -> UserTeam:
    return UserTeam(
        team_id=record.get_int32("TeamID"),
        league_id=record.get_int32("LeagueID"),
        league_name=record.get_string("LeagueName"),
        team_name=record.get_string("TeamName"),
        created_at=record.get_datetime("CreatedAt"),
    )


def map_registration(record: Record) -> RegistrationResult:
    return RegistrationResult(
        user_id=record.get_int32("UserID"),
        system_role_code=record.get_string("SystemRoleCode") or SystemRole.user.value,
        message=record.get_string("Message"),
    )


class UserRepository(IUserRepository):
    """User repository implementation over stored procedures and views"""

    def __init__(self, db: Database):
        self.db = db

    async def register(
        self, account: NewUserAccount, context: AuditContext
    ) -> Optional[RegistrationResult]:
        return await self.db.call_for_optional_row(
            "app.sp_RegisterUser",
            [
                param("Name", account.name),
                param("Email", account.email),
                param("Alias", account.alias),
                param("Password", account.password),
                param("PasswordConfirm", account.password_confirm),
                param("LanguageCode", account.language_code),
                param("ProfileImageUrl", account.profile_image_url),
                param("ProfileImageWidth", account.profile_image_width),
                param("ProfileImageHeight", account.profile_image_height),
                param("ProfileImageBytes", account.profile_image_bytes),
                param("SourceIp", context.source_ip),
                param("UserAgent", context.user_agent),
            ],
            map_registration,
        )

    async def get_header_by_email(self, email: str) -> Optional[UserProfileHeader]:
        view_filter = ViewFilter(HEADER_COLUMNS).where("Email", Operator.eq, email)
        headers = await self.db.query_filtered(
            "vw_UserProfileHeader", map_profile_header, view_filter, top=1
        )
        return headers[0] if headers else None

    async def get_profile(self, user_id: int) -> Optional[UserProfile]:
        result_sets = await self.db.call_for_result_sets(
            "app.sp_GetUserProfile",
            [param("UserID", user_id)],
            [map_profile_header, map_commissioned_league, map_user_team],
        )
        if not result_sets or not result_sets[0]:
            return None

        return UserProfile(
            header=result_sets[0][0],
            commissioned_leagues=result_sets[1] if len(result_sets) > 1 else [],
            teams=result_sets[2] if len(result_sets) > 2 else [],
        )
