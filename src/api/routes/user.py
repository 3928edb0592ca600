from fastapi import APIRouter, Depends, status

from src.api.error import raise_for_error
from src.app.repositories.user_repository import IUserRepository
from src.app.use_cases.users import GetProfileUseCase
from src.depends import CurrentSession, get_current_session, get_user_repository
from src.domain.entities import UserProfile

router = APIRouter(prefix="/users", tags=["User"])


@router.get("/me/profile", status_code=status.HTTP_200_OK, response_model=UserProfile)
async def get_my_profile(
    current_session: CurrentSession = Depends(get_current_session),
    users: IUserRepository = Depends(get_user_repository),
):
    """
    Profile of the authenticated user

    Header fields plus the leagues the user commissions and the teams they own.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired session
        - 404 Not Found: No profile for the session's user
        - 503 Service Unavailable: Store unreachable
    """
    use_case = GetProfileUseCase(users)
    result = await use_case.execute(current_session.user_id)

    if result.is_err():
        raise_for_error(result.error, {"PROFILE_NOT_FOUND": status.HTTP_404_NOT_FOUND})

    return result.value
