from fastapi import APIRouter, Depends, Query, status

from src.api.error import raise_for_error
from src.api.utils.admin_auth import verify_admin_api_key
from src.app.repositories.session_repository import ISessionRepository
from src.app.use_cases.sessions import (
    ActiveSessionsResponse,
    CleanupExpiredSessionsUseCase,
    CleanupResponse,
    ListActiveSessionsUseCase,
)
from src.depends import CurrentSession, get_current_session, get_session_repository

router = APIRouter(prefix="/sessions", tags=["Sessions"])


@router.get("", status_code=status.HTTP_200_OK, response_model=ActiveSessionsResponse)
async def list_active_sessions(
    current_session: CurrentSession = Depends(get_current_session),
    sessions: ISessionRepository = Depends(get_session_repository),
):
    """
    List Active Sessions

    Returns the caller's open sessions, most recent activity first, with the
    session used for this request flagged as current.
    """
    use_case = ListActiveSessionsUseCase(sessions)
    result = await use_case.execute(current_session.user_id, current_session.session_id)

    if result.is_err():
        raise_for_error(result.error, {})

    return result.value


@router.post(
    "/cleanup",
    status_code=status.HTTP_200_OK,
    response_model=CleanupResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def cleanup_expired_sessions(
    retention_days: int = Query(
        30, ge=1, le=3650, description="Delete what expired more than this many days ago"
    ),
    sessions: ISessionRepository = Depends(get_session_repository),
):
    """
    Cleanup Expired Sessions - maintenance

    Authentication is via Admin API Key, not user sessions.

    Raises:
        - 401 Unauthorized: Missing or invalid admin key
        - 400 Bad Request: Store rejected the cleanup
        - 503 Service Unavailable: Store unreachable
    """
    use_case = CleanupExpiredSessionsUseCase(sessions)
    result = await use_case.execute(retention_days)

    if result.is_err():
        raise_for_error(
            result.error,
            {
                "INVALID_RETENTION": status.HTTP_400_BAD_REQUEST,
                "CLEANUP_FAILED": status.HTTP_400_BAD_REQUEST,
            },
        )

    return result.value
