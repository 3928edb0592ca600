from uuid import uuid4

import pytest

from src.app.services.errors import BackingStoreError, TransportError
from src.app.use_cases.auth.login_use_case import LoginUseCase
from src.domain.entities import LoginOutcome, UserProfileHeader


@pytest.mark.asyncio
async def test_successful_login(mock_sessions, mock_users, context):
    """Successful login returns the session token and profile header fields"""
    # Arrange
    session_id = uuid4()
    mock_sessions.login.return_value = LoginOutcome(
        success=True, session_id=session_id, message="Session started."
    )
    mock_users.get_header_by_email.return_value = UserProfileHeader(
        user_id=42, email="ann@example.com", name="Ann", system_role_code="ADMIN"
    )

    # Act
    result = await LoginUseCase(mock_sessions, mock_users).execute(
        "ann@example.com", "Secret123", context
    )

    # Assert
    assert result.is_ok()
    response = result.value
    assert response.session_id == str(session_id)
    assert response.message == "Session started."
    assert response.user_id == 42
    assert response.name == "Ann"
    assert response.system_role_code == "ADMIN"
    mock_sessions.login.assert_awaited_once_with("ann@example.com", "Secret123", context)


@pytest.mark.asyncio
async def test_login_failure_surfaces_store_message(mock_sessions, mock_users, context):
    mock_sessions.login.return_value = LoginOutcome(
        success=False, message="Account is locked. Try again later."
    )

    result = await LoginUseCase(mock_sessions, mock_users).execute(
        "ann@example.com", "Secret123", context
    )

    assert result.is_err()
    assert result.error.code == "LOGIN_FAILED"
    assert result.error.message == "Account is locked. Try again later."
    mock_users.get_header_by_email.assert_not_called()


@pytest.mark.asyncio
async def test_login_success_flag_without_session_is_failure(mock_sessions, mock_users, context):
    mock_sessions.login.return_value = LoginOutcome(success=False, session_id=None, message="")

    result = await LoginUseCase(mock_sessions, mock_users).execute("a@b.com", "x", context)

    assert result.error.code == "LOGIN_FAILED"
    assert result.error.message == "Invalid credentials."


@pytest.mark.asyncio
async def test_login_transport_failure_is_service_error(mock_sessions, mock_users, context):
    mock_sessions.login.side_effect = TransportError("Database connection failure")

    result = await LoginUseCase(mock_sessions, mock_users).execute("a@b.com", "x", context)

    assert result.error.code == "SERVICE_ERROR"


@pytest.mark.asyncio
async def test_login_header_failure_falls_back(mock_sessions, mock_users, context):
    """A missing or unreadable header never fails an accepted login"""
    session_id = uuid4()
    mock_sessions.login.return_value = LoginOutcome(
        success=True, session_id=session_id, message="Session started."
    )
    mock_users.get_header_by_email.side_effect = BackingStoreError("View unavailable.")

    result = await LoginUseCase(mock_sessions, mock_users).execute(
        "ann@example.com", "Secret123", context
    )

    assert result.is_ok()
    assert result.value.user_id == 0
    assert result.value.email == "ann@example.com"
    assert result.value.name == ""
    assert result.value.system_role_code == "USER"
