import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.entities import AuditContext


@pytest.fixture
def context():
    return AuditContext(source_ip="203.0.113.7", user_agent="pytest")


@pytest.fixture
def mock_sessions():
    sessions = MagicMock()
    sessions.login = AsyncMock()
    sessions.validate = AsyncMock()
    sessions.logout = AsyncMock()
    sessions.logout_all = AsyncMock()
    sessions.get_active_by_user_id = AsyncMock()
    sessions.cleanup_expired = AsyncMock()
    return sessions


@pytest.fixture
def mock_users():
    users = MagicMock()
    users.register = AsyncMock()
    users.get_header_by_email = AsyncMock()
    users.get_profile = AsyncMock()
    return users


@pytest.fixture
def mock_reset_tokens():
    reset_tokens = MagicMock()
    reset_tokens.request = AsyncMock()
    reset_tokens.redeem = AsyncMock()
    return reset_tokens


@pytest.fixture
def mock_email_sender():
    sender = MagicMock()
    sender.send = AsyncMock()
    return sender
