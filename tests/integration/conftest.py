from typing import List, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from src.adapter.services.database import SqlAlchemyDatabase
from src.app.services.email_sender import IEmailSender
from src.depends import get_database, get_email_sender
from tests.fixtures.fake_dbapi import FakeEngine
from tests.fixtures.fake_store import FakeBackingStore


class RecordingEmailSender(IEmailSender):
    def __init__(self):
        self.sent: List[Tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, html_body: str) -> None:
        self.sent.append((to, subject, html_body))


@pytest.fixture
def store():
    return FakeBackingStore()


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def client(store, email_sender):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    engine = FakeEngine(store.handle, adapter_nextset=True)

    def override_get_database():
        return SqlAlchemyDatabase(engine, command_timeout=5)

    app.dependency_overrides[get_database] = override_get_database
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'views.db'}")
    async with engine.begin() as conn:
        await conn.execute(
            text(
                "CREATE TABLE vw_UserActiveSessions ("
                "UserID INTEGER NOT NULL, SessionID TEXT PRIMARY KEY, "
                "CreatedAt TEXT, LastActivityAt TEXT, ExpiresAt TEXT, IsValid INTEGER)"
            )
        )
        await conn.execute(
            text(
                "INSERT INTO vw_UserActiveSessions VALUES "
                "(1, '3f2b8a4e-0c1d-4e5f-9a6b-7c8d9e0f1a2b', '2025-09-01 08:00:00', "
                "'2025-09-01 09:00:00', '2025-09-01 21:00:00', 1), "
                "(1, '6a7b8c9d-1e2f-4a3b-8c4d-5e6f7a8b9c0d', '2025-09-01 08:30:00', "
                "'2025-09-01 11:00:00', '2025-09-01 23:00:00', 1), "
                "(2, '0b1c2d3e-4f5a-4b6c-8d7e-9f0a1b2c3d4e', '2025-09-01 07:00:00', "
                "'2025-09-01 10:00:00', '2025-09-01 22:00:00', 1)"
            )
        )
    yield engine
    await engine.dispose()
