from typing import List, Tuple

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.app.services.password_policy import PasswordPolicy
from src.depends import get_email_sender, get_password_policy, get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader


class RecordingEmailSender(IEmailSender):
    """Captures outbound tokens instead of delivering them"""

    def __init__(self):
        self.verifications: List[Tuple[str, str]] = []
        self.setups: List[Tuple[str, str]] = []

    async def send_verification(self, email: str, token: str) -> None:
        self.verifications.append((email, token))

    async def send_account_setup(self, email: str, token: str) -> None:
        self.setups.append((email, token))

    def last_verification_token(self, email: str) -> str:
        return [token for to, token in self.verifications if to == email][-1]

    def last_setup_token(self, email: str) -> str:
        return [token for to, token in self.setups if to == email][-1]


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
def outbox():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def client(session_factory, outbox):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    # One session per request, as in production
    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: outbox
    app.dependency_overrides[get_password_policy] = lambda: PasswordPolicy(rounds=4)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
def register_and_verify(client, outbox):
    """Register a profile, verify its email and return the payload"""

    async def _register_and_verify(payload: dict) -> dict:
        response = await client.post("/auth/register", json=payload)
        assert response.status_code == 201
        token = outbox.last_verification_token(payload["email"])
        response = await client.post("/auth/verify-email", json={"token": token})
        assert response.status_code == 200
        return payload

    return _register_and_verify


@pytest_asyncio.fixture
def login(client):
    """Log in and return the bearer header"""

    async def _login(email: str, password: str) -> dict:
        response = await client.post(
            "/auth/login", json={"email": email, "password": password}
        )
        assert response.status_code == 200
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
