"""Test configuration and fixtures."""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from issue_tracker.config import settings
from issue_tracker.core.auth import auth_service
from issue_tracker.main import app
from issue_tracker.models.base import Base
from issue_tracker.services.mailer import Mailer, get_mailer

API = "/api/v1"
PASSWORD = "correct-horse-battery"


class RecordingMailer(Mailer):
    """Mailer that keeps the tokens it was asked to send."""

    def __init__(self):
        super().__init__(settings.mail.model_copy(update={"backend": "console"}))
        self.sent = []

    async def send_verification_mail(self, email: str, user_id: str, token: str) -> None:
        self.sent.append({"type": "verification", "email": email, "user_id": user_id, "token": token})

    async def send_reset_mail(self, email: str, token: str) -> None:
        self.sent.append({"type": "reset", "email": email, "token": token})

    def last_token(self, mail_type: str, email: str) -> str:
        for mail in reversed(self.sent):
            if mail["type"] == mail_type and mail["email"] == email:
                return mail["token"]
        raise AssertionError(f"no {mail_type} mail sent to {email}")


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def client(tmp_path, monkeypatch, mailer):
    """Test client on a fresh SQLite file; tables are created by the app lifespan."""
    monkeypatch.setattr(
        settings.database, "url", f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"
    )
    app.dependency_overrides[get_mailer] = lambda: mailer

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def signup(client: TestClient, email: str, password: str = PASSWORD, **extra) -> dict:
    payload = {"firstName": "Mayur", "lastName": "Mahamune", "email": email, "password": password}
    payload.update(extra)
    response = client.post(f"{API}/users/signup", json=payload)
    assert response.status_code == 200, response.json()
    return response.json()["data"]


def login(client: TestClient, email: str, password: str = PASSWORD) -> str:
    response = client.post(f"{API}/users/login", json={"email": email, "password": password})
    assert response.status_code == 200, response.json()
    return response.json()["data"]["authToken"]


@pytest.fixture
def test_user(client):
    """A signed-up user."""
    return signup(client, "mayur@example.com")


@pytest.fixture
def auth_headers(client, test_user):
    """Authorization headers for the test user."""
    return {"Authorization": f"Bearer {login(client, test_user['email'])}"}


@pytest.fixture
def other_headers(client):
    """Authorization headers for a second user."""
    user = signup(client, "raju@example.com", firstName="Raju", lastName="Rastogi")
    return {"Authorization": f"Bearer {login(client, user['email'])}"}


@pytest_asyncio.fixture
async def async_session(tmp_path):
    """Async session on a fresh SQLite file, for service-level tests."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'service.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def auth():
    return auth_service
