"""
Pytest configuration and shared fixtures for all tests.

Tests run against an in-memory SQLite database and a scripted oracle, so no
network, Postgres or API key is needed.
"""

import os

# Settings are read at import time, so the environment must be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["OPENAI_API_KEY"] = "test-api-key-for-testing"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"

from typing import Any, Dict, List

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pathwise.api.deps import get_google_client, get_oracle
from pathwise.core.exceptions import UnauthenticatedError
from pathwise.db.database import Base, get_db
from pathwise.main import app
from pathwise.schemas.user import FederatedAttempt


class FakeOracle:
    """Oracle stand-in that replays scripted responses and records prompts."""

    def __init__(self):
        self.responses: List[Any] = []
        self.calls: List[Dict[str, Any]] = []

    def queue(self, response: Any) -> None:
        self.responses.append(response)

    async def generate(self, prompt: str, schema: Dict[str, Any]) -> str:
        self.calls.append({"prompt": prompt, "schema": schema})
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class FakeGoogleClient:
    """Accepts any ID token of the form ``valid:<email>:<name>``."""

    async def exchange_code(self, code: str, redirect_uri: str) -> str:
        return code

    async def verify_id_token(self, id_token: str) -> FederatedAttempt:
        parts = id_token.split(":")
        if len(parts) != 3 or parts[0] != "valid":
            raise UnauthenticatedError()
        return FederatedAttempt(email=parts[1], display_name=parts[2])


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def fake_oracle():
    return FakeOracle()


@pytest.fixture
def client(session_factory, fake_oracle):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_oracle] = lambda: fake_oracle
    app.dependency_overrides[get_google_client] = lambda: FakeGoogleClient()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _login(client: TestClient, email: str = "ada@example.com", password: str = "s3cret-pass") -> Dict[str, str]:
    response = client.post("/api/v1/auth/session", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def auth_headers(client):
    """Register through the API and return bearer headers plus the user id."""
    response = client.post(
        "/api/v1/auth/register",
        json={"email": "ada@example.com", "name": "Ada Lovelace", "password": "s3cret-pass"},
    )
    assert response.status_code == 200, response.text
    headers = _login(client)
    me = client.get("/api/v1/profile", headers=headers).json()
    return headers, me["id"]


@pytest.fixture
def sign_in(client):
    """Return a helper that signs in with a password and yields bearer headers."""
    return lambda email="ada@example.com", password="s3cret-pass": _login(client, email, password)
