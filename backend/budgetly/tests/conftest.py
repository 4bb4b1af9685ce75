"""
Shared pytest fixtures: in-memory database, API client, mocked OpenAI.
"""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["OPENAI_API_KEY"] = "test-openai-key"

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import budgetly.models  # noqa: F401
from budgetly.db.base import Base
from budgetly.db.session import get_db
from budgetly.main import app
from budgetly.services import ai_service

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Fresh schema per test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db):
    """Unauthenticated API client bound to the test database."""
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def register(client, username="alice", password="secret-password"):
    """Register a user through the API; the client keeps the session cookie."""
    response = client.post("/api/auth/register", json={"username": username, "password": password})
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def register_user():
    """Registration helper for tests that need several users."""
    return register


@pytest.fixture
def auth_client(client):
    """Client logged in as a freshly registered user."""
    register(client)
    return client


@pytest.fixture
def mock_openai(monkeypatch):
    """
    Route the AI service's httpx client through a handler.

    Usage: requests = mock_openai(lambda request: httpx.Response(...))
    Returns the list of captured requests.
    """
    def install(handler):
        captured = []
        real_client = httpx.AsyncClient

        def recording_handler(request):
            captured.append(request)
            return handler(request)

        def factory(*args, **kwargs):
            kwargs["transport"] = httpx.MockTransport(recording_handler)
            return real_client(*args, **kwargs)

        monkeypatch.setattr(ai_service.httpx, "AsyncClient", factory)
        return captured

    return install
