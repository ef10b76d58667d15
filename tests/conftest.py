"""
Pytest configuration and shared fixtures.
"""

import os

# Must be set before thinksearch.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.pop("GEMINI_API_KEY", None)

import httpx
import logfire
import pytest
from sqlalchemy.orm import sessionmaker

logfire.configure(send_to_logfire=False, console=False)


# ============================================================
# HTTP Fixtures
# ============================================================


@pytest.fixture
def mock_http():
    """Factory for an AsyncClient whose requests are answered by `handler`."""

    def factory(handler):
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return factory


@pytest.fixture
def gemini_payload():
    """Build a generateContent response carrying `text`."""

    def build(text):
        return {"candidates": [{"content": {"parts": [{"text": text}]}}]}

    return build


# ============================================================
# Database Fixtures
# ============================================================


@pytest.fixture
def db_engine():
    """Fresh schema on the shared in-memory engine."""
    from thinksearch.db.database import Base, engine, init_db

    Base.metadata.drop_all(bind=engine)
    init_db(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(db_engine):
    """TestClient over the real app and the in-memory database."""
    from fastapi.testclient import TestClient

    from thinksearch.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Sign up a user and return (headers, user payload)."""

    def make(email="writer@example.com", username="writer"):
        response = client.post(
            "/api/auth/signup",
            json={"email": email, "password": "secret123", "displayName": "Writer", "username": username},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return {"Authorization": f"Bearer {body['token']}"}, body["user"]

    return make
