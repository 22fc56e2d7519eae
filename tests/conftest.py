"""Shared test fixtures: a fresh in-memory SQLite database per test and a FastAPI test client.

The environment is prepared before the app is imported so that module-level
settings (database URL, uploads directory, admin list) never point at real resources.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="airsoft-uploads-")
os.environ["AUTH_JWT_SECRET"] = "test-secret"
os.environ["ADMIN_EMAILS"] = "admin@example.com"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from airsoft_hub.database import Base, get_db
from main import app


@pytest.fixture
def test_engine():
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
def test_session_factory(test_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def test_db(test_session_factory):
    db = test_session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(test_session_factory):
    """FastAPI test client with the DB dependency overridden."""
    def override_get_db():
        db = test_session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return (token, email)."""
    def _register(email="player@example.com", password="secret123", username="player", airsoft_club=None):
        payload = {"email": email, "password": password, "username": username}
        if airsoft_club is not None:
            payload["airsoftClub"] = airsoft_club
        res = client.post("/api/auth/register", json=payload)
        assert res.status_code == 201, res.text
        body = res.json()
        return body["token"], body["email"]
    return _register


@pytest.fixture
def auth_headers(register):
    token, _ = register()
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def make_event():
    """Build a valid JSON event payload, overriding any field."""
    def _make_event(**overrides):
        event = {
            "name": "Operation Nightfall",
            "date": "2025-07-12",
            "description": "Night game",
            "location": "Karlovac, Croatia",
            "lat": 45.487,
            "lng": 15.547,
            "category": "12h",
            "facebook_link": "https://www.facebook.com/events/1",
        }
        event.update(overrides)
        return event
    return _make_event
