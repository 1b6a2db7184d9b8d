"""
Shared fixtures.

MongoDB is replaced by mongomock and the auth database by a throwaway
SQLite file, so the suite needs no running services. Environment is set
before the package is imported because settings are read at import time.
"""
import os
import tempfile

_tmp_dir = tempfile.mkdtemp(prefix="career_portal_tests_")
os.environ["AUTH_DATABASE_URL"] = f"sqlite:///{_tmp_dir}/auth.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_EMAILS"] = "admin@example.com"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id.apps.googleusercontent.com"
os.environ["AI_API_KEY"] = ""
os.environ["MAIL_SERVER"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import mongomock
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text

from career_portal.db import mongodb
from career_portal.db.postgres import get_db_session, init_auth_schema
from career_portal.main import app


@pytest.fixture(autouse=True)
def mongo_db():
    """Fresh in-memory document store per test."""
    original_client, original_db = mongodb._client, mongodb._db
    mongodb._client = mongomock.MongoClient()
    mongodb._db = None
    yield mongodb.get_mongo_db()
    mongodb._client, mongodb._db = original_client, original_db


@pytest.fixture(autouse=True)
def auth_store():
    """Empty credential table per test."""
    init_auth_schema()
    with get_db_session() as db:
        db.execute(text("DELETE FROM auth_accounts"))
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def register(client, email: str, password: str = "secret123", display_name: str = None) -> dict:
    """Register an account and return its bearer headers plus ids."""
    body = {"email": email, "password": password}
    if display_name:
        body["display_name"] = display_name
    response = client.post("/api/auth/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()
    return {
        "headers": {"Authorization": f"Bearer {data['access_token']}"},
        "user_id": data["user_id"],
        "role": data["role"],
    }


@pytest.fixture
def user(client):
    return register(client, "student@example.com", display_name="Student One")


@pytest.fixture
def admin(client):
    return register(client, "admin@example.com")


@pytest.fixture
def register_user(client):
    """Factory: register another account and get its headers."""
    def _register(email: str, password: str = "secret123", display_name: str = None) -> dict:
        return register(client, email, password, display_name)
    return _register
