import jwt
import pytest
from fastapi.testclient import TestClient

from index import app
from api.config import settings
from api.dependencies import get_task_feed, get_task_store, get_user_directory
from api.services.tasks.memory_store import InMemoryTaskStore, InMemoryUserDirectory
from api.services.tasks.publication import ObservedTaskStore, TaskFeed

TEST_JWT_SECRET = "test-jwt-secret-for-the-task-api-suite"


def make_token(user_id, secret=TEST_JWT_SECRET, audience="authenticated"):
    """Mint a Supabase-style access token for user_id."""
    claims = {"aud": audience}
    if user_id is not None:
        claims["sub"] = user_id
    return jwt.encode(claims, secret, algorithm="HS256")


@pytest.fixture()
def store():
    return InMemoryTaskStore()


@pytest.fixture()
def users():
    return InMemoryUserDirectory({"u1": "alice", "u2": "bob"})


@pytest.fixture()
def feed():
    return TaskFeed()


@pytest.fixture()
def client(store, users, feed, monkeypatch):
    """TestClient wired to in-memory storage, verifying tokens with TEST_JWT_SECRET."""
    monkeypatch.setattr(settings, "jwt_secret", TEST_JWT_SECRET)
    app.dependency_overrides[get_task_store] = lambda: ObservedTaskStore(store, feed)
    app.dependency_overrides[get_user_directory] = lambda: users
    app.dependency_overrides[get_task_feed] = lambda: feed
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def auth():
    def headers(user_id):
        return {"Authorization": f"Bearer {make_token(user_id)}"}
    return headers
