import asyncio

import pytest
from fastapi import HTTPException

from api import dependencies
from api.config import settings
from api.services.tasks.memory_store import InMemoryTaskStore
from api.services.tasks.publication import ObservedTaskStore
from conftest import TEST_JWT_SECRET, make_token


def test_verified_token_yields_subject(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", TEST_JWT_SECRET)
    assert dependencies.decode_user_id(make_token("u1")) == "u1"


def test_wrong_audience_rejected(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", TEST_JWT_SECRET)
    with pytest.raises(HTTPException) as exc_info:
        dependencies.decode_user_id(make_token("u1", audience="anon"))
    assert exc_info.value.status_code == 401


def test_unverified_decode_without_secret(monkeypatch):
    monkeypatch.setattr(settings, "jwt_secret", None)
    token = make_token("u2", secret="any-secret-at-all-works-unverified")
    assert dependencies.decode_user_id(token) == "u2"


def test_no_header_is_anonymous():
    assert asyncio.run(dependencies.get_optional_user_id(None)) is None


def test_memory_backend(monkeypatch):
    monkeypatch.setattr(settings, "task_store_backend", "memory")
    dependencies._get_backing_stores.cache_clear()
    try:
        store = dependencies.get_task_store()
        assert isinstance(store, ObservedTaskStore)
        assert dependencies.get_user_directory().find_by_id("u1") is None
        backing, _ = dependencies._get_backing_stores()
        assert isinstance(backing, InMemoryTaskStore)
    finally:
        dependencies._get_backing_stores.cache_clear()


def test_unknown_backend(monkeypatch):
    monkeypatch.setattr(settings, "task_store_backend", "redis")
    dependencies._get_backing_stores.cache_clear()
    try:
        with pytest.raises(ValueError, match="Unknown TASK_STORE_BACKEND"):
            dependencies.get_task_store()
    finally:
        dependencies._get_backing_stores.cache_clear()


def test_memory_backend_seeds_usernames(monkeypatch):
    monkeypatch.setattr(settings, "task_store_backend", "memory")
    monkeypatch.setattr(settings, "memory_usernames", {"u1": "alice"})
    dependencies._get_backing_stores.cache_clear()
    try:
        users = dependencies.get_user_directory()
        assert users.find_by_id("u1") == {"id": "u1", "username": "alice"}
        assert users.find_by_id("u2") is None
    finally:
        dependencies._get_backing_stores.cache_clear()
