import asyncio
from datetime import datetime, timezone

import pytest
from postgrest.exceptions import APIError

from api.services.tasks import TaskErrorKind, delete_task
from api.services.tasks.store import SupabaseTaskStore, SupabaseUserDirectory
from fakes import FakeSupabaseClient

ROW = {
    "id": "7f1c",
    "text": "buy milk",
    "created_at": "2024-05-01T10:00:00+00:00",
    "owner": "u1",
    "username": "alice",
    "checked": None,
    "private": None,
}


def test_insert_sends_iso_timestamp():
    client = FakeSupabaseClient([ROW])
    store = SupabaseTaskStore(client, "tasks")
    created_at = datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc)

    task = store.insert({"text": "buy milk", "created_at": created_at, "owner": "u1", "username": "alice"})

    query = client.last_query
    assert query.table == "tasks"
    name, args, _ = query.calls[0]
    assert name == "insert"
    assert args[0]["created_at"] == created_at.isoformat()
    assert task.id == "7f1c"
    assert task.created_at == created_at


def test_insert_without_returned_row_fails():
    store = SupabaseTaskStore(FakeSupabaseClient([]))
    with pytest.raises(Exception, match="Failed to create task"):
        store.insert({"text": "x", "owner": "u1"})


def test_null_flags_read_as_false():
    store = SupabaseTaskStore(FakeSupabaseClient([ROW]))
    task = store.find_one("7f1c")
    assert task.checked is False
    assert task.private is False


def test_find_one_missing_returns_none():
    store = SupabaseTaskStore(FakeSupabaseClient([]))
    assert store.find_one("nope") is None


def test_update_and_remove_report_row_counts():
    client = FakeSupabaseClient([ROW])
    store = SupabaseTaskStore(client)

    assert store.update("7f1c", {"checked": True}) == 1
    assert client.last_query.calls == [("update", ({"checked": True},), {}), ("eq", ("id", "7f1c"), {})]

    client.rows = []
    assert store.remove("7f1c") == 0
    assert client.last_query.calls[0][0] == "delete"


def test_find_visible_filters_by_privacy_or_owner():
    client = FakeSupabaseClient([ROW])
    store = SupabaseTaskStore(client)

    tasks = list(store.find_visible("u1"))

    assert [t.id for t in tasks] == ["7f1c"]
    or_calls = [args for name, args, _ in client.last_query.calls if name == "or_"]
    assert or_calls == [('private.is.null,private.eq.false,owner.eq."u1"',)]


def test_find_visible_anonymous_sees_only_public():
    client = FakeSupabaseClient([])
    list(SupabaseTaskStore(client).find_visible(None))
    or_calls = [args for name, args, _ in client.last_query.calls if name == "or_"]
    assert or_calls == [("private.is.null,private.eq.false",)]


def test_find_visible_is_lazy():
    client = FakeSupabaseClient([ROW])
    tasks = SupabaseTaskStore(client).find_visible("u1")
    assert client.queries == []
    next(tasks)
    assert len(client.queries) == 1


def test_user_directory_lookup():
    client = FakeSupabaseClient([{"id": "u1", "username": "alice"}])
    users = SupabaseUserDirectory(client, "users")

    assert users.find_by_id("u1")["username"] == "alice"
    assert client.last_query.table == "users"

    client.rows = []
    assert users.find_by_id("u9") is None


def test_find_one_malformed_uuid_returns_none():
    error = APIError({"code": "22P02", "message": 'invalid input syntax for type uuid: "nope"'})
    store = SupabaseTaskStore(FakeSupabaseClient(error=error))
    assert store.find_one("nope") is None


def test_find_one_other_errors_propagate():
    error = APIError({"code": "42P01", "message": 'relation "tasks" does not exist'})
    store = SupabaseTaskStore(FakeSupabaseClient(error=error))
    with pytest.raises(APIError):
        store.find_one("7f1c")


def test_delete_malformed_uuid_is_not_found():
    error = APIError({"code": "22P02", "message": 'invalid input syntax for type uuid: "nope"'})
    store = SupabaseTaskStore(FakeSupabaseClient(error=error))
    result = asyncio.run(delete_task(store, "u1", "nope"))
    assert result.error.kind is TaskErrorKind.NOT_FOUND
