"""
Task storage - the collection and user lookup the task operations run against.

Operations receive a TaskStore and a UserDirectory explicitly, so the
Supabase-backed implementations here can be swapped for the in-memory ones
in local development and tests.
"""
from typing import Any, Dict, Iterator, Optional, Protocol
import logging

from postgrest.exceptions import APIError
from supabase import Client

from api.services.tasks.models import Task

logger = logging.getLogger(__name__)

# Postgres error raised when an id is not a valid uuid
INVALID_TEXT_REPRESENTATION = "22P02"


class TaskStore(Protocol):
    """Single-document operations on the tasks collection."""

    def insert(self, fields: Dict[str, Any]) -> Task:
        """Insert a new task and return it with its store-assigned id."""
        ...

    def find_one(self, task_id: str) -> Optional[Task]:
        ...

    def update(self, task_id: str, changes: Dict[str, Any]) -> int:
        """Set the given fields on one task. Returns the number of rows updated."""
        ...

    def remove(self, task_id: str) -> int:
        ...

    def find_visible(self, caller_id: Optional[str]) -> Iterator[Task]:
        """Tasks that are not private, or private and owned by caller_id."""
        ...


class UserDirectory(Protocol):
    def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Return the user record (with at least "username") or None."""
        ...


class SupabaseTaskStore:
    """TaskStore backed by a Supabase (PostgREST) table."""

    def __init__(self, client: Client, table: str = "tasks"):
        self._client = client
        self._table = table

    def insert(self, fields: Dict[str, Any]) -> Task:
        record = dict(fields)
        if "created_at" in record:
            record["created_at"] = record["created_at"].isoformat()

        response = self._client.table(self._table).insert(record).execute()

        if not response.data:
            raise Exception("Failed to create task")

        return Task.from_record(response.data[0])

    def find_one(self, task_id: str) -> Optional[Task]:
        try:
            response = (
                self._client.table(self._table)
                .select("*")
                .eq("id", task_id)
                .limit(1)
                .execute()
            )
        except APIError as e:
            # A string that is not a valid uuid cannot match any row
            if e.code == INVALID_TEXT_REPRESENTATION:
                logger.info(f"Task id {task_id!r} is not a valid {self._table}.id")
                return None
            raise

        if response.data:
            return Task.from_record(response.data[0])

        return None

    def update(self, task_id: str, changes: Dict[str, Any]) -> int:
        response = (
            self._client.table(self._table)
            .update(changes)
            .eq("id", task_id)
            .execute()
        )
        return len(response.data or [])

    def remove(self, task_id: str) -> int:
        response = (
            self._client.table(self._table)
            .delete()
            .eq("id", task_id)
            .execute()
        )
        return len(response.data or [])

    def find_visible(self, caller_id: Optional[str]) -> Iterator[Task]:
        # NULL private means public
        conditions = ["private.is.null", "private.eq.false"]
        if caller_id is not None:
            quoted = caller_id.replace("\\", "\\\\").replace('"', '\\"')
            conditions.append(f'owner.eq."{quoted}"')

        response = (
            self._client.table(self._table)
            .select("*")
            .or_(",".join(conditions))
            .order("created_at", desc=False)
            .execute()
        )

        for record in response.data or []:
            yield Task.from_record(record)


class SupabaseUserDirectory:
    """UserDirectory reading display names from the users table."""

    def __init__(self, client: Client, table: str = "users"):
        self._client = client
        self._table = table

    def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        response = (
            self._client.table(self._table)
            .select("id, username")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )

        if response.data:
            return response.data[0]

        logger.warning(f"User {user_id} not found in {self._table}")
        return None
