"""In-memory task storage for local development and tests."""

from typing import Any, Dict, Iterator, Optional
import logging
import threading
import uuid

from api.services.tasks.models import Task
from api.services.tasks.permissions import is_visible_to

logger = logging.getLogger(__name__)


class InMemoryTaskStore:
    """
    TaskStore keeping tasks in a dict, in insertion order.

    The lock makes each single operation atomic; like the hosted store, a
    lookup followed by a write is not.
    """

    def __init__(self):
        self._tasks: Dict[str, Task] = {}
        self._lock = threading.Lock()

    def insert(self, fields: Dict[str, Any]) -> Task:
        task = Task.from_record({"id": uuid.uuid4().hex, **fields})
        with self._lock:
            self._tasks[task.id] = task
        logger.debug(f"Inserted task {task.id}")
        return task

    def find_one(self, task_id: str) -> Optional[Task]:
        with self._lock:
            return self._tasks.get(task_id)

    def update(self, task_id: str, changes: Dict[str, Any]) -> int:
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return 0
            self._tasks[task_id] = task.model_copy(update=changes)
            return 1

    def remove(self, task_id: str) -> int:
        with self._lock:
            return 1 if self._tasks.pop(task_id, None) is not None else 0

    def find_visible(self, caller_id: Optional[str]) -> Iterator[Task]:
        with self._lock:
            snapshot = list(self._tasks.values())
        for task in snapshot:
            if is_visible_to(task, caller_id):
                yield task

    def __len__(self) -> int:
        return len(self._tasks)


class InMemoryUserDirectory:
    """UserDirectory over a plain {user_id: username} mapping."""

    def __init__(self, usernames: Optional[Dict[str, str]] = None):
        self._usernames = dict(usernames or {})

    def add(self, user_id: str, username: str) -> None:
        self._usernames[user_id] = username

    def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        username = self._usernames.get(user_id)
        if username is None:
            return None
        return {"id": user_id, "username": username}
