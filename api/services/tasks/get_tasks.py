"""Get tasks service."""

from typing import Iterator, Optional

from api.services.tasks.models import Task
from api.services.tasks.store import TaskStore


def get_visible_tasks(store: TaskStore, caller_id: Optional[str]) -> Iterator[Task]:
    """
    Tasks the caller is allowed to see: every public task plus the caller's
    own private ones.

    The result is lazy; each call queries the store again.
    """
    return store.find_visible(caller_id)
