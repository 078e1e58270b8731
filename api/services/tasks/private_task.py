"""Task visibility service."""

from typing import Any, Optional
import logging

from pydantic import ValidationError

from api.services.tasks.errors import TaskResult, invalid, not_found, unauthorized
from api.services.tasks.models import SetPrivateParams
from api.services.tasks.permissions import can_change_privacy
from api.services.tasks.store import TaskStore

logger = logging.getLogger(__name__)


async def set_task_private(
    store: TaskStore,
    caller_id: Optional[str],
    task_id: Any,
    private: Any
) -> TaskResult[None]:
    """
    Make a task private or public.

    Stricter than checking off or deleting: non-owners are rejected even
    when the task is currently public.

    Args:
        store: The task collection
        caller_id: The authenticated user, or None for anonymous callers
        task_id: The ID of the task
        private: New visibility; must be a bool

    Returns:
        An empty success, or VALIDATION / NOT_FOUND / UNAUTHORIZED
    """
    try:
        params = SetPrivateParams(task_id=task_id, private=private)
    except ValidationError as e:
        return invalid(e)

    task = store.find_one(params.task_id)
    if task is None:
        return not_found(params.task_id)

    if not can_change_privacy(task, caller_id):
        logger.info(f"User {caller_id} may not change visibility of task {task.id}")
        return unauthorized("Only the owner can change a task's visibility")

    store.update(task.id, {"private": params.private})

    logger.info(f"Set private={params.private} on task {task.id}")
    return TaskResult.success()
