"""Delete task service."""

from typing import Any, Optional
import logging

from pydantic import ValidationError

from api.services.tasks.errors import TaskResult, invalid, not_found, unauthorized
from api.services.tasks.models import RemoveTaskParams
from api.services.tasks.permissions import can_modify
from api.services.tasks.store import TaskStore

logger = logging.getLogger(__name__)


async def delete_task(store: TaskStore, caller_id: Optional[str], task_id: Any) -> TaskResult[None]:
    """
    Delete a task.

    Public tasks can be deleted by anyone; private tasks only by their owner.

    Args:
        store: The task collection
        caller_id: The authenticated user, or None for anonymous callers
        task_id: The ID of the task to delete

    Returns:
        An empty success, or VALIDATION / NOT_FOUND / UNAUTHORIZED
    """
    try:
        params = RemoveTaskParams(task_id=task_id)
    except ValidationError as e:
        return invalid(e)

    task = store.find_one(params.task_id)
    if task is None:
        return not_found(params.task_id)

    if not can_modify(task, caller_id):
        logger.info(f"User {caller_id} may not delete private task {task.id}")
        return unauthorized("Only the owner can delete a private task")

    store.remove(task.id)

    logger.info(f"Deleted task {task.id}")
    return TaskResult.success()
