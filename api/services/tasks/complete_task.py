"""Complete task service."""

from typing import Any, Optional
import logging

from pydantic import ValidationError

from api.services.tasks.errors import TaskResult, invalid, not_found, unauthorized
from api.services.tasks.models import SetCheckedParams
from api.services.tasks.permissions import can_modify
from api.services.tasks.store import TaskStore

logger = logging.getLogger(__name__)


async def set_task_checked(
    store: TaskStore,
    caller_id: Optional[str],
    task_id: Any,
    checked: Any
) -> TaskResult[None]:
    """
    Mark a task as done or not done.

    Same rule as deletion: only private tasks are restricted to their owner.

    Args:
        store: The task collection
        caller_id: The authenticated user, or None for anonymous callers
        task_id: The ID of the task
        checked: New completion state; must be a bool

    Returns:
        An empty success, or VALIDATION / NOT_FOUND / UNAUTHORIZED
    """
    try:
        params = SetCheckedParams(task_id=task_id, checked=checked)
    except ValidationError as e:
        return invalid(e)

    task = store.find_one(params.task_id)
    if task is None:
        return not_found(params.task_id)

    if not can_modify(task, caller_id):
        logger.info(f"User {caller_id} may not check off private task {task.id}")
        return unauthorized("Only the owner can check off a private task")

    store.update(task.id, {"checked": params.checked})

    logger.info(f"Set checked={params.checked} on task {task.id}")
    return TaskResult.success()
