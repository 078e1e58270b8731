"""Create task service."""

from datetime import datetime, timezone
from typing import Any, Optional
import logging

from pydantic import ValidationError

from api.services.tasks.errors import TaskResult, invalid, unauthorized
from api.services.tasks.models import InsertTaskParams, Task
from api.services.tasks.store import TaskStore, UserDirectory

logger = logging.getLogger(__name__)


async def create_task(
    store: TaskStore,
    users: UserDirectory,
    caller_id: Optional[str],
    text: Any
) -> TaskResult[Task]:
    """
    Insert a task owned by the calling user.

    Args:
        store: The task collection
        users: Lookup for the caller's display name
        caller_id: The authenticated user, or None for anonymous callers
        text: The task text; must be a string

    Returns:
        The created task, VALIDATION if text is not a string,
        or UNAUTHORIZED if the caller is anonymous
    """
    try:
        params = InsertTaskParams(text=text)
    except ValidationError as e:
        return invalid(e)

    if not caller_id:
        return unauthorized("You must be logged in to create a task")

    user = users.find_by_id(caller_id)
    username = user.get("username") if user else None
    if username is None:
        logger.warning(f"No username for user {caller_id}, storing task without one")

    task = store.insert({
        "text": params.text,
        "created_at": datetime.now(timezone.utc),
        "owner": caller_id,
        "username": username,
    })

    logger.info(f"Created task {task.id} for user {caller_id}")
    return TaskResult.success(task)
