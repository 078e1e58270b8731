"""
Named task operations - the fixed set of method calls clients can make.

Each operation takes positional params in the order the method-call
clients send them, e.g. ``tasks.setChecked(taskId, checked)``.
"""
from enum import Enum
from typing import Any, List, Optional

from api.services.tasks.complete_task import set_task_checked
from api.services.tasks.create_task import create_task
from api.services.tasks.delete_task import delete_task
from api.services.tasks.errors import TaskErrorKind, TaskResult
from api.services.tasks.private_task import set_task_private
from api.services.tasks.store import TaskStore, UserDirectory


class TaskOperation(str, Enum):
    INSERT = "tasks.insert"
    REMOVE = "tasks.remove"
    SET_CHECKED = "tasks.setChecked"
    SET_PRIVATE = "tasks.setPrivate"

    @property
    def arity(self) -> int:
        return _ARITY[self]


_ARITY = {
    TaskOperation.INSERT: 1,
    TaskOperation.REMOVE: 1,
    TaskOperation.SET_CHECKED: 2,
    TaskOperation.SET_PRIVATE: 2,
}


async def dispatch(
    operation: TaskOperation,
    params: List[Any],
    caller_id: Optional[str],
    store: TaskStore,
    users: UserDirectory
) -> TaskResult:
    """
    Run one named operation with positional params.

    Returns:
        The operation's result, or VALIDATION when the number of params
        does not match the operation
    """
    if len(params) != operation.arity:
        return TaskResult.failure(
            TaskErrorKind.VALIDATION,
            f"{operation.value} expects {operation.arity} param(s), got {len(params)}"
        )

    if operation is TaskOperation.INSERT:
        return await create_task(store, users, caller_id, params[0])
    if operation is TaskOperation.REMOVE:
        return await delete_task(store, caller_id, params[0])
    if operation is TaskOperation.SET_CHECKED:
        return await set_task_checked(store, caller_id, params[0], params[1])
    if operation is TaskOperation.SET_PRIVATE:
        return await set_task_private(store, caller_id, params[0], params[1])

    raise ValueError(f"Unhandled task operation: {operation}")
