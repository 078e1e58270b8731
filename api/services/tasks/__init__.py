"""Tasks service modules."""

from .create_task import create_task
from .get_tasks import get_visible_tasks
from .delete_task import delete_task
from .complete_task import set_task_checked
from .private_task import set_task_private
from .errors import TaskError, TaskErrorKind, TaskResult
from .models import Task
from .operations import TaskOperation, dispatch

__all__ = [
    "create_task",
    "get_visible_tasks",
    "delete_task",
    "set_task_checked",
    "set_task_private",
    "dispatch",
    "Task",
    "TaskError",
    "TaskErrorKind",
    "TaskOperation",
    "TaskResult",
]
