"""Ownership and visibility rules for tasks."""

from typing import Optional

from api.services.tasks.models import Task


def is_visible_to(task: Task, caller_id: Optional[str]) -> bool:
    """Public tasks are visible to everyone, private ones only to their owner."""
    return not task.private or (caller_id is not None and task.owner == caller_id)


def can_modify(task: Task, caller_id: Optional[str]) -> bool:
    """
    Whether the caller may check off or remove the task.

    Only private tasks are restricted; a public task can be modified by
    any caller, anonymous ones included.
    """
    return is_visible_to(task, caller_id)


def can_change_privacy(task: Task, caller_id: Optional[str]) -> bool:
    """Only the owner may toggle visibility, whatever the current state."""
    return caller_id is not None and task.owner == caller_id
