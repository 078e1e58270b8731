"""
Tasks router - HTTP endpoints for task management
"""
from fastapi import APIRouter, HTTPException, Request, status, Depends
from fastapi.responses import StreamingResponse
from typing import Any, Dict, Optional
from pydantic import BaseModel
import json
from api.config import settings
from api.services.tasks import (
    create_task,
    get_visible_tasks,
    delete_task,
    set_task_checked,
    set_task_private,
    TaskErrorKind,
    TaskResult,
)
from api.services.tasks.publication import ADDED, TaskEvent, TaskFeed
from api.services.tasks.store import TaskStore, UserDirectory
from api.dependencies import get_optional_user_id, get_task_feed, get_task_store, get_user_directory
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/tasks", tags=["tasks"])

ERROR_STATUS = {
    TaskErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    TaskErrorKind.UNAUTHORIZED: status.HTTP_403_FORBIDDEN,
    TaskErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def raise_for_error(result: TaskResult) -> None:
    """Turn a failed task result into the matching HTTP error."""
    if result.ok:
        return
    raise HTTPException(
        status_code=ERROR_STATUS[result.error.kind],
        detail={"error": result.error.kind.value, "message": result.error.message}
    )


# Pydantic models for request validation
class CreateTaskRequest(BaseModel):
    text: Any = None


class SetCheckedRequest(BaseModel):
    checked: Any = None


class SetPrivateRequest(BaseModel):
    private: Any = None


# Get tasks endpoint
@router.get("/")
async def get_tasks_endpoint(
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: TaskStore = Depends(get_task_store)
):
    """
    Get every public task plus the caller's private ones.
    Optional: Authorization header with user's Supabase JWT
    """
    try:
        logger.info(f"📋 Fetching tasks for user {user_id}")
        tasks = list(get_visible_tasks(store, user_id))
        logger.info(f"✅ Fetched {len(tasks)} tasks")
        return {"tasks": tasks}
    except Exception as e:
        error_str = str(e)
        logger.error(f"❌ Error fetching tasks: {error_str}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to fetch tasks: {error_str}"
        )


def _sse(event: str, data: Dict[str, Any]) -> str:
    return f"event: {event}\ndata: {json.dumps(data)}\n\n"


@router.get("/stream")
async def stream_tasks_endpoint(
    request: Request,
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: TaskStore = Depends(get_task_store),
    feed: TaskFeed = Depends(get_task_feed)
):
    """
    Live task list as server-sent events.

    Sends an "added" event per visible task, then "ready", then
    "added" / "changed" / "removed" events as tasks change.
    """
    try:
        subscription = feed.subscribe(store, user_id)
    except Exception as e:
        error_str = str(e)
        logger.error(f"❌ Error subscribing to tasks: {error_str}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to subscribe to tasks: {error_str}"
        )

    async def event_stream():
        try:
            for task in subscription.initial:
                yield _sse(ADDED, TaskEvent(ADDED, task.id, task).payload())
            yield _sse("ready", {"count": len(subscription.initial)})

            while not await request.is_disconnected():
                event = await subscription.next_event(timeout=settings.stream_keepalive_seconds)
                if event is None:
                    yield ": keepalive\n\n"
                    continue
                yield _sse(event.type, event.payload())
        finally:
            feed.unsubscribe(subscription)

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"}
    )


# Create task endpoint
@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_task_endpoint(
    request: CreateTaskRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: TaskStore = Depends(get_task_store),
    users: UserDirectory = Depends(get_user_directory)
):
    """
    Create a new task owned by the caller.
    Requires: Authorization header with user's Supabase JWT
    """
    try:
        logger.info(f"➕ Creating task for user {user_id}")
        result = await create_task(store, users, user_id, request.text)
    except Exception as e:
        error_str = str(e)
        logger.error(f"❌ Error creating task: {error_str}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to create task: {error_str}"
        )

    raise_for_error(result)
    logger.info(f"✅ Created task {result.value.id}")
    return {"task": result.value}


# Toggle completion endpoint
@router.patch("/{task_id}/checked")
async def set_checked_endpoint(
    task_id: str,
    request: SetCheckedRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: TaskStore = Depends(get_task_store)
):
    """
    Mark a task as done or not done.
    Private tasks can only be checked off by their owner.
    """
    try:
        logger.info(f"✅ Setting checked={request.checked} on task {task_id}")
        result = await set_task_checked(store, user_id, task_id, request.checked)
    except Exception as e:
        error_str = str(e)
        logger.error(f"❌ Error updating task completion: {error_str}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update task completion: {error_str}"
        )

    raise_for_error(result)
    return {"task_id": task_id, "checked": request.checked}


# Toggle visibility endpoint
@router.patch("/{task_id}/private")
async def set_private_endpoint(
    task_id: str,
    request: SetPrivateRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: TaskStore = Depends(get_task_store)
):
    """
    Make a task private or public.
    Requires: Authorization header of the task owner
    """
    try:
        logger.info(f"🔒 Setting private={request.private} on task {task_id}")
        result = await set_task_private(store, user_id, task_id, request.private)
    except Exception as e:
        error_str = str(e)
        logger.error(f"❌ Error updating task visibility: {error_str}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to update task visibility: {error_str}"
        )

    raise_for_error(result)
    return {"task_id": task_id, "private": request.private}


# Delete task endpoint
@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task_endpoint(
    task_id: str,
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: TaskStore = Depends(get_task_store)
):
    """
    Delete a task.
    Private tasks can only be deleted by their owner.
    """
    try:
        logger.info(f"🗑️ Deleting task {task_id} for user {user_id}")
        result = await delete_task(store, user_id, task_id)
    except Exception as e:
        error_str = str(e)
        logger.error(f"❌ Error deleting task: {error_str}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to delete task: {error_str}"
        )

    raise_for_error(result)
    logger.info(f"✅ Deleted task {task_id}")
    return None
