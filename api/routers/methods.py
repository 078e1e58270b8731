"""
Methods router - positional method calls (tasks.insert, tasks.remove, ...)
"""
from fastapi import APIRouter, HTTPException, status, Depends
from typing import Any, List, Optional
from pydantic import BaseModel
from api.services.tasks import TaskOperation, dispatch
from api.services.tasks.store import TaskStore, UserDirectory
from api.dependencies import get_optional_user_id, get_task_store, get_user_directory
from api.routers.tasks import raise_for_error
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/methods", tags=["methods"])


class MethodCallRequest(BaseModel):
    params: List[Any] = []


@router.post("/{name}")
async def call_method_endpoint(
    name: str,
    request: MethodCallRequest,
    user_id: Optional[str] = Depends(get_optional_user_id),
    store: TaskStore = Depends(get_task_store),
    users: UserDirectory = Depends(get_user_directory)
):
    """
    Call a task method with positional params, e.g.
    POST /api/methods/tasks.setChecked {"params": ["<task id>", true]}
    """
    try:
        operation = TaskOperation(name)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Method '{name}' not found"
        )

    try:
        logger.info(f"📨 {operation.value} called by {user_id}")
        result = await dispatch(operation, request.params, user_id, store, users)
    except Exception as e:
        error_str = str(e)
        logger.error(f"❌ Error in {operation.value}: {error_str}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to call {operation.value}: {error_str}"
        )

    raise_for_error(result)
    return {"result": result.value}
