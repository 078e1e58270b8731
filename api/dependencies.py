"""
FastAPI dependencies for caller identity and task storage
"""
from fastapi import Header, HTTPException, status
from functools import lru_cache
from typing import Optional
import jwt
import logging

from api.config import settings
from api.services.tasks.memory_store import InMemoryTaskStore, InMemoryUserDirectory
from api.services.tasks.publication import ObservedTaskStore, TaskFeed
from api.services.tasks.store import SupabaseTaskStore, SupabaseUserDirectory, TaskStore, UserDirectory

logger = logging.getLogger(__name__)


def _extract_bearer_token(authorization: str) -> str:
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authorization header format. Expected: Bearer <token>"
        )
    return parts[1]


def decode_user_id(token: str) -> str:
    """
    Return the user ID (the "sub" claim) of a Supabase JWT.

    With JWT_SECRET configured the signature, expiry and audience are
    verified. Without it the token is only decoded, which is meant for
    local development.

    Raises:
        HTTPException: If the token is invalid or has no subject
    """
    try:
        if settings.jwt_secret:
            claims = jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
                audience=settings.jwt_audience,
            )
        else:
            claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.PyJWTError as e:
        logger.warning(f"Rejected JWT: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid JWT token"
        )

    user_id = claims.get("sub")
    if not user_id or not isinstance(user_id, str):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="JWT token has no subject"
        )

    return user_id


async def get_optional_user_id(
    authorization: Optional[str] = Header(None)
) -> Optional[str]:
    """
    Identify the caller from the Authorization header.

    Returns None for anonymous requests (no header). A header that is
    present but malformed or invalid is rejected with 401 rather than
    treated as anonymous.
    """
    if not authorization:
        return None

    return decode_user_id(_extract_bearer_token(authorization))


@lru_cache()
def get_task_feed() -> TaskFeed:
    return TaskFeed()


@lru_cache()
def _get_backing_stores():
    backend = settings.task_store_backend.lower()

    if backend == "memory":
        logger.info("Using in-memory task store")
        return InMemoryTaskStore(), InMemoryUserDirectory(settings.memory_usernames)

    if backend == "supabase":
        # Import here so the memory backend runs without Supabase credentials
        from lib.supabase_client import get_service_role_client

        client = get_service_role_client()
        logger.info(f"Using Supabase task store (table={settings.tasks_table})")
        return (
            SupabaseTaskStore(client, settings.tasks_table),
            SupabaseUserDirectory(client, settings.users_table),
        )

    raise ValueError(f"Unknown TASK_STORE_BACKEND: {settings.task_store_backend}")


def get_task_store() -> TaskStore:
    store, _ = _get_backing_stores()
    return ObservedTaskStore(store, get_task_feed())


def get_user_directory() -> UserDirectory:
    _, users = _get_backing_stores()
    return users
