"""
Supabase client for the task API
Provides the service-role Supabase client used by the task store.
"""
import os
from typing import Optional
from supabase import create_client, Client

_service_client: Optional[Client] = None


def get_service_role_client() -> Client:
    """
    Get or create the Supabase client singleton with the service role key.

    The task store enforces ownership rules itself, so it talks to the
    table with a client that bypasses RLS policies.

    Returns:
        Client: Supabase client with service role privileges

    Raises:
        ValueError: If the URL or service role key is not configured
    """
    global _service_client

    if _service_client is None:
        # Import here to avoid circular dependency
        from api.config import settings

        supabase_url = settings.supabase_url or os.getenv('SUPABASE_URL')
        supabase_service_key = settings.supabase_service_role_key or os.getenv('SUPABASE_SERVICE_ROLE_KEY')

        if not supabase_url:
            raise ValueError(
                "SUPABASE_URL must be set in environment variables or .env file"
            )

        if not supabase_service_key:
            raise ValueError(
                "SUPABASE_SERVICE_ROLE_KEY must be set in environment variables or .env file. "
                "Find your service role key in Supabase Dashboard → Settings → API, "
                "or set TASK_STORE_BACKEND=memory for local development"
            )

        _service_client = create_client(supabase_url, supabase_service_key)

    return _service_client
