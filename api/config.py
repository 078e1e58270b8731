"""
Application configuration settings
"""
from pydantic_settings import BaseSettings
from typing import Dict, List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # App metadata
    app_name: str = "Task List API"
    app_version: str = "1.0.0"
    debug: bool = False

    # CORS settings
    allowed_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",  # Vite dev server
    ]

    # Extra deployments, e.g. ALLOWED_ORIGINS_ENV=https://tasks.example.com,https://app.example.com
    allowed_origins_env: str = ""

    @property
    def get_allowed_origins(self) -> List[str]:
        """Get combined allowed origins from defaults and environment"""
        origins = self.allowed_origins.copy()
        if self.allowed_origins_env:
            origins.extend([o.strip() for o in self.allowed_origins_env.split(",")])
        return origins

    # Task storage: "supabase" for the hosted table, "memory" for local development
    task_store_backend: str = "supabase"
    tasks_table: str = "tasks"
    users_table: str = "users"

    # Usernames for the memory backend, e.g. MEMORY_USERNAMES={"<user id>": "alice"}
    memory_usernames: Dict[str, str] = {}

    # Supabase settings
    supabase_url: str = ""
    supabase_service_role_key: str = ""  # Authorization is enforced by this API, not RLS

    # JWT settings (Supabase project JWT secret)
    # Leave empty in local development to accept unsigned tokens
    jwt_secret: Optional[str] = None
    jwt_audience: str = "authenticated"
    jwt_algorithm: str = "HS256"

    # Live task feed
    stream_keepalive_seconds: float = 15.0

    # Environment
    api_env: str = "development"
    log_level: str = "info"

    class Config:
        # Load from .env file for local development
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields in .env


# Initialize settings - will load from environment variables
try:
    settings = Settings()
except Exception as e:
    import sys
    print(f"❌ ERROR loading settings: {e}", file=sys.stderr, flush=True)
    import traceback
    traceback.print_exc(file=sys.stderr)
    # Re-raise to fail fast
    raise
