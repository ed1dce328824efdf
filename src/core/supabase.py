"""Supabase client singleton for database operations."""

from functools import lru_cache
from typing import Any

from supabase import Client, create_client

from src.core.config import get_settings


@lru_cache
def get_supabase_client() -> Client:
    """Get cached Supabase client singleton for database operations.

    The client is created once per process and shared by every request.
    It uses the secret key, which bypasses RLS at the PostgREST level, so
    callers must have verified the principal before touching owner data.

    Returns:
        Client: Supabase client instance.
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_secret_key,
    )


async def check_database_connection() -> dict[str, Any]:
    """Check if database connection is healthy.

    Performs a single-row read on the partners table.

    Returns:
        dict: Connection status with 'healthy' boolean and optional 'error' message.
    """
    try:
        client = get_supabase_client()
        client.table(get_settings().partners_table).select("id").limit(1).execute()
        return {"healthy": True}
    except Exception as e:
        return {"healthy": False, "error": str(e)}
