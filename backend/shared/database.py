"""
Database client factory for Supabase.

Provides the service-role client used by backend repositories. Requests made
through it are bounded by a short PostgREST timeout so that best-effort
writes (auth event logging) never stall a request handler.
"""

from typing import Optional
from supabase import create_client, Client, ClientOptions

from .config import get_settings

# Module-level client cache
_service_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations that need full database access,
    such as writing authentication events on behalf of users.

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If the Supabase URL or service role key is missing
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = create_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
            options=ClientOptions(postgrest_client_timeout=settings.auth_log_timeout),
        )

    return _service_client


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _service_client
    _service_client = None
