"""
Database client factory for Supabase.

The service-role client is the one shared resource of the process. It is
created by the service container at start-up and dropped at shutdown;
everything else receives it by injection.
"""

import logging
from typing import Optional
from supabase import Client, ClientOptions, create_client

from .config import Settings, get_settings

logger = logging.getLogger(__name__)

# Module-level client cache
_service_client: Optional[Client] = None


def create_supabase_client(settings: Settings) -> Client:
    """
    Build a Supabase client with the service role key.

    Every PostgREST call made through the client is bounded by
    settings.db_timeout_seconds.

    Raises:
        RuntimeError: If the Supabase URL or key is not configured
    """
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
        )
    options = ClientOptions(
        postgrest_client_timeout=settings.db_timeout_seconds,
        auto_refresh_token=False,
        persist_session=False,
    )
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
        options=options,
    )


def get_supabase_client() -> Client:
    """
    Get the cached service-role Supabase client, creating it on first use.

    Returns:
        Supabase client configured with service role key
    """
    global _service_client

    if _service_client is None:
        _service_client = create_supabase_client(get_settings())
        logger.info("Supabase client created")

    return _service_client


def reset_client_cache() -> None:
    """
    Drop the cached database client.

    Called at shutdown and from tests.
    """
    global _service_client
    if _service_client is not None:
        logger.info("Supabase client released")
    _service_client = None
