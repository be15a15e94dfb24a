"""Supabase client construction."""

from supabase import Client, create_client

from content_engine.core.config import Settings, get_settings


def create_supabase(settings: Settings | None = None) -> Client:
    """
    Create a Supabase client configured with the service role key.

    Called once by the process entry point; the client is passed to the
    stores that need it.

    Args:
        settings: Settings to read credentials from (defaults to get_settings())

    Returns:
        Supabase client

    Raises:
        RuntimeError: If client initialization fails
    """
    settings = settings or get_settings()
    try:
        return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    except Exception as e:
        raise RuntimeError(f"Failed to initialize Supabase client: {e}") from e
