"""
Supabase client access

All table reads and writes go through the Supabase client with the
service role key, so row level security does not apply here. The client
is created on first use so the app can start without credentials.
"""
import logging
from typing import Optional

from supabase import create_client, Client

from .config import settings
from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def get_supabase() -> Client:
    """
    FastAPI dependency that returns the shared Supabase client

    Usage:
        @app.get("/data")
        def get_data(sb: Client = Depends(get_supabase)):
            ...
    """
    global _client

    if _client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_SERVICE_ROLE_KEY:
            raise ConfigurationError("Supabase is not configured")

        logger.info("Creating Supabase client")
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)

    return _client
