"""
Base class for Supabase-backed repositories
"""
from typing import Optional

from supabase import Client

from app.core.database import get_supabase


class SupabaseRepository:
    """Holds an injected client, or takes the shared one on first use"""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client
