"""
Supabase client integration.
Provides the read-only connection to the configuration store.
"""

from functools import lru_cache
from typing import Optional

from supabase import Client, create_client
from supabase.lib.client_options import ClientOptions

from readiness_gate.core.config import settings


class SupabaseNotConfiguredError(RuntimeError):
    """Raised when the Supabase client is requested without credentials."""


class SupabaseClient:
    """Lazy wrapper around the Supabase client."""

    def __init__(self, url: str | None = None, key: str | None = None):
        self._url = url or settings.SUPABASE_URL
        self._key = key or settings.SUPABASE_KEY
        self._client: Optional[Client] = None

    @property
    def client(self) -> Client:
        """Get the Supabase client (created on first access)."""
        if not self._client:
            if not (self._url and self._key):
                raise SupabaseNotConfiguredError(
                    "READINESS_SUPABASE_URL and READINESS_SUPABASE_KEY must be set"
                )
            self._client = create_client(
                supabase_url=self._url,
                supabase_key=self._key,
                options=ClientOptions(
                    auto_refresh_token=False,
                    persist_session=False,
                ),
            )
        return self._client


@lru_cache()
def get_supabase_client() -> SupabaseClient:
    """Get the singleton Supabase client instance."""
    return SupabaseClient()
