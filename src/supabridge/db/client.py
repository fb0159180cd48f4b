"""
Supabridge - Supabase Client.

Low-level database access. All store calls go through the client returned here.
"""

import logging

from supabase import AsyncClient, acreate_client

from supabridge.config import get_settings

logger = logging.getLogger(__name__)

# Singleton client instance
_client: AsyncClient | None = None


class StoreConfigError(RuntimeError):
    """Raised when the Supabase URL or key is not configured."""


async def get_client() -> AsyncClient:
    """
    Get the async Supabase client.

    Created on first use and reused afterwards. Raises StoreConfigError
    at call time (not import time) if credentials are missing.
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not settings.has_credentials:
            raise StoreConfigError(
                "Supabase credentials missing. Set SUPABASE_URL and SUPABASE_KEY "
                "in the environment or .env."
            )
        _client = await acreate_client(settings.supabase_url, settings.supabase_key)
        logger.info("Supabase client created for %s", settings.supabase_url)

    return _client


def reset_client() -> None:
    """Drop the cached client (used when settings change, e.g. in tests)."""
    global _client
    _client = None
