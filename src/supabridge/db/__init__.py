"""
Supabridge - Database Client.

Provides the shared async Supabase client.
"""

from supabridge.db.client import StoreConfigError, get_client, reset_client

__all__ = [
    "StoreConfigError",
    "get_client",
    "reset_client",
]
