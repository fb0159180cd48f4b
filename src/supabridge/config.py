"""
Supabridge - Configuration and settings.

Everything is read once from the environment (and .env) and never mutated.
Supabase credentials are optional here: a missing URL or key surfaces on the
first store call, unless SUPABRIDGE_FAIL_FAST is set.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


def _split_csv(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class BridgeSettings(BaseSettings):
    """Bridge settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Supabase
    supabase_url: str | None = None
    supabase_key: str | None = None

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Query gateway
    supabridge_default_limit: int = 100
    supabridge_db_schema: str = "public"
    supabridge_tables: str = ""  # Comma-separated; empty = discover from pg_tables

    # Web
    supabridge_cors_origins: str = "*"
    supabridge_fail_fast: bool = False

    # Plugin manifest
    supabridge_logo_path: Path = Path("logo.png")
    supabridge_contact_email: str = "support@example.com"
    supabridge_legal_info_url: str = "https://example.com/legal"

    @property
    def known_tables(self) -> list[str]:
        return _split_csv(self.supabridge_tables)

    @property
    def cors_origins(self) -> list[str]:
        return _split_csv(self.supabridge_cors_origins) or ["*"]

    @property
    def has_credentials(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)


@lru_cache
def get_settings() -> BridgeSettings:
    """Get cached settings instance."""
    return BridgeSettings()

