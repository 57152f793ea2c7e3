"""Storefront Configuration"""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Storefront"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # Supabase / PostgREST
    supabase_url: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    products_table: str = "products"
    request_timeout: float = 30.0

    # Fall back to the seeded in-memory catalog when Supabase is not configured
    seed_catalog: bool = True

    # Cart sessions with no cart change for this long are expired
    cart_session_max_age_hours: float = 24

    @property
    def supabase_configured(self) -> bool:
        """Check if the remote store is configured"""
        return bool(self.supabase_url and self.supabase_anon_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


settings = get_settings()
