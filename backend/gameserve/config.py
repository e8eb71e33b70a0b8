"""Application configuration using Pydantic settings."""
from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: Optional[str] = None

    environment: str = "development"

    # Supabase Storage
    supabase_url: Optional[str] = None
    supabase_secret_key: Optional[str] = None  # Service role key for server-side reads
    storage_bucket: str = "published-games"
    storage_timeout_seconds: float = 10.0

    # Delivery
    mount_path: str = "/api/game"
    play_base_domain: str = "play.playcraft.games"
    reserved_subdomains: str = "www,app,api,admin,dashboard,mail,play"
    site_url: str = "https://playcraft.dev"
    inject_route_reset: bool = True

    # Sitemap
    sitemap_limit: int = 1000

    @property
    def reserved_subdomain_set(self) -> frozenset:
        """Parse reserved subdomains from comma-separated string."""
        return frozenset(
            name.strip().lower() for name in self.reserved_subdomains.split(",") if name.strip()
        )

    @property
    def storage_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_secret_key)

    @property
    def normalized_mount_path(self) -> str:
        return "/" + self.mount_path.strip("/")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Dependency returning the process-wide settings instance."""
    return Settings()


