"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_anon_key: str
    site_url: str = "http://localhost:8000"
    interest_message: str = "Interested via campus app"
    page_cookie_name: str = "campus_skill_page"
    max_open_pages: int = 500
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def auth_redirect_url(self) -> str:
        """Return the URL magic links should land on."""
        return f"{self.site_url.rstrip('/')}/auth/callback"
