"""Application configuration."""

import os
from pathlib import Path
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


def default_data_path() -> Path:
    """Return the default location of the drink list."""
    return Path.home() / ".config" / "caffeine_tracker" / "drinks.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_path: Path = default_data_path()
    timezone: str | None = None
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    health_table: str = "health_samples"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_prefix="CAFFEINE_TRACKER_",
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def health_sync_enabled(self) -> bool:
        """Whether both Supabase credentials are configured."""
        return bool(self.supabase_url and self.supabase_service_key)


def resolve_timezone(name: str | None) -> ZoneInfo | None:
    """Return the configured timezone, or None for the system's local one."""
    if name is None:
        return None
    cleaned = name.strip()
    if cleaned in {"", "local"}:
        return None
    return ZoneInfo(cleaned)
