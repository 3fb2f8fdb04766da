"""Centralized configuration management using Pydantic Settings.

This module provides typed configuration for all application settings,
loaded from environment variables with sensible defaults.

Usage:
    from events_api.config import get_settings
    settings = get_settings()
    base_id = settings.airtable.base_id
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AirtableSettings(BaseSettings):
    """Record store (Airtable) configuration.

    "Base" is Airtable lingo for database. The production and development
    bases hold the same tables; ``environment`` picks which one is used.
    """

    model_config = SettingsConfigDict(env_prefix="AIRTABLE_", extra="ignore")

    api_key: str = Field(default="", description="Personal access token")
    base_id_prod: str = Field(default="app7zige4DRGqIaL2", description="Production base id")
    base_id_dev: str = Field(default="app18BBTcWqsoNjb2", description="Development base id")
    environment: Literal["development", "production"] = Field(
        default="development", description="Which base to talk to"
    )
    api_url: str = Field(default="https://api.airtable.com/v0", description="REST API root")
    timeout_sec: float = Field(default=10.0, description="Per-request timeout in seconds")
    page_size: int = Field(default=100, ge=1, le=100, description="Records per page")

    @field_validator("environment", mode="before")
    @classmethod
    def parse_environment(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
            if v in ("prod", "production"):
                return "production"
            if v in ("dev", "development"):
                return "development"
        return v

    @property
    def base_id(self) -> str:
        """Base id for the selected environment."""
        if self.environment == "production":
            return self.base_id_prod
        return self.base_id_dev


class RedisSettings(BaseSettings):
    """Redis connection configuration."""

    model_config = SettingsConfigDict(env_prefix="REDIS_", extra="ignore")

    host: str = Field(default="redis", description="Redis host")
    port: int = Field(default=6379, description="Redis port")
    password: str = Field(default="", description="Redis password")
    max_connections: int = Field(default=50, description="Maximum pool connections")
    pool_timeout_sec: float = Field(default=5.0, description="Pool timeout in seconds")
    socket_timeout: float = Field(default=5.0, description="Socket timeout in seconds")
    socket_connect_timeout: float = Field(default=5.0, description="Socket connect timeout in seconds")


class CorsSettings(BaseSettings):
    """CORS configuration."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    origins_raw: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )
    origins_regex: str = Field(
        default="",
        validation_alias="CORS_ORIGINS_REGEX",
        description="Regex pattern for origins",
    )

    @property
    def origins(self) -> list[str]:
        """Parse comma-separated origins into list."""
        return [o.strip() for o in self.origins_raw.split(",") if o.strip()]

    @property
    def allow_credentials(self) -> bool:
        """Credentials not allowed with wildcard origins."""
        return self.origins != ["*"] and not self.origins_regex


class DebugSettings(BaseSettings):
    """Debug flags configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    request: bool = Field(default=False, alias="request_debug")
    store: bool = Field(default=False, alias="store_debug")

    @field_validator("*", mode="before")
    @classmethod
    def parse_bool(cls, v):
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes")
        return bool(v)


class FeatureSettings(BaseSettings):
    """Feature flags configuration."""

    model_config = SettingsConfigDict(extra="ignore")

    events_cache: bool = Field(default=False, alias="enable_events_cache")

    @field_validator("*", mode="before")
    @classmethod
    def parse_bool(cls, v):
        if isinstance(v, str):
            return v.lower() in ("1", "true", "yes")
        return bool(v)


class CacheSettings(BaseSettings):
    """Events cache configuration."""

    model_config = SettingsConfigDict(env_prefix="EVENTS_CACHE_", extra="ignore")

    ttl_sec: int = Field(default=60, ge=1, description="Lifetime of cached event records")
    key: str = Field(default="events:records", description="Redis key for cached event records")


class RosterSettings(BaseSettings):
    """Display settings for events and rosters."""

    model_config = SettingsConfigDict(extra="ignore")

    timezone: str = Field(default="America/New_York", alias="events_timezone")
    drivers_goal: int = Field(default=30, ge=0, alias="drivers_goal")


class Settings:
    """Main application settings combining all configuration sections.

    This is not a BaseSettings subclass to avoid env var conflicts.
    Each subsetting is loaded independently with its own prefix.
    """

    def __init__(self) -> None:
        self.airtable = AirtableSettings()
        self.redis = RedisSettings()
        self.cors = CorsSettings()
        self.debug = DebugSettings()
        self.features = FeatureSettings()
        self.cache = CacheSettings()
        self.roster = RosterSettings()


@lru_cache
def get_settings() -> Settings:
    """Get cached Settings instance (singleton pattern)."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear cached settings (useful for testing)."""
    get_settings.cache_clear()
