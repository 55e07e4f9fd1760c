"""
Application configuration using Pydantic Settings.
Loads environment variables and provides type-safe configuration.
"""

from typing import List, Optional
from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, validator

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://localhost:5173"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    environment: str = Field(default="development", description="Current environment")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # API Configuration
    api_title: str = Field(default="Time Manager API")
    api_version: str = Field(default="1.0.0")
    api_prefix: str = Field(default="/api/v1")
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000)

    # Supabase Configuration
    supabase_url: str = Field(default="https://example.supabase.co", description="Supabase project URL")
    supabase_anon_key: str = Field(default="temp-key", description="Supabase anonymous key")
    supabase_service_key: str = Field(default="temp-key", description="Supabase service role key")
    supabase_jwt_secret: str = Field(
        default="development-secret-key-change-in-production",
        description="Secret used by Supabase Auth to sign access tokens"
    )
    jwt_algorithm: str = Field(default="HS256")

    # CORS
    cors_origins: str | List[str] = Field(
        default="http://localhost:3000,http://localhost:5173"
    )
    cors_allow_credentials: bool = Field(default=True)
    cors_allow_methods: List[str] = Field(default=["*"])
    cors_allow_headers: List[str] = Field(default=["*"])

    # Time tracking
    timezone: str = Field(default="Europe/Paris", description="Calendar used for dashboard windows")
    default_weekly_hours_target: int = Field(default=35)

    # Authentication
    role_cache_ttl_seconds: float = Field(default=300.0, description="Role cache entry lifetime")
    role_cache_max_size: int = Field(default=10000, ge=1, description="Roles kept before the least recently used is evicted")
    password_reset_redirect_url: Optional[str] = Field(default=None)

    # Project codes
    project_code_max_retries: int = Field(default=3)
    project_code_retry_max_delay: float = Field(default=0.1, description="Upper bound of the retry jitter (seconds)")

    # Sentry (Optional)
    sentry_dsn: Optional[str] = Field(default=None)
    sentry_traces_sample_rate: float = Field(default=0.1)

    @validator("cors_origins", pre=True)
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            if not v or v.strip() == "":
                return list(DEFAULT_CORS_ORIGINS)
            return [origin.strip() for origin in v.split(",")]
        elif v is None:
            return list(DEFAULT_CORS_ORIGINS)
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def missing_supabase_settings(self) -> List[str]:
        """
        Names of Supabase settings still unset or left at their placeholder.
        """
        placeholders = {
            "supabase_url": "https://example.supabase.co",
            "supabase_anon_key": "temp-key",
            "supabase_service_key": "temp-key",
            "supabase_jwt_secret": "development-secret-key-change-in-production",
        }
        return [
            name.upper()
            for name, placeholder in placeholders.items()
            if getattr(self, name, None) in (None, "", placeholder)
        ]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Production refuses to start with placeholder Supabase credentials.
    """
    settings = Settings()

    if settings.is_production:
        missing = settings.missing_supabase_settings()
        if missing:
            raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    return settings

