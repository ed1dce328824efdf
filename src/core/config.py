"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Required settings will raise validation errors if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="studymate-partner-api", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root logging level")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=3000, description="Server port")

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins",
    )

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")

    # Identity tokens
    jwt_signing_key: str = Field(
        ...,
        description="JWK (JSON string) for asymmetric algorithms, or the shared secret for HS* algorithms",
    )
    jwt_algorithm: str = Field(default="ES256", description="Algorithm identity tokens are signed with")
    jwt_audience: str | None = Field(default=None, description="Expected aud claim, unchecked when unset")

    # Collections
    partners_table: str = Field(default="partners", description="Partner profiles table")
    partner_requests_table: str = Field(default="partner_requests", description="Partner requests table")

    # Policy
    enforce_request_ownership: bool = Field(
        default=False,
        description="Restrict request updates/deletes to the principal that made the request",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard Python logging levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def uses_shared_secret(self) -> bool:
        """Check if tokens are verified with a symmetric (HS*) secret."""
        return self.jwt_algorithm.upper().startswith("HS")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
