"""
Centralized configuration for the Solicitudes backend.

All settings are loaded from environment variables with sensible defaults.
Names match the variables the service has always been deployed with
(JWT_SECRET, PORT, SUPABASE_*, DATABASE_URL).
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Solicitudes API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 4000
    reload: bool = False

    # CORS settings
    cors_origins: list[str] = ["*"]
    cors_allow_credentials: bool = False
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Tokens
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    token_ttl_hours: int = 24

    # Password hashing
    bcrypt_rounds: int = 10

    # Supabase (durable store)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    db_timeout_seconds: int = 10

    # Direct Postgres URI, only used by run_migrations.py
    database_url: str = ""


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
