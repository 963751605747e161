"""
Centralized configuration for the Folio backend.

All settings are loaded from environment variables with sensible defaults.
Module-specific settings should be namespaced (e.g., CHAT_*, AUTH_LOG_*).
"""

from functools import lru_cache
from typing import Literal
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
    app_name: str = "Folio API"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    reload: bool = False

    # CORS settings (also the allow-list for Origin checks on guarded routes)
    cors_origins: list[str] = ["http://localhost:3000"]
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = ["*"]
    cors_allow_headers: list[str] = ["*"]

    # Rate limiting (fixed windows, per client IP and bucket)
    rate_limit_fail_open: bool = True
    rate_limit_chat_requests: int = 10
    rate_limit_chat_window: int = 60  # seconds
    rate_limit_auth_track_requests: int = 30
    rate_limit_auth_track_window: int = 60
    rate_limit_contact_requests: int = 3
    rate_limit_contact_window: int = 3600

    # Supabase (identity provider + durable storage)
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    supabase_jwt_secret: str = ""
    supabase_db_url: str = ""  # Direct Postgres URL, migrations only

    # Identity provider lifecycle webhooks (Svix-signed)
    identity_webhook_secret: str = ""

    # Auth event log
    auth_log_backend: Literal["memory", "database"] = "memory"
    auth_log_max_entries: int = 500
    auth_log_retention_days: int = 30
    auth_log_timeout: float = 3.0  # seconds, database backend only

    # Security event log
    security_log_max_entries: int = 1000

    # Chat relay
    chat_provider: str = ""  # Empty picks groq when GROQ_API_KEY is set, else ollama
    chat_model: str = ""
    chat_api_base: str = ""
    chat_temperature: float = 0.7
    chat_max_tokens: int = 0  # 0 uses the provider default
    chat_timeout: float = 30.0
    chat_prompt_file: str = ""  # Empty uses the bundled portfolio prompt
    groq_api_key: str = ""
    openai_api_key: str = ""


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
