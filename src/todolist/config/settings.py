"""
Strongly typed configuration using pydantic-settings.

All settings are validated at startup and loaded from:
1. Default values defined here
2. .env file (if present)
3. Environment variables (highest priority)

Environment variable naming:
- ServerSettings: TODOLIST_HOST, TODOLIST_PORT, TODOLIST_URL, etc.
- CorsSettings: CORS_ALLOW_ORIGINS, CORS_ALLOW_HEADERS, etc. (JSON lists)
- ObservabilitySettings: ENVIRONMENT, LOG_LEVEL (no prefix)

The defaults reproduce the service's fixed behavior: port 8080, every
origin allowed, Connect headers permitted.
"""
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class ServerSettings(BaseSettings):
    """HTTP server and client settings."""

    model_config = SettingsConfigDict(
        env_prefix="TODOLIST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    host: str = Field(default="0.0.0.0", description="Interface the server binds to")
    port: int = Field(default=8080, ge=1, le=65535)

    # Client side (CLI commands)
    url: str = Field(default="http://localhost:8080", description="Base URL of a running server")
    request_timeout_s: float = Field(default=10.0, gt=0.0)

    @field_validator('url')
    @classmethod
    def url_has_scheme(cls, v):
        if not v.startswith(("http://", "https://")):
            raise ValueError('url must start with http:// or https://')
        return v.rstrip("/")


class CorsSettings(BaseSettings):
    """Cross-origin access policy."""

    model_config = SettingsConfigDict(
        env_prefix="CORS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    allow_origins: List[str] = Field(default=["*"])
    allow_methods: List[str] = Field(default=["GET", "POST", "PUT", "DELETE", "OPTIONS"])
    allow_headers: List[str] = Field(
        default=["Content-Type", "Connect-Protocol-Version", "Connect-Timeout-Ms"]
    )
    expose_headers: List[str] = Field(default=["Connect-Protocol-Version"])


class ObservabilitySettings(BaseSettings):
    """Logging and metrics settings."""

    model_config = SettingsConfigDict(
        env_prefix="",  # Direct: ENVIRONMENT, LOG_LEVEL
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: str = Field(default="development", pattern="^(development|staging|production)$")
    log_level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    enable_metrics: bool = Field(default=True)


class Settings(BaseSettings):
    """
    Root settings aggregating all subsections.

    Usage:
        from todolist.config import settings

        settings.server.port
        settings.cors.allow_origins
        settings.observability.log_level
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    server: ServerSettings = Field(default_factory=ServerSettings)
    cors: CorsSettings = Field(default_factory=CorsSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)
