"""
Configuration module with strongly typed settings.

Usage:
    from todolist.config import settings

    print(settings.server.port)
    print(settings.cors.allow_origins)
"""
from pydantic import ValidationError

from todolist.exceptions import ConfigurationError
from .settings import (
    Settings,
    ServerSettings,
    CorsSettings,
    ObservabilitySettings,
)


def load_settings() -> Settings:
    """Build and validate settings, reporting bad values as ConfigurationError."""
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


# Singleton instance - validates on import
settings = load_settings()

__all__ = [
    "settings",
    "load_settings",
    "Settings",
    "ServerSettings",
    "CorsSettings",
    "ObservabilitySettings",
]
