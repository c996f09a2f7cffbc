"""
Configuration Module
====================

Centralized configuration management using Pydantic Settings.
Loads from environment variables with type validation and defaults.

Usage:
    from shared.config import settings

    print(settings.server.port)
    print(settings.prover.resolve_circuit_dir())
"""

from shared.config.settings import (
    Environment,
    LogLevel,
    ProverSettings,
    ServerSettings,
    Settings,
    get_settings,
)


# Global settings instance (singleton)
settings = get_settings()

__all__ = [
    "Settings",
    "ServerSettings",
    "ProverSettings",
    "get_settings",
    "settings",
    "Environment",
    "LogLevel",
]
