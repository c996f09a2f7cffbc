"""
Settings Module
===============

Pydantic-based configuration with environment variable loading.

Version: 0.1.0
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Location of the circuit inside the container image
CONTAINER_CIRCUIT_DIR = Path("/app/noir-circuit")
LOCAL_CIRCUIT_DIR = Path("../noir-circuit")


class Environment(str, Enum):
    """Deployment environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ServerSettings(BaseSettings):
    """TCP listener configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVER_")

    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=0, le=65535)

    # Successful proofs are written here as proof_<timestamp>.json
    results_dir: Path = Path(".")


class ProverSettings(BaseSettings):
    """Noir toolchain and circuit configuration."""

    model_config = SettingsConfigDict(env_prefix="PROVER_")

    circuit_dir: Path | None = None
    circuit_name: str = "insurance_verifier"
    nargo_binary: str = "nargo"

    compile_timeout_seconds: float = Field(default=120.0, gt=0)
    execute_timeout_seconds: float = Field(default=120.0, gt=0)

    # Parent directory for per-attempt workspaces (system temp dir if unset)
    workspace_root: Path | None = None

    def resolve_circuit_dir(self) -> Path:
        """
        Resolve the circuit template directory.

        An explicit PROVER_CIRCUIT_DIR wins; otherwise the container path is
        used when present, else the path relative to the server checkout.
        """
        if self.circuit_dir is not None:
            return self.circuit_dir
        if CONTAINER_CIRCUIT_DIR.exists():
            return CONTAINER_CIRCUIT_DIR
        return LOCAL_CIRCUIT_DIR

    @property
    def witness_relpath(self) -> Path:
        """Witness location relative to a workspace root."""
        return Path("target") / f"{self.circuit_name}.gz"


class Settings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables with sensible defaults.
    Use the global `settings` singleton or call `get_settings()`.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # General
    environment: Environment = Environment.DEVELOPMENT
    log_level: LogLevel = LogLevel.INFO

    server: ServerSettings = Field(default_factory=ServerSettings)
    prover: ProverSettings = Field(default_factory=ProverSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def uppercase_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Ensure log level is uppercase."""
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings: Application settings singleton.
    """
    return Settings()
