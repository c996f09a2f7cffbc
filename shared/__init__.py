"""
ZK Insurance Shared Library
===========================

Common utilities, configuration, and the proof pipeline used by the
insurance verifier service.

Modules:
    - config: Configuration management with Pydantic Settings
    - logging: Structured logging with structlog
    - zk: Noir proof pipeline (workspace, templating, toolchain, artifacts)

Version: 0.1.0
"""

__version__ = "0.1.0"

from shared.config import settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
