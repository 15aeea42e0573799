"""
Core Infrastructure - Configuration and Logging

This package provides centralized infrastructure utilities that should be used
throughout azc instead of direct library calls.

Usage:
    from azc.core import get_config, get_logger

    config = get_config()
    logger = get_logger(__name__)
"""

from ..secure_config import (
    ACCESS_TOKEN_ENV_VAR,
    PAT_ENV_VAR,
    AzureDevOpsConfig,
    ConfigurationError,
    SecureConfig,
    get_config,
)
from .logging_config import get_logger, log_with_context, setup_logging

__all__ = [
    # Configuration
    "get_config",
    "ConfigurationError",
    "SecureConfig",
    "AzureDevOpsConfig",
    "PAT_ENV_VAR",
    "ACCESS_TOKEN_ENV_VAR",
    # Logging
    "get_logger",
    "log_with_context",
    "setup_logging",
]
