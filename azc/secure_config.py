"""
Secure Configuration Management

Provides centralized, validated configuration for azc.
All environment lookups go through this module so that a local .env file
is honoured consistently.

Usage:
    from azc.secure_config import get_config

    config = get_config()
    pat = config.get_env_token(PAT_ENV_VAR)
    ado_config = config.get_ado_config()
    print(ado_config.organization_url)

Security Features:
    - Token values are trimmed and blank values treated as absent
    - HTTPS enforcement for organization URLs
    - Project name format validation
    - Token values are never included in error messages

Raises:
    ConfigurationError: If configuration is present but invalid
"""

import os
import re
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Token sources, checked in this order by the authentication service
PAT_ENV_VAR = "AZURE_DEVOPS_EXT_PAT"
ACCESS_TOKEN_ENV_VAR = "AZ_ACCESS_TOKEN"

# Fallbacks used when `az devops configure` has no defaults
ORG_URL_ENV_VAR = "AZURE_DEVOPS_ORG_URL"
PROJECT_ENV_VAR = "AZURE_DEVOPS_PROJECT"

LOG_LEVEL_ENV_VAR = "AZC_LOG_LEVEL"


class ConfigurationError(Exception):
    """Raised when configuration is missing or invalid."""
    pass


@dataclass
class AzureDevOpsConfig:
    """
    Validated Azure DevOps configuration taken from the environment.

    Both values are optional: the Azure CLI defaults take precedence and
    these are only consulted as a fallback.
    """
    organization_url: Optional[str] = None
    project: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self):
        """
        Validate Azure DevOps configuration.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if self.organization_url:
            self.organization_url = self.organization_url.rstrip('/')

            if not self.organization_url.startswith('https://'):
                raise ConfigurationError(
                    f"{ORG_URL_ENV_VAR} must use HTTPS: {self.organization_url}"
                )

            if not ('dev.azure.com' in self.organization_url or 'visualstudio.com' in self.organization_url):
                raise ConfigurationError(
                    f"{ORG_URL_ENV_VAR} must be a valid Azure DevOps URL: {self.organization_url}"
                )

        if self.project:
            if not re.match(r'^[a-zA-Z0-9 _\-\.]+$', self.project):
                raise ConfigurationError(
                    f"{PROJECT_ENV_VAR} contains invalid characters: {self.project}"
                )


class SecureConfig:
    """
    Centralized configuration manager.

    Loads configuration from environment variables (and a .env file, if present).
    """

    def __init__(self):
        """Initialize configuration (loads .env file)."""
        load_dotenv()

    def get_env_token(self, name: str) -> Optional[str]:
        """
        Read a token from the environment.

        Args:
            name: Environment variable name (PAT_ENV_VAR or ACCESS_TOKEN_ENV_VAR)

        Returns:
            The trimmed value, or None if unset or blank
        """
        value = os.getenv(name)
        if not value:
            return None
        trimmed = value.strip()
        return trimmed or None

    def get_ado_config(self) -> AzureDevOpsConfig:
        """
        Get validated Azure DevOps fallback configuration.

        Returns:
            AzureDevOpsConfig: Validated configuration

        Raises:
            ConfigurationError: If a value is set but invalid
        """
        organization_url = (os.getenv(ORG_URL_ENV_VAR) or '').strip()
        project = (os.getenv(PROJECT_ENV_VAR) or '').strip()

        return AzureDevOpsConfig(
            organization_url=organization_url or None,
            project=project or None
        )

    def get_log_level(self) -> str:
        """Log level name from AZC_LOG_LEVEL (default: WARNING)."""
        return (os.getenv(LOG_LEVEL_ENV_VAR) or 'WARNING').strip().upper()


# Convenience function for getting configuration
_config_instance = None

def get_config() -> SecureConfig:
    """
    Get the global configuration instance (singleton pattern).

    Returns:
        SecureConfig: The configuration manager
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = SecureConfig()
    return _config_instance
