"""
Clients for external systems.

- azure_cli: Azure CLI command executor and probes
- errors: AzureCliError taxonomy
- ado_rest_client: Azure DevOps REST API (comment threads)
"""

from .azure_cli import AzureCliService, CommandResult, run_shell_command
from .errors import (
    AzureCliError,
    AzureCliExecutionError,
    AzureCliNotAuthenticatedError,
    AzureCliNotInstalledError,
    AzureDevOpsExtensionNotInstalledError,
    AzureDevOpsNotConfiguredError,
    ErrorKind,
    TokenResolutionError,
)

__all__ = [
    "AzureCliService",
    "CommandResult",
    "run_shell_command",
    "AzureCliError",
    "AzureCliExecutionError",
    "AzureCliNotAuthenticatedError",
    "AzureCliNotInstalledError",
    "AzureDevOpsExtensionNotInstalledError",
    "AzureDevOpsNotConfiguredError",
    "ErrorKind",
    "TokenResolutionError",
]
