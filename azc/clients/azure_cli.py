"""
Azure CLI Command Executor

Runs `az` command lines, classifies failures into the AzureCliError taxonomy and
parses JSON output. Also exposes the install / login / extension probes used to
diagnose failures.

Usage:
    from azc.clients.azure_cli import AzureCliService

    cli = AzureCliService()
    prs = await cli.execute_az_command("az repos pr list --output json")
    token = await cli.get_access_token()

For testing, pass a fake runner:

    async def runner(command: str) -> CommandResult: ...
    cli = AzureCliService(runner=runner)

The runner must raise subprocess.CalledProcessError (returncode, stdout, stderr)
on a non-zero exit.
"""

import asyncio
import json
import subprocess
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from azc.clients.errors import (
    AzureCliError,
    AzureCliExecutionError,
    AzureCliNotAuthenticatedError,
    AzureCliNotInstalledError,
    AzureDevOpsExtensionNotInstalledError,
    AzureDevOpsNotConfiguredError,
)
from azc.core import get_logger

logger = get_logger(__name__)

# Well-known application ID of Azure DevOps, the token audience
AZURE_DEVOPS_RESOURCE_ID = "499b84ac-1321-427f-aa17-267ca6975798"

DEVOPS_EXTENSION_NAME = "azure-devops"

# Commands provided by the azure-devops extension
DEVOPS_COMMAND_PREFIXES = ("az repos", "az devops")

VERSION_COMMAND = "az --version"
ACCOUNT_SHOW_COMMAND = "az account show"
EXTENSION_LIST_COMMAND = "az extension list --output json"
ACCESS_TOKEN_COMMAND = (
    f"az account get-access-token --resource {AZURE_DEVOPS_RESOURCE_ID} --query accessToken --output tsv"
)


@dataclass
class CommandResult:
    """Captured output of one command."""

    stdout: str
    stderr: str = ""


CommandRunner = Callable[[str], Awaitable[CommandResult]]


async def run_shell_command(command: str) -> CommandResult:
    """
    Run a command line through the shell and capture its output.

    Args:
        command: Full command line (e.g. "az account show")

    Returns:
        CommandResult with decoded stdout/stderr

    Raises:
        subprocess.CalledProcessError: If the command exits non-zero
    """
    process = await asyncio.create_subprocess_shell(
        command,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )

    stdout, stderr = await process.communicate()
    out = stdout.decode("utf-8", errors="replace")
    err = stderr.decode("utf-8", errors="replace")

    if process.returncode != 0:
        raise subprocess.CalledProcessError(process.returncode, command, output=out, stderr=err)

    return CommandResult(stdout=out, stderr=err)


class AzureCliService:
    """
    Executes Azure CLI commands and maps failures to typed errors.

    No retries and no timeouts: a single failure is terminal for the call.
    """

    def __init__(self, runner: CommandRunner | None = None):
        """
        Args:
            runner: Coroutine that runs one command line (default: run_shell_command)
        """
        self._run = runner or run_shell_command

    # ==============================
    # Probes (never raise)
    # ==============================

    async def is_installed(self) -> bool:
        """True if `az --version` succeeds."""
        try:
            await self._run(VERSION_COMMAND)
            return True
        except Exception as e:
            logger.debug(f"Azure CLI install probe failed: {e}")
            return False

    async def is_authenticated(self) -> bool:
        """True if `az account show` succeeds."""
        try:
            await self._run(ACCOUNT_SHOW_COMMAND)
            return True
        except Exception as e:
            logger.debug(f"Azure CLI login probe failed: {e}")
            return False

    async def has_devops_extension(self, name: str = DEVOPS_EXTENSION_NAME) -> bool:
        """
        True if the named extension appears in `az extension list`.

        Any failure, including unparseable output, counts as not installed.
        """
        try:
            result = await self._run(EXTENSION_LIST_COMMAND)
            extensions = json.loads(result.stdout)
            return any(isinstance(ext, dict) and ext.get("name") == name for ext in extensions)
        except Exception as e:
            logger.debug(f"Extension probe failed: {e}")
            return False

    # ==============================
    # Commands
    # ==============================

    async def execute_az_command(self, command: str) -> Any:
        """
        Run an Azure CLI command and return its parsed JSON output.

        Args:
            command: Full command line, normally ending in "--output json"

        Returns:
            Parsed JSON (dict, list, str, ...); {} when stdout is blank

        Raises:
            AzureCliNotInstalledError: `az` is not available
            AzureCliNotAuthenticatedError: no `az login` session
            AzureDevOpsExtensionNotInstalledError: DevOps command without the azure-devops extension
            AzureDevOpsNotConfiguredError: stderr reports no default organization
            AzureCliExecutionError: anything else
        """
        await self._validate_azure_cli_is_installed()
        await self._validate_user_is_authenticated()
        await self._validate_devops_extension_for_devops_commands(command)

        logger.debug(f"Running: {command}")

        try:
            result = await self._run(command)
            self._handle_stderr_errors(result.stderr)
            return self._parse_json_response(result.stdout)
        except AzureCliError:
            raise
        except Exception as error:
            stderr = getattr(error, "stderr", None)
            if stderr and self._is_organization_not_configured_error(stderr):
                raise AzureDevOpsNotConfiguredError() from error
            raise self._to_execution_error(error) from error

    async def get_access_token(self) -> str:
        """
        Get an Azure DevOps access token from the signed-in CLI account.

        Returns:
            Trimmed token (may be empty if the CLI printed nothing)

        Raises:
            AzureCliNotInstalledError, AzureCliNotAuthenticatedError, AzureCliExecutionError:
                chosen by re-probing after the token command fails
        """
        try:
            result = await self._run(ACCESS_TOKEN_COMMAND)
            return result.stdout.strip()
        except Exception as error:
            raise await self._diagnose_access_token_error(error) from error

    # ==============================
    # Validation
    # ==============================

    async def _validate_azure_cli_is_installed(self) -> None:
        if not await self.is_installed():
            raise AzureCliNotInstalledError()

    async def _validate_user_is_authenticated(self) -> None:
        if not await self.is_authenticated():
            raise AzureCliNotAuthenticatedError()

    async def _validate_devops_extension_for_devops_commands(self, command: str) -> None:
        if self.is_devops_command(command) and not await self.has_devops_extension():
            raise AzureDevOpsExtensionNotInstalledError()

    @staticmethod
    def is_devops_command(command: str) -> bool:
        """True for commands that need the azure-devops extension (case-sensitive)."""
        return any(prefix in command for prefix in DEVOPS_COMMAND_PREFIXES)

    # ==============================
    # Output handling
    # ==============================

    def _handle_stderr_errors(self, stderr: str) -> None:
        if not stderr:
            return

        if self._is_organization_not_configured_error(stderr):
            raise AzureDevOpsNotConfiguredError()

        if self._is_resource_not_found_error(stderr):
            raise AzureCliExecutionError("Resource not found", stderr)

    @staticmethod
    def _is_organization_not_configured_error(stderr: str) -> bool:
        return "organization" in stderr and "not configured" in stderr

    @staticmethod
    def _is_resource_not_found_error(stderr: str) -> bool:
        return "not found" in stderr or "does not exist" in stderr

    @staticmethod
    def _parse_json_response(stdout: str) -> Any:
        if stdout.strip():
            return json.loads(stdout)
        return {}

    @staticmethod
    def _to_execution_error(error: Exception) -> AzureCliExecutionError:
        stderr = getattr(error, "stderr", None) or str(error) or "Unknown error"
        exit_code = getattr(error, "returncode", None)
        return AzureCliExecutionError(f"Azure CLI command failed: {error}", stderr, exit_code)

    async def _diagnose_access_token_error(self, error: Exception) -> AzureCliError:
        """Pick the error matching the root cause of a failed token command."""
        if not await self.is_installed():
            return AzureCliNotInstalledError()

        if not await self.is_authenticated():
            return AzureCliNotAuthenticatedError()

        stderr = getattr(error, "stderr", None) or str(error)
        return AzureCliExecutionError("Failed to get access token", stderr)
