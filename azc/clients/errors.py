"""
Azure CLI error taxonomy

Every failure raised by the command executor and the authentication service is an
AzureCliError subclass with a `kind` discriminant, so callers can branch on
`error.kind` or catch the specific class.

| kind                     | class                                  |
|--------------------------|----------------------------------------|
| NOT_INSTALLED            | AzureCliNotInstalledError              |
| NOT_AUTHENTICATED        | AzureCliNotAuthenticatedError          |
| EXTENSION_NOT_INSTALLED  | AzureDevOpsExtensionNotInstalledError  |
| NOT_CONFIGURED           | AzureDevOpsNotConfiguredError          |
| EXECUTION_ERROR          | AzureCliExecutionError                 |
| TOKEN_RESOLUTION_FAILED  | TokenResolutionError                   |

Messages never contain access tokens.
"""

from enum import Enum

from azc.secure_config import ACCESS_TOKEN_ENV_VAR, PAT_ENV_VAR


class ErrorKind(str, Enum):
    NOT_INSTALLED = "not-installed"
    NOT_AUTHENTICATED = "not-authenticated"
    EXTENSION_NOT_INSTALLED = "extension-not-installed"
    NOT_CONFIGURED = "not-configured"
    EXECUTION_ERROR = "execution-error"
    TOKEN_RESOLUTION_FAILED = "token-resolution-failed"


class AzureCliError(Exception):
    """Base class for all Azure CLI failures."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AzureCliNotInstalledError(AzureCliError):
    kind = ErrorKind.NOT_INSTALLED

    def __init__(self):
        super().__init__("Azure CLI is not installed. Install from: https://aka.ms/install-azure-cli")


class AzureCliNotAuthenticatedError(AzureCliError):
    kind = ErrorKind.NOT_AUTHENTICATED

    def __init__(self):
        super().__init__("Not authenticated with Azure CLI. Run: az login")


class AzureDevOpsExtensionNotInstalledError(AzureCliError):
    kind = ErrorKind.EXTENSION_NOT_INSTALLED

    def __init__(self):
        super().__init__("Azure DevOps extension not installed. Run: az extension add --name azure-devops")


class AzureDevOpsNotConfiguredError(AzureCliError):
    kind = ErrorKind.NOT_CONFIGURED

    def __init__(self):
        super().__init__(
            "Azure DevOps organization not configured. "
            "Run: az devops configure --defaults organization=https://dev.azure.com/YOUR_ORG"
        )


class AzureCliExecutionError(AzureCliError):
    """
    Any other Azure CLI failure.

    Attributes:
        stderr: Raw stderr of the failed command (or the error message when stderr was unavailable)
        exit_code: Process exit code, if known
    """

    kind = ErrorKind.EXECUTION_ERROR

    def __init__(self, message: str, stderr: str = "", exit_code: int | None = None):
        super().__init__(message)
        self.stderr = stderr
        self.exit_code = exit_code


class TokenResolutionError(AzureCliError):
    """Raised when no credential source yields a token. The underlying error is chained as __cause__."""

    kind = ErrorKind.TOKEN_RESOLUTION_FAILED

    DEFAULT_MESSAGE = (
        "Failed to retrieve access token. Make sure one of the following is available: "
        f"{PAT_ENV_VAR}, {ACCESS_TOKEN_ENV_VAR}, or Azure CLI login (az login)."
    )

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)
