"""
Authentication Service

Resolves an Azure DevOps access token from, in order:
    1. AZURE_DEVOPS_EXT_PAT
    2. AZ_ACCESS_TOKEN
    3. `az account get-access-token`

The token and the CLI account's subscription are cached on the instance until
clear_cache(). Tokens are never logged or put in error messages.

Usage:
    from azc.services.auth import AuthenticationService

    auth = AuthenticationService(AzureCliService())
    token = await auth.get_access_token()
    context = await auth.get_authentication_context()
"""

from azc.clients.azure_cli import AzureCliService
from azc.clients.errors import AzureCliExecutionError, TokenResolutionError
from azc.core import get_logger, log_with_context
from azc.domain.auth import AuthenticationContext, SubscriptionInfo, TokenSource
from azc.secure_config import ACCESS_TOKEN_ENV_VAR, PAT_ENV_VAR, SecureConfig, get_config
from azc.utils.error_handling import log_and_return_default

logger = get_logger(__name__)

ACCOUNT_SHOW_JSON_COMMAND = "az account show --output json"


class AuthenticationService:
    """
    Credential resolver with a per-instance cache.

    Concurrent callers racing on an empty cache may each resolve; the last write wins.
    """

    def __init__(self, azure_cli_service: AzureCliService, config: SecureConfig | None = None):
        """
        Args:
            azure_cli_service: Executor used for the CLI token and subscription lookup
            config: Environment access (default: global get_config())
        """
        self.azure_cli_service = azure_cli_service
        self.config = config or get_config()
        self._cached_token: str | None = None
        self._cached_subscription: SubscriptionInfo | None = None

    async def get_access_token(self) -> str:
        """
        Get an access token, resolving it on first use.

        Returns:
            Trimmed, non-empty token

        Raises:
            TokenResolutionError: No source produced a token (cause chained)
        """
        if self._cached_token:
            return self._cached_token

        for env_var in (PAT_ENV_VAR, ACCESS_TOKEN_ENV_VAR):
            env_token = self.config.get_env_token(env_var)
            if env_token:
                log_with_context(logger, "debug", "Resolved access token", source=env_var)
                self._cached_token = env_token
                return env_token

        try:
            token = await self.azure_cli_service.get_access_token()
            if not token or not token.strip():
                raise AzureCliExecutionError("Empty token from Azure CLI")
        except Exception as err:
            raise TokenResolutionError() from err

        log_with_context(logger, "debug", "Resolved access token", source=TokenSource.AZURE_CLI.value)
        self._cached_token = token.strip()
        return self._cached_token

    async def get_subscription_info(self) -> SubscriptionInfo | None:
        """
        Best-effort lookup of the CLI account's subscription.

        Returns:
            SubscriptionInfo, or None if the CLI is unavailable, not logged in,
            the lookup fails, or the output lacks an id or name. Never raises.
        """
        if self._cached_subscription:
            return self._cached_subscription

        try:
            if not await self.azure_cli_service.is_installed():
                return None

            if not await self.azure_cli_service.is_authenticated():
                return None

            result = await self.azure_cli_service.execute_az_command(ACCOUNT_SHOW_JSON_COMMAND)
        except Exception as e:
            return log_and_return_default(
                logger, e,
                context={"command": ACCOUNT_SHOW_JSON_COMMAND},
                default_value=None,
                error_type="Subscription lookup"
            )

        info = SubscriptionInfo.from_json(result)
        if info:
            self._cached_subscription = info
        return info

    async def get_authentication_context(self) -> AuthenticationContext:
        """
        Token plus its source, and the subscription when the token came from the CLI.

        Raises:
            TokenResolutionError: From get_access_token()
        """
        token = await self.get_access_token()
        source = self.get_token_source()

        context = AuthenticationContext(access_token=token, source=source)

        if source is TokenSource.AZURE_CLI:
            context.subscription = await self.get_subscription_info()

        return context

    def get_token_source(self) -> TokenSource:
        """Which source a token resolved now would come from, re-read from the environment."""
        if self.config.get_env_token(PAT_ENV_VAR):
            return TokenSource.ENVIRONMENT_PAT
        if self.config.get_env_token(ACCESS_TOKEN_ENV_VAR):
            return TokenSource.ENVIRONMENT_TOKEN
        return TokenSource.AZURE_CLI

    def clear_cache(self) -> None:
        """Drop the cached token and subscription together."""
        self._cached_token = None
        self._cached_subscription = None
