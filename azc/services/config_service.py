"""
Config Service

Single entry point for authentication and Azure DevOps defaults. The
organization URL and default project come from `az devops configure`,
falling back to AZURE_DEVOPS_ORG_URL / AZURE_DEVOPS_PROJECT.
"""

from typing import Any

from azc.clients.azure_cli import AzureCliService
from azc.core import get_logger
from azc.domain.auth import AuthenticationContext, SubscriptionInfo, TokenSource
from azc.secure_config import ConfigurationError, SecureConfig, get_config
from azc.services.auth import AuthenticationService
from azc.utils.error_handling import log_and_continue

logger = get_logger(__name__)

DEVOPS_CONFIGURE_COMMAND = "az devops configure --list --output json"


class ConfigService:
    """
    Facade over AuthenticationService plus organization/project discovery.

    Services are injectable; when only an AzureCliService is given, a new
    AuthenticationService is built around it so both share one executor.
    """

    def __init__(
        self,
        azure_cli_service: AzureCliService | None = None,
        auth_service: AuthenticationService | None = None,
        config: SecureConfig | None = None,
    ):
        self.config = config or get_config()

        if auth_service is not None:
            self.azure_cli_service = azure_cli_service or auth_service.azure_cli_service
            self.auth_service = auth_service
        else:
            self.azure_cli_service = azure_cli_service or AzureCliService()
            self.auth_service = AuthenticationService(self.azure_cli_service, config=self.config)

    # ==============================
    # Authentication
    # ==============================

    async def get_access_token(self) -> str:
        return await self.auth_service.get_access_token()

    async def get_subscription_info(self) -> SubscriptionInfo | None:
        return await self.auth_service.get_subscription_info()

    async def get_authentication_context(self) -> AuthenticationContext:
        return await self.auth_service.get_authentication_context()

    def get_token_source(self) -> TokenSource:
        return self.auth_service.get_token_source()

    def clear_cache(self) -> None:
        self.auth_service.clear_cache()

    # ==============================
    # Azure DevOps defaults
    # ==============================

    async def get_organization_url(self) -> str | None:
        """
        Organization URL from the Azure CLI defaults, else AZURE_DEVOPS_ORG_URL.

        Returns:
            URL without trailing slash, or None if neither is set
        """
        organization = (await self._get_devops_defaults()).get("organization")
        if organization:
            return str(organization).rstrip("/")
        return self._get_fallback_config().get("organization_url")

    async def get_default_project(self) -> str | None:
        """Default project from the Azure CLI defaults, else AZURE_DEVOPS_PROJECT."""
        project = (await self._get_devops_defaults()).get("project")
        if project:
            return str(project)
        return self._get_fallback_config().get("project")

    async def _get_devops_defaults(self) -> dict[str, Any]:
        try:
            result = await self.azure_cli_service.execute_az_command(DEVOPS_CONFIGURE_COMMAND)
        except Exception as e:
            log_and_continue(logger, e, {"command": DEVOPS_CONFIGURE_COMMAND}, "Azure DevOps defaults lookup")
            return {}

        defaults = result.get("defaults") if isinstance(result, dict) else None
        return defaults if isinstance(defaults, dict) else {}

    def _get_fallback_config(self) -> dict[str, str | None]:
        try:
            ado_config = self.config.get_ado_config()
        except ConfigurationError as e:
            log_and_continue(logger, e, {}, "Environment configuration")
            return {}
        return {"organization_url": ado_config.organization_url, "project": ado_config.project}
