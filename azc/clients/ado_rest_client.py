"""
Azure DevOps REST API Client

Authenticated GET access to the Azure DevOps REST API for data the Azure CLI
does not expose (pull request comment threads). One request per call: no
pagination, no retries.

Usage:
    from azc.clients.ado_rest_client import AzureDevOpsRESTClient

    client = AzureDevOpsRESTClient(ConfigService())
    threads = await client.get_pull_request_threads("MyProject", repository_id, 42)

API Documentation:
    https://learn.microsoft.com/en-us/rest/api/azure/devops/git/pull-request-threads/list
"""

import base64
from typing import Any

import httpx

from azc.async_http_client import AsyncSecureHTTPClient
from azc.core import get_logger
from azc.domain.auth import TokenSource
from azc.secure_config import ConfigurationError
from azc.services.config_service import ConfigService

logger = get_logger(__name__)


class AzureDevOpsRESTClient:
    """
    Azure DevOps REST API client using the token from ConfigService.
    """

    API_VERSION = "7.0"

    def __init__(self, config_service: ConfigService):
        self.config_service = config_service

    async def get_authorization_header(self) -> dict[str, str]:
        """
        Build the Authorization header for the resolved token.

        A PAT from AZURE_DEVOPS_EXT_PAT uses Basic auth with an empty username;
        Azure AD tokens use Bearer.

        Returns:
            Headers dict with Authorization and Accept
        """
        token = await self.config_service.get_access_token()
        source = self.config_service.get_token_source()

        if source is TokenSource.ENVIRONMENT_PAT:
            credentials = f":{token}"  # Empty username, PAT as password
            authorization = f"Basic {base64.b64encode(credentials.encode()).decode()}"
        else:
            authorization = f"Bearer {token}"

        return {"Authorization": authorization, "Accept": "application/json"}

    async def get(self, api_path: str, project: str) -> dict[str, Any]:
        """
        GET a project-scoped API path.

        Args:
            api_path: Path starting at /_apis, including query string
            project: Project name

        Returns:
            Parsed JSON response

        Raises:
            ConfigurationError: If no organization URL is configured
            TokenResolutionError: If no token is available
            httpx.HTTPStatusError: For non-2xx responses
            httpx.RequestError: For network errors
        """
        organization_url = await self.config_service.get_organization_url()
        if not organization_url:
            raise ConfigurationError(
                "Azure DevOps organization URL not configured. "
                "Run: az devops configure --defaults organization=https://dev.azure.com/YOUR_ORG"
            )

        url = f"{organization_url}/{project}{api_path}"
        headers = await self.get_authorization_header()

        async with AsyncSecureHTTPClient() as client:
            response = await client.get(url, headers=headers)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code in [401, 403]:
                logger.error(f"Authentication failed (HTTP {status_code}) for {api_path}")
            else:
                logger.error(f"HTTP error {status_code} for {api_path}")
            raise

        return response.json()  # type: ignore[no-any-return]

    async def get_pull_request_threads(self, project: str, repository_id: str, pull_request_id: int) -> dict[str, Any]:
        """
        Get PR comment threads.

        REST Endpoint: GET {org}/{project}/_apis/git/repositories/{repoId}/pullRequests/{prId}/threads

        Returns:
            Threads response:
            {
                "count": 2,
                "value": [
                    {"id": 1, "publishedDate": "2026-02-10T10:30:00Z", "status": "active", "comments": [...]}
                ]
            }
        """
        api_path = self.build_threads_api_path(repository_id, pull_request_id)
        return await self.get(api_path, project)

    def build_threads_api_path(self, repository_id: str, pull_request_id: int) -> str:
        return (
            f"/_apis/git/repositories/{repository_id}/pullRequests/{pull_request_id}/threads"
            f"?api-version={self.API_VERSION}"
        )
