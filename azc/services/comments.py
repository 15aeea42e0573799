"""
Pull Request Comments Service

Fetches comment threads for a pull request. PR details (project, repository ID)
come from `az repos pr show`; the threads themselves come from the REST API.

Usage:
    from azc.services.comments import CommentsService

    service = CommentsService()
    threads = await service.fetch_comment_threads(42, PRCommentsOptions())
    threads = service.sort_threads(service.filter_deleted_threads(threads), chronological=False)
"""

from azc.clients.ado_rest_client import AzureDevOpsRESTClient
from azc.clients.azure_cli import AzureCliService
from azc.clients.errors import AzureCliError
from azc.core import get_logger
from azc.domain.comment import CommentThread, PRCommentsOptions
from azc.domain.pull_request import PullRequest
from azc.security import CommandValidator
from azc.services.config_service import ConfigService
from azc.utils.datetime_utils import timestamp_sort_key
from azc.utils.error_handling import log_and_return_default

logger = get_logger(__name__)


class PullRequestNotFoundError(LookupError):
    """Raised when `az repos pr show` does not return the pull request."""

    def __init__(self, pr_id: int):
        super().__init__(f"Pull request {pr_id} not found")
        self.pr_id = pr_id


class CommentsService:
    """Comment thread retrieval and ordering for a single pull request."""

    def __init__(
        self,
        rest_client: AzureDevOpsRESTClient | None = None,
        azure_cli_service: AzureCliService | None = None,
        config_service: ConfigService | None = None,
    ):
        self.azure_cli_service = azure_cli_service or AzureCliService()
        self.config_service = config_service or ConfigService(self.azure_cli_service)
        self.rest_client = rest_client or AzureDevOpsRESTClient(self.config_service)

    async def fetch_comment_threads(self, pr_id: int, options: PRCommentsOptions) -> list[CommentThread]:
        """
        Fetch all comment threads on a pull request.

        Args:
            pr_id: Pull request ID
            options: Project / repository hints

        Returns:
            Threads in API order (use sort_threads / filter_deleted_threads)

        Raises:
            PullRequestNotFoundError: If the PR cannot be looked up
            RuntimeError: If the threads request fails (original error chained)
        """
        pr = await self.fetch_pr_details(pr_id, options.project, options.repo)
        if pr is None:
            raise PullRequestNotFoundError(pr_id)

        project = options.project or pr.repository.project.name
        repository_id = pr.repository.id

        try:
            response = await self.rest_client.get_pull_request_threads(project, repository_id, pr_id)
        except Exception as e:
            raise RuntimeError(f"Failed to fetch comment threads: {e}") from e

        return [CommentThread.from_json(thread) for thread in response.get("value") or []]

    def sort_threads(self, threads: list[CommentThread], chronological: bool) -> list[CommentThread]:
        """Oldest first when chronological, otherwise newest first. Returns a new list."""
        return sorted(threads, key=lambda t: timestamp_sort_key(t.published_date), reverse=not chronological)

    def filter_deleted_threads(self, threads: list[CommentThread]) -> list[CommentThread]:
        return [thread for thread in threads if not thread.is_deleted]

    async def build_pr_url(self, pr_id: int, project: str | None = None) -> str | None:
        """
        Web URL of the pull request.

        Returns:
            URL, or None if the organization or project cannot be determined
        """
        organization_url = await self.config_service.get_organization_url()
        if not organization_url:
            return None

        if not project:
            pr = await self.fetch_pr_details(pr_id)
            if pr:
                project = pr.repository.project.name

        if not project:
            return None

        return f"{organization_url}/{project}/_git/pullrequest/{pr_id}"

    async def fetch_pr_details(
        self, pr_id: int, project: str | None = None, repo: str | None = None
    ) -> PullRequest | None:
        """
        Look up a pull request with `az repos pr show`.

        Returns:
            PullRequest, or None if the lookup fails

        Raises:
            ValidationError: If project or repo contains shell metacharacters
        """
        command = self.build_pr_show_command(pr_id, project, repo)

        try:
            result = await self.azure_cli_service.execute_az_command(command)
        except AzureCliError as e:
            return log_and_return_default(
                logger, e,
                context={"pr_id": pr_id, "command": command},
                default_value=None,
                error_type="PR details lookup"
            )

        if not isinstance(result, dict) or "pullRequestId" not in result:
            return None

        try:
            return PullRequest.from_json(result)
        except (TypeError, ValueError) as e:
            return log_and_return_default(
                logger, e,
                context={"pr_id": pr_id, "command": command},
                default_value=None,
                error_type="PR details parsing"
            )

    def build_pr_show_command(self, pr_id: int, project: str | None = None, repo: str | None = None) -> str:
        command = f"az repos pr show --id {int(pr_id)} --output json"

        if project:
            command += f" --project {CommandValidator.quote(project)}"

        if repo:
            command += f" --repository {CommandValidator.quote(repo)}"

        return command
