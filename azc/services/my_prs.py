"""
My Pull Requests Service

Lists pull requests the signed-in user created or is reviewing, via
`az repos pr list`.

Usage:
    from azc.services.my_prs import MyPRsService

    service = MyPRsService()
    prs = service.sort_prs(await service.fetch_my_prs(MyPRsOptions(role=PullRequestRole.ALL)))
"""

import asyncio
from typing import Any

from azc.clients.azure_cli import AzureCliService
from azc.clients.errors import AzureCliError
from azc.core import get_logger
from azc.domain.pull_request import MyPRsOptions, PullRequest, PullRequestRole, PullRequestStatus
from azc.security import CommandValidator
from azc.utils.datetime_utils import timestamp_sort_key
from azc.utils.error_handling import log_and_continue, log_and_return_default

logger = get_logger(__name__)

SIGNED_IN_USER_COMMAND = "az ad signed-in-user show --query id --output json"


class MyPRsService:
    """Fetches, filters and orders the current user's pull requests."""

    def __init__(self, azure_cli_service: AzureCliService | None = None):
        self.azure_cli_service = azure_cli_service or AzureCliService()

    async def fetch_my_prs(self, options: MyPRsOptions) -> list[PullRequest]:
        """
        Fetch pull requests for the requested role.

        Role ALL runs the author and reviewer lookups concurrently and merges
        them, keeping the first occurrence of each PR ID.
        """
        role = PullRequestRole(options.role)

        if role is PullRequestRole.AUTHOR:
            return await self.fetch_my_created_prs(options)

        if role is PullRequestRole.REVIEWER:
            return await self.fetch_my_review_prs(options)

        created, reviewing = await asyncio.gather(
            self.fetch_my_created_prs(options),
            self.fetch_my_review_prs(options),
        )
        return self.deduplicate_prs(created, reviewing)

    async def fetch_my_created_prs(self, options: MyPRsOptions) -> list[PullRequest]:
        """
        Pull requests created by the signed-in user.

        Azure CLI failures are logged and yield an empty list.

        Raises:
            ValidationError: If a project or repository filter is unsafe
        """
        command = self.build_list_command(options, creator="@me")

        try:
            result = await self.azure_cli_service.execute_az_command(command)
        except AzureCliError as e:
            return log_and_return_default(
                logger, e,
                context={"command": command},
                default_value=[],
                error_type="Created PR lookup"
            )

        return self._to_pull_requests(result)

    async def fetch_my_review_prs(self, options: MyPRsOptions) -> list[PullRequest]:
        """
        Pull requests where the signed-in user is a reviewer.

        Lists PRs with the same filters, then keeps those whose reviewers include
        the signed-in user's identity ID. Azure CLI failures yield an empty list.

        Raises:
            ValidationError: If a project or repository filter is unsafe
        """
        command = self.build_list_command(options)

        try:
            all_prs = self._to_pull_requests(await self.azure_cli_service.execute_az_command(command))
            if not all_prs:
                return []

            user_id = await self.get_current_user_id()
        except AzureCliError as e:
            return log_and_return_default(
                logger, e,
                context={"command": command},
                default_value=[],
                error_type="Review PR lookup"
            )

        return [pr for pr in all_prs if pr.has_reviewer(user_id)]

    async def get_current_user_id(self) -> str:
        """Identity ID of the signed-in Azure AD user."""
        result = await self.azure_cli_service.execute_az_command(SIGNED_IN_USER_COMMAND)
        return str(result)

    def build_list_command(self, options: MyPRsOptions, creator: str | None = None) -> str:
        """
        Build the `az repos pr list` command line.

        Example:
            >>> service.build_list_command(MyPRsOptions(project="Web"), creator="@me")
            'az repos pr list --creator @me --status active --project "Web" --top 50 --output json'
        """
        parts = ["az repos pr list"]
        if creator:
            parts.append(f"--creator {creator}")
        filter_args = self.build_filter_args(options)
        if filter_args:
            parts.append(filter_args)
        parts.append("--output json")
        return " ".join(parts)

    def build_filter_args(self, options: MyPRsOptions) -> str:
        """
        Build `az repos pr list` filter arguments.

        Raises:
            ValidationError: If project or repo contains shell metacharacters
        """
        args: list[str] = []

        status = PullRequestStatus(options.status) if options.status else PullRequestStatus.ALL
        if status is not PullRequestStatus.ALL:
            args.append(f"--status {status.value}")

        if options.project:
            args.append(f"--project {CommandValidator.quote(options.project)}")

        if options.repo:
            args.append(f"--repository {CommandValidator.quote(options.repo)}")

        if options.top and options.top > 0:
            args.append(f"--top {int(options.top)}")

        return " ".join(args)

    def sort_prs(self, prs: list[PullRequest]) -> list[PullRequest]:
        """Newest first by creation date. Returns a new list."""
        return sorted(prs, key=lambda pr: timestamp_sort_key(pr.creation_date), reverse=True)

    @staticmethod
    def deduplicate_prs(*pr_lists: list[PullRequest]) -> list[PullRequest]:
        """Merge lists, keeping the first occurrence of each pull request ID."""
        seen: dict[int, PullRequest] = {}
        for pr_list in pr_lists:
            for pr in pr_list:
                seen.setdefault(pr.pull_request_id, pr)
        return list(seen.values())

    @staticmethod
    def _to_pull_requests(result: Any) -> list[PullRequest]:
        """Parse `az repos pr list` output, skipping records without a usable pullRequestId."""
        if not isinstance(result, list):
            return []

        prs: list[PullRequest] = []
        for item in result:
            if not isinstance(item, dict):
                continue
            try:
                prs.append(PullRequest.from_json(item))
            except (KeyError, TypeError, ValueError) as e:
                log_and_continue(logger, e, {"record_keys": sorted(item)}, "Pull request parsing")
        return prs
