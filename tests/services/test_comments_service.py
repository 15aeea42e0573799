"""
Unit Tests for the Pull Request Comments Service

Test Coverage:
- PR lookup via `az repos pr show`
- Thread retrieval through the REST client
- Ordering and deleted-thread filtering
- PR web URL building
"""

from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from azc.domain.comment import CommentThread, CommentThreadStatus, PRCommentsOptions
from azc.security import ValidationError
from azc.services.comments import CommentsService, PullRequestNotFoundError

SHOW_COMMAND = "az repos pr show --id 42 --output json"


@pytest.fixture
def rest_client():
    client = Mock()
    client.get_pull_request_threads = AsyncMock(return_value={"count": 0, "value": []})
    return client


@pytest.fixture
def config_service():
    service = Mock()
    service.get_organization_url = AsyncMock(return_value="https://dev.azure.com/contoso")
    return service


@pytest.fixture
def service(azure_cli, rest_client, config_service):
    return CommentsService(rest_client=rest_client, azure_cli_service=azure_cli, config_service=config_service)


class TestPRShowCommand:
    """Test `az repos pr show` command building"""

    def test_id_only(self, service):
        assert service.build_pr_show_command(42) == SHOW_COMMAND

    def test_with_project_and_repo(self, service):
        command = service.build_pr_show_command(42, "Mobile App", "ios")

        assert command == 'az repos pr show --id 42 --output json --project "Mobile App" --repository "ios"'

    def test_rejects_unsafe_project(self, service):
        with pytest.raises(ValidationError):
            service.build_pr_show_command(42, "x`id`")

    def test_rejects_non_numeric_id(self, service):
        with pytest.raises(ValueError):
            service.build_pr_show_command("42; rm -rf /")


class TestFetchPRDetails:
    """Test PR lookup"""

    @pytest.mark.asyncio
    async def test_returns_pull_request(self, service, az_runner, pr_payload):
        az_runner.succeed_json(SHOW_COMMAND, pr_payload(42))

        pr = await service.fetch_pr_details(42)

        assert pr.pull_request_id == 42
        assert pr.repository.id == "repo-guid"

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self, service, az_runner, caplog):
        az_runner.fail(SHOW_COMMAND, stderr="ERROR: TF401180: The requested pull request was not found.")

        assert await service.fetch_pr_details(42) is None
        assert "PR details lookup failed" in caplog.text

    @pytest.mark.asyncio
    async def test_unexpected_output_returns_none(self, service, az_runner):
        az_runner.succeed_json(SHOW_COMMAND, {"message": "no id here"})

        assert await service.fetch_pr_details(42) is None

    @pytest.mark.asyncio
    async def test_non_numeric_id_returns_none(self, service, az_runner, pr_payload):
        az_runner.succeed_json(SHOW_COMMAND, pr_payload(42, pullRequestId="forty-two"))

        assert await service.fetch_pr_details(42) is None


class TestFetchCommentThreads:
    """Test thread retrieval"""

    @pytest.mark.asyncio
    async def test_uses_project_and_repository_from_pr(
        self, service, az_runner, rest_client, pr_payload, thread_payload
    ):
        az_runner.succeed_json(SHOW_COMMAND, pr_payload(42))
        rest_client.get_pull_request_threads.return_value = {"count": 2, "value": [thread_payload(1), thread_payload(2)]}

        threads = await service.fetch_comment_threads(42, PRCommentsOptions())

        rest_client.get_pull_request_threads.assert_awaited_once_with("Platform", "repo-guid", 42)
        assert [thread.id for thread in threads] == [1, 2]
        assert all(isinstance(thread, CommentThread) for thread in threads)
        assert threads[0].comments[0].author.display_name == "Rita Reviewer"

    @pytest.mark.asyncio
    async def test_explicit_project_wins(self, service, az_runner, rest_client, pr_payload):
        command = 'az repos pr show --id 42 --output json --project "Other"'
        az_runner.succeed_json(command, pr_payload(42))

        await service.fetch_comment_threads(42, PRCommentsOptions(project="Other"))

        rest_client.get_pull_request_threads.assert_awaited_once_with("Other", "repo-guid", 42)

    @pytest.mark.asyncio
    async def test_missing_pr_raises_not_found(self, service, az_runner, rest_client):
        az_runner.fail(SHOW_COMMAND, stderr="does not exist")

        with pytest.raises(PullRequestNotFoundError, match="Pull request 42 not found") as exc_info:
            await service.fetch_comment_threads(42, PRCommentsOptions())

        assert exc_info.value.pr_id == 42
        rest_client.get_pull_request_threads.assert_not_called()

    @pytest.mark.asyncio
    async def test_rest_failure_is_wrapped(self, service, az_runner, rest_client, pr_payload):
        az_runner.succeed_json(SHOW_COMMAND, pr_payload(42))
        request = httpx.Request("GET", "https://dev.azure.com/contoso")
        error = httpx.HTTPStatusError("403 Forbidden", request=request, response=httpx.Response(403, request=request))
        rest_client.get_pull_request_threads.side_effect = error

        with pytest.raises(RuntimeError, match="Failed to fetch comment threads") as exc_info:
            await service.fetch_comment_threads(42, PRCommentsOptions())

        assert exc_info.value.__cause__ is error

    @pytest.mark.asyncio
    async def test_missing_value_yields_no_threads(self, service, az_runner, rest_client, pr_payload):
        az_runner.succeed_json(SHOW_COMMAND, pr_payload(42))
        rest_client.get_pull_request_threads.return_value = {}

        assert await service.fetch_comment_threads(42, PRCommentsOptions()) == []


class TestThreadOrdering:
    """Test sort and filter helpers"""

    @pytest.fixture
    def threads(self, thread_payload):
        return [
            CommentThread.from_json(thread_payload(1, published_date="2026-02-01T10:00:00Z")),
            CommentThread.from_json(thread_payload(2, published_date="2026-02-03T10:00:00.1234567Z")),
            CommentThread.from_json(thread_payload(3, published_date="2026-02-02T10:00:00Z", isDeleted=True)),
        ]

    def test_newest_first_by_default(self, service, threads):
        assert [t.id for t in service.sort_threads(threads, chronological=False)] == [2, 3, 1]

    def test_chronological(self, service, threads):
        assert [t.id for t in service.sort_threads(threads, chronological=True)] == [1, 3, 2]

    def test_sort_does_not_mutate_input(self, service, threads):
        service.sort_threads(threads, chronological=False)

        assert [t.id for t in threads] == [1, 2, 3]

    def test_filter_deleted(self, service, threads):
        assert [t.id for t in service.filter_deleted_threads(threads)] == [1, 2]

    def test_status_parsed(self, threads):
        assert threads[0].status is CommentThreadStatus.ACTIVE


class TestBuildPRUrl:
    """Test PR web URL building"""

    @pytest.mark.asyncio
    async def test_with_project(self, service):
        url = await service.build_pr_url(42, "Platform")

        assert url == "https://dev.azure.com/contoso/Platform/_git/pullrequest/42"

    @pytest.mark.asyncio
    async def test_project_looked_up_from_pr(self, service, az_runner, pr_payload):
        az_runner.succeed_json(SHOW_COMMAND, pr_payload(42))

        assert await service.build_pr_url(42) == "https://dev.azure.com/contoso/Platform/_git/pullrequest/42"

    @pytest.mark.asyncio
    async def test_none_without_organization(self, service, config_service, az_runner):
        config_service.get_organization_url.return_value = None

        assert await service.build_pr_url(42, "Platform") is None
        assert az_runner.calls == []

    @pytest.mark.asyncio
    async def test_none_when_project_unknown(self, service, az_runner):
        az_runner.fail(SHOW_COMMAND)

        assert await service.build_pr_url(42) is None
