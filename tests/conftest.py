"""
Pytest configuration and shared fixtures

Provides a scripted fake Azure CLI runner and isolates tests from the
developer's token / organization environment variables.
"""

import json
import subprocess

import pytest

from azc.clients.azure_cli import (
    ACCOUNT_SHOW_COMMAND,
    EXTENSION_LIST_COMMAND,
    VERSION_COMMAND,
    AzureCliService,
    CommandResult,
)
from azc.secure_config import (
    ACCESS_TOKEN_ENV_VAR,
    ORG_URL_ENV_VAR,
    PAT_ENV_VAR,
    PROJECT_ENV_VAR,
    SecureConfig,
)


class FakeAzRunner:
    """
    Scripted stand-in for run_shell_command.

    Responses are keyed by exact command line. Unscripted commands fail with
    exit code 127, like a missing executable.
    """

    def __init__(self):
        self.responses: dict[str, CommandResult | Exception] = {}
        self.calls: list[str] = []

    def succeed(self, command: str, stdout: str = "", stderr: str = "") -> None:
        self.responses[command] = CommandResult(stdout=stdout, stderr=stderr)

    def succeed_json(self, command: str, payload) -> None:
        self.succeed(command, stdout=json.dumps(payload))

    def fail(self, command: str, stderr: str = "", returncode: int = 1) -> None:
        self.responses[command] = subprocess.CalledProcessError(returncode, command, output="", stderr=stderr)

    def raise_error(self, command: str, error: Exception) -> None:
        self.responses[command] = error

    def count(self, command: str) -> int:
        return self.calls.count(command)

    async def __call__(self, command: str) -> CommandResult:
        self.calls.append(command)
        response = self.responses.get(command)
        if response is None:
            raise subprocess.CalledProcessError(127, command, output="", stderr=f"command not found: {command}")
        if isinstance(response, Exception):
            raise response
        return response


# ===== Environment Isolation =====


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove token and organization variables so tests never see real credentials"""
    for name in (PAT_ENV_VAR, ACCESS_TOKEN_ENV_VAR, ORG_URL_ENV_VAR, PROJECT_ENV_VAR):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def secure_config():
    """Config manager reading the (cleaned) process environment"""
    return SecureConfig()


# ===== Azure CLI Fixtures =====


@pytest.fixture
def az_runner():
    """Fake runner for an installed, logged-in CLI with the azure-devops extension"""
    runner = FakeAzRunner()
    runner.succeed(VERSION_COMMAND, stdout="azure-cli 2.61.0")
    runner.succeed(ACCOUNT_SHOW_COMMAND, stdout='{"id": "sub-1"}')
    runner.succeed_json(EXTENSION_LIST_COMMAND, [{"name": "azure-devops", "version": "1.0.1"}])
    return runner


@pytest.fixture
def azure_cli(az_runner):
    """AzureCliService wired to the fake runner"""
    return AzureCliService(runner=az_runner)


# ===== Domain Payload Fixtures =====


@pytest.fixture
def pr_payload():
    """Factory for `az repos pr` JSON records"""

    def make(pr_id: int, creation_date: str = "2026-02-10T10:00:00Z", reviewers=None, **overrides):
        payload = {
            "pullRequestId": pr_id,
            "title": f"PR {pr_id}",
            "status": "active",
            "creationDate": creation_date,
            "createdBy": {"id": "author-1", "displayName": "Ada Author", "uniqueName": "ada@example.com"},
            "reviewers": reviewers or [],
            "repository": {
                "id": "repo-guid",
                "name": "web",
                "project": {"id": "proj-guid", "name": "Platform"},
            },
            "sourceRefName": "refs/heads/feature/login",
            "targetRefName": "refs/heads/main",
            "isDraft": False,
        }
        payload.update(overrides)
        return payload

    return make


@pytest.fixture
def thread_payload():
    """Factory for REST comment thread records"""

    def make(thread_id: int, published_date: str = "2026-02-10T10:00:00Z", **overrides):
        payload = {
            "id": thread_id,
            "publishedDate": published_date,
            "status": "active",
            "comments": [
                {
                    "id": 1,
                    "parentCommentId": 0,
                    "content": "Looks good",
                    "author": {"id": "rev-1", "displayName": "Rita Reviewer"},
                    "publishedDate": published_date,
                    "commentType": "text",
                }
            ],
            "isDeleted": False,
        }
        payload.update(overrides)
        return payload

    return make
