"""
Pull request domain models

Represents pull requests as returned by `az repos pr list` / `az repos pr show`:
    - PullRequest, User, Reviewer, Repository, ProjectRef
    - PullRequestStatus, PullRequestRole, PullRequestVote
    - MyPRsOptions: filters for listing the current user's pull requests
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

BRANCH_PREFIX = "refs/heads/"


class PullRequestStatus(str, Enum):
    """Status filter accepted by `az repos pr list --status`."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ABANDONED = "abandoned"
    ALL = "all"


class PullRequestRole(str, Enum):
    """The current user's relationship to a pull request."""

    AUTHOR = "author"
    REVIEWER = "reviewer"
    ALL = "all"


class PullRequestVote(IntEnum):
    """Reviewer vote values used by Azure DevOps."""

    APPROVED = 10
    APPROVED_WITH_SUGGESTIONS = 5
    NO_VOTE = 0
    WAITING_FOR_AUTHOR = -5
    REJECTED = -10

    @classmethod
    def from_value(cls, value: Any) -> "PullRequestVote":
        """Map a raw vote to a member; unknown or missing votes become NO_VOTE."""
        try:
            return cls(int(value))
        except (TypeError, ValueError):
            return cls.NO_VOTE


@dataclass
class User:
    """
    An Azure DevOps identity.

    Attributes:
        id: Identity ID (GUID)
        display_name: Display name
        unique_name: Usually the sign-in email
        image_url: Avatar URL, if any
    """

    id: str
    display_name: str
    unique_name: str = ""
    image_url: str | None = None

    @classmethod
    def from_json(cls, data: dict | None) -> "User":
        """Deserialize from an identity dict (missing identity yields an empty user)."""
        data = data or {}
        return cls(
            id=str(data.get("id", "")),
            display_name=data.get("displayName", ""),
            unique_name=data.get("uniqueName", ""),
            image_url=data.get("imageUrl"),
        )


@dataclass
class Reviewer(User):
    """A reviewer on a pull request, with their vote."""

    vote: PullRequestVote = PullRequestVote.NO_VOTE
    is_required: bool = False

    @classmethod
    def from_json(cls, data: dict | None) -> "Reviewer":
        data = data or {}
        return cls(
            id=str(data.get("id", "")),
            display_name=data.get("displayName", ""),
            unique_name=data.get("uniqueName", ""),
            image_url=data.get("imageUrl"),
            vote=PullRequestVote.from_value(data.get("vote", 0)),
            is_required=bool(data.get("isRequired", False)),
        )


@dataclass
class ProjectRef:
    """Project a repository belongs to."""

    id: str
    name: str


@dataclass
class Repository:
    """
    Git repository a pull request targets.

    Attributes:
        id: Repository ID (GUID), used by the REST threads API
        name: Repository name
        project: Owning project
    """

    id: str
    name: str
    project: ProjectRef

    @classmethod
    def from_json(cls, data: dict | None) -> "Repository":
        data = data or {}
        project = data.get("project") or {}
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name", ""),
            project=ProjectRef(id=str(project.get("id", "")), name=project.get("name", "")),
        )


@dataclass
class PullRequest:
    """
    Represents a pull request from Azure DevOps.

    Attributes:
        pull_request_id: Numeric PR ID
        title: PR title
        status: active, completed or abandoned
        creation_date: ISO 8601 timestamp
        created_by: Author identity
        reviewers: Reviewers with votes
        repository: Target repository
        source_ref_name: e.g. "refs/heads/feature/login"
        target_ref_name: e.g. "refs/heads/main"

    Example:
        pr = PullRequest.from_json(az_output)
        if pr.has_reviewer(user_id):
            print(f"#{pr.pull_request_id} {pr.source_branch} -> {pr.target_branch}")
    """

    pull_request_id: int
    title: str
    status: str
    creation_date: str
    created_by: User
    repository: Repository
    source_ref_name: str = ""
    target_ref_name: str = ""
    reviewers: list[Reviewer] = field(default_factory=list)
    description: str | None = None
    closed_date: str | None = None
    merge_status: str | None = None
    is_draft: bool = False
    url: str | None = None

    @property
    def source_branch(self) -> str:
        """Source branch name without the refs/heads/ prefix."""
        return self.source_ref_name.replace(BRANCH_PREFIX, "", 1)

    @property
    def target_branch(self) -> str:
        """Target branch name without the refs/heads/ prefix."""
        return self.target_ref_name.replace(BRANCH_PREFIX, "", 1)

    def has_reviewer(self, user_id: str) -> bool:
        """True if the given identity is among the reviewers."""
        return any(reviewer.id == user_id for reviewer in self.reviewers)

    @classmethod
    def from_json(cls, data: dict) -> "PullRequest":
        """
        Deserialize from `az repos pr` JSON output.

        Raises:
            KeyError: If pullRequestId is missing
        """
        return cls(
            pull_request_id=int(data["pullRequestId"]),
            title=data.get("title", ""),
            status=data.get("status", ""),
            creation_date=data.get("creationDate", ""),
            created_by=User.from_json(data.get("createdBy")),
            repository=Repository.from_json(data.get("repository")),
            source_ref_name=data.get("sourceRefName", ""),
            target_ref_name=data.get("targetRefName", ""),
            reviewers=[Reviewer.from_json(r) for r in data.get("reviewers") or []],
            description=data.get("description"),
            closed_date=data.get("closedDate"),
            merge_status=data.get("mergeStatus"),
            is_draft=bool(data.get("isDraft", False)),
            url=data.get("url"),
        )


@dataclass
class MyPRsOptions:
    """
    Filters for listing the current user's pull requests.

    Attributes:
        status: Status filter (ALL sends no --status argument)
        role: Author, reviewer, or both
        top: Maximum results per `az repos pr list` call (0 for the CLI default)
        repo: Optional repository name
        project: Optional project name
    """

    status: PullRequestStatus = PullRequestStatus.ACTIVE
    role: PullRequestRole = PullRequestRole.ALL
    top: int = 50
    repo: str | None = None
    project: str | None = None
