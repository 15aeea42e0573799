"""
Domain Models - Type-safe data structures parsed from Azure CLI / REST JSON

This package contains dataclasses representing business domain concepts:
    - auth: TokenSource, SubscriptionInfo, AuthenticationContext
    - pull_request: PullRequest, Reviewer, MyPRsOptions
    - comment: CommentThread, Comment, PRCommentsOptions

Usage:
    from azc.domain import PullRequest

    pr = PullRequest.from_json(data)
    if pr.is_draft:
        print(f"PR {pr.pull_request_id} is still a draft")
"""

from .auth import AuthenticationContext, SubscriptionInfo, TokenSource
from .comment import (
    Comment,
    CommentThread,
    CommentThreadContext,
    CommentThreadStatus,
    CommentType,
    FilePosition,
    Identity,
    PRCommentsOptions,
)
from .pull_request import (
    MyPRsOptions,
    ProjectRef,
    PullRequest,
    PullRequestRole,
    PullRequestStatus,
    PullRequestVote,
    Repository,
    Reviewer,
    User,
)

__all__ = [
    # Authentication
    "AuthenticationContext",
    "SubscriptionInfo",
    "TokenSource",
    # Pull requests
    "MyPRsOptions",
    "ProjectRef",
    "PullRequest",
    "PullRequestRole",
    "PullRequestStatus",
    "PullRequestVote",
    "Repository",
    "Reviewer",
    "User",
    # Comments
    "Comment",
    "CommentThread",
    "CommentThreadContext",
    "CommentThreadStatus",
    "CommentType",
    "FilePosition",
    "Identity",
    "PRCommentsOptions",
]
