"""
Comment domain models

Represents pull request comment threads from the Azure DevOps REST API
(GET .../pullRequests/{id}/threads).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class CommentThreadStatus(str, Enum):
    """Thread status; anything unrecognized maps to UNKNOWN."""

    ACTIVE = "active"
    FIXED = "fixed"
    WONT_FIX = "wontFix"
    CLOSED = "closed"
    BY_DESIGN = "byDesign"
    PENDING = "pending"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: Any) -> "CommentThreadStatus":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class CommentType(str, Enum):
    TEXT = "text"
    CODE_CHANGE = "codeChange"
    SYSTEM = "system"

    @classmethod
    def from_value(cls, value: Any) -> "CommentType":
        try:
            return cls(value)
        except ValueError:
            return cls.TEXT


@dataclass
class Identity:
    id: str
    display_name: str
    unique_name: str | None = None
    image_url: str | None = None

    @classmethod
    def from_json(cls, data: dict | None) -> "Identity":
        data = data or {}
        return cls(
            id=str(data.get("id", "")),
            display_name=data.get("displayName", ""),
            unique_name=data.get("uniqueName"),
            image_url=data.get("imageUrl"),
        )


@dataclass
class FilePosition:
    line: int
    offset: int

    @classmethod
    def from_json(cls, data: dict | None) -> "FilePosition | None":
        if not data:
            return None
        return cls(line=int(data.get("line", 0)), offset=int(data.get("offset", 0)))


@dataclass
class CommentThreadContext:
    """
    Where in the diff a thread was started. Threads on the PR as a whole have no context.
    """

    file_path: str | None = None
    right_file_start: FilePosition | None = None
    right_file_end: FilePosition | None = None
    left_file_start: FilePosition | None = None
    left_file_end: FilePosition | None = None

    @classmethod
    def from_json(cls, data: dict | None) -> "CommentThreadContext | None":
        if not data:
            return None
        return cls(
            file_path=data.get("filePath"),
            right_file_start=FilePosition.from_json(data.get("rightFileStart")),
            right_file_end=FilePosition.from_json(data.get("rightFileEnd")),
            left_file_start=FilePosition.from_json(data.get("leftFileStart")),
            left_file_end=FilePosition.from_json(data.get("leftFileEnd")),
        )


@dataclass
class Comment:
    """
    A single comment in a thread.

    Attributes:
        id: Comment ID, unique within the thread
        parent_comment_id: ID of the comment this replies to (0 or None for root comments)
        content: Markdown body
        author: Comment author
        published_date: ISO 8601 timestamp
    """

    id: int
    content: str
    author: Identity
    published_date: str
    parent_comment_id: int | None = None
    last_updated_date: str | None = None
    comment_type: CommentType = CommentType.TEXT
    is_deleted: bool = False

    @property
    def is_reply(self) -> bool:
        return bool(self.parent_comment_id)

    @classmethod
    def from_json(cls, data: dict) -> "Comment":
        return cls(
            id=int(data.get("id", 0)),
            content=data.get("content") or "",
            author=Identity.from_json(data.get("author")),
            published_date=data.get("publishedDate", ""),
            parent_comment_id=data.get("parentCommentId"),
            last_updated_date=data.get("lastUpdatedDate"),
            comment_type=CommentType.from_value(data.get("commentType", "text")),
            is_deleted=bool(data.get("isDeleted", False)),
        )


@dataclass
class CommentThread:
    """
    A comment thread on a pull request.

    Example:
        threads = [CommentThread.from_json(t) for t in response.get("value", [])]
        open_threads = [t for t in threads if t.status is CommentThreadStatus.ACTIVE]
    """

    id: int
    published_date: str
    comments: list[Comment] = field(default_factory=list)
    status: CommentThreadStatus = CommentThreadStatus.UNKNOWN
    thread_context: CommentThreadContext | None = None
    last_updated_date: str | None = None
    properties: dict[str, Any] = field(default_factory=dict)
    is_deleted: bool = False

    @property
    def file_path(self) -> str | None:
        return self.thread_context.file_path if self.thread_context else None

    @classmethod
    def from_json(cls, data: dict) -> "CommentThread":
        return cls(
            id=int(data.get("id", 0)),
            published_date=data.get("publishedDate", ""),
            comments=[Comment.from_json(c) for c in data.get("comments") or []],
            status=CommentThreadStatus.from_value(data.get("status", "unknown")),
            thread_context=CommentThreadContext.from_json(data.get("threadContext")),
            last_updated_date=data.get("lastUpdatedDate"),
            properties=data.get("properties") or {},
            is_deleted=bool(data.get("isDeleted", False)),
        )


@dataclass
class PRCommentsOptions:
    """
    Options for fetching comment threads.

    Attributes:
        project: Project name (looked up from the PR when omitted)
        repo: Repository name (looked up from the PR when omitted)
        chronological: Oldest thread first instead of newest first
    """

    project: str | None = None
    repo: str | None = None
    chronological: bool = False
