"""Issue data shaped from GitHub REST API payloads."""

from dataclasses import dataclass, field
from typing import Any


def _login(user: dict[str, Any] | None) -> str:
    # Deleted accounts come back as null users
    return user["login"] if user else "ghost"


@dataclass
class IssueSummary:
    """One row of the issues table."""

    number: int
    title: str
    author_login: str
    assignee_login: str | None
    updated_at: str

    @classmethod
    def from_api(cls, issue: dict[str, Any]) -> "IssueSummary":
        assignee = issue.get("assignee")
        return cls(
            number=issue["number"],
            title=issue["title"],
            author_login=_login(issue.get("user")),
            assignee_login=assignee["login"] if assignee else None,
            updated_at=issue["updated_at"],
        )


@dataclass
class Comment:
    author_login: str
    body: str

    @classmethod
    def from_api(cls, comment: dict[str, Any]) -> "Comment":
        return cls(author_login=_login(comment.get("user")), body=comment.get("body") or "")


@dataclass
class IssueDetail(IssueSummary):
    """An issue together with its body and comments."""

    body: str = ""
    comments: list[Comment] = field(default_factory=list)

    @classmethod
    def from_api(
        cls, issue: dict[str, Any], comments: list[dict[str, Any]] | None = None
    ) -> "IssueDetail":
        summary = IssueSummary.from_api(issue)
        return cls(
            number=summary.number,
            title=summary.title,
            author_login=summary.author_login,
            assignee_login=summary.assignee_login,
            updated_at=summary.updated_at,
            body=issue.get("body") or "",
            comments=[Comment.from_api(comment) for comment in comments or []],
        )

    @property
    def transcript(self) -> list[Comment]:
        """The issue body as the opening comment, followed by the comments."""
        return [Comment(self.author_login, self.body), *self.comments]
