"""Pytest configuration and shared fixtures for issue-explorer tests."""

import logging
from collections import defaultdict
from typing import Any

import pytest

from issue_explorer.errors import GitHubError
from issue_explorer.shorthand import parse_shorthand


def make_issue(
    number: int,
    title: str | None = None,
    assignee: str | None = "UserName2",
    updated_at: str = "2011-04-22T13:33:48Z",
    body: str | None = "issue body",
) -> dict[str, Any]:
    """A GitHub REST issue payload, trimmed to the fields we read."""
    return {
        "number": number,
        "title": title or f"issue title {number}",
        "user": {"login": "UserName1"},
        "assignee": {"login": assignee} if assignee else None,
        "updated_at": updated_at,
        "body": body,
        "state": "open",
    }


def make_comment(login: str, body: str) -> dict[str, Any]:
    return {"id": 1, "user": {"login": login}, "body": body}


class FakeGitHubClient:
    """Stands in for GitHubClient, counting calls and serving generated pages."""

    def __init__(self, comments: list[dict[str, Any]] | None = None, fail_on: tuple = ()):
        self.comments = comments if comments is not None else [
            make_comment("UserName3", "first comment")
        ]
        self.fail_on = fail_on
        self.calls: dict[str, int] = defaultdict(int)
        self.list_requests: list[dict[str, Any]] = []

    def _record(self, name: str) -> None:
        self.calls[name] += 1
        if name in self.fail_on:
            raise GitHubError(404, "Not Found")

    def list_issues(self, owner, repo, state="open", page=1, per_page=30):
        self.list_requests.append({"state": state, "page": page, "per_page": per_page})
        self._record("list_issues")
        first = (page - 1) * per_page + 1
        return [make_issue(n) for n in range(first, first + per_page)]

    def get_issue(self, owner, repo, number):
        self._record("get_issue")
        return make_issue(number)

    def get_comments(self, owner, repo, number):
        self._record("get_comments")
        return list(self.comments)


class FakeScreen:
    """Records what the session asks the screen to do; replays queued keys."""

    def __init__(self, keys: list[int] | None = None):
        self.keys = list(keys or [])
        self.loading_message = None
        self.loading_history: list[str] = []
        self.errors: list[str] = []
        self.renders: list[tuple[Any, str]] = []

    def read_key(self) -> int:
        if not self.keys:
            raise KeyboardInterrupt
        return self.keys.pop(0)

    def render(self, table, help_text=""):
        self.renders.append((table, help_text))

    def show_loading(self, message):
        self.loading_message = message
        self.loading_history.append(message)

    def hide_loading(self):
        self.loading_message = None

    def show_error(self, message):
        self.loading_message = None
        self.errors.append(message)
        return 10


@pytest.fixture
def issue_payload() -> dict[str, Any]:
    return make_issue(1, title="issue title")


@pytest.fixture
def issue_factory():
    return make_issue


@pytest.fixture
def comment_factory():
    return make_comment


@pytest.fixture
def fake_client() -> FakeGitHubClient:
    return FakeGitHubClient()


@pytest.fixture
def fake_client_factory():
    return FakeGitHubClient


@pytest.fixture
def fake_screen_factory():
    return FakeScreen


@pytest.fixture
def repo_descriptor():
    return parse_shorthand("Username/Reponame")


@pytest.fixture
def test_config(tmp_path) -> dict[str, Any]:
    """Configuration that keeps credentials and logs inside tmp_path."""
    from issue_explorer.config import DEFAULT_CONFIG, merge_config

    return merge_config(
        DEFAULT_CONFIG,
        {
            "auth": {"credentials_file": str(tmp_path / "credentials")},
            "log": {"file": str(tmp_path / "issue-explorer.log")},
        },
    )


@pytest.fixture(autouse=True)
def reset_error_log():
    """Detach the log file handler that setup_logging leaves on the package logger."""
    from issue_explorer.log import logger

    yield
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
