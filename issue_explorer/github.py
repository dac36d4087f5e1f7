"""Minimal GitHub REST API client."""

import logging
from typing import Any

import requests

from issue_explorer.config import get_github_config, load_credentials
from issue_explorer.errors import GitHubError

logger = logging.getLogger(__name__)


class GitHubClient:
    """Issues endpoints of the GitHub REST API, optionally token-authenticated."""

    def __init__(
        self,
        token: str | None = None,
        api_url: str = "https://api.github.com",
        timeout: float | None = None,
        user_agent: str = "issue-explorer",
    ):
        self.token = token
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "GitHubClient":
        """Build a client from config, authenticated with stored credentials if any."""
        github_config = get_github_config(config)
        credentials = load_credentials(config)
        return cls(
            token=credentials["token"] if credentials else None,
            api_url=github_config["api_url"],
            timeout=github_config["timeout"],
            user_agent=github_config["user_agent"],
        )

    def get_headers(self, token: str | None = None) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": self.user_agent,
        }
        token = token or self.token
        if token:
            headers["Authorization"] = f"token {token}"
        return headers

    def get(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        token: str | None = None,
    ) -> Any:
        """
        GET an API endpoint and decode the JSON body.

        Raises:
            GitHubError: If GitHub answers with a non-2xx status
            requests.RequestException: On network failures
        """
        url = f"{self.api_url}/{endpoint.lstrip('/')}"
        logger.debug("GET %s params=%s", url, params)

        response = requests.get(
            url, headers=self.get_headers(token), params=params, timeout=self.timeout
        )

        if not response.ok:
            try:
                message = response.json().get("message", response.reason)
            except ValueError:
                message = response.text or response.reason
            logger.debug("GET %s failed: %s %s", url, response.status_code, message)
            raise GitHubError(response.status_code, message)

        return response.json()

    def list_issues(
        self, owner: str, repo: str, state: str = "open", page: int = 1, per_page: int = 30
    ) -> list[dict[str, Any]]:
        """List one page of a repository's issues."""
        return self.get(
            f"repos/{owner}/{repo}/issues",
            {"state": state, "page": page, "per_page": per_page},
        )

    def get_issue(self, owner: str, repo: str, number: int) -> dict[str, Any]:
        return self.get(f"repos/{owner}/{repo}/issues/{number}")

    def get_comments(self, owner: str, repo: str, number: int) -> list[dict[str, Any]]:
        """Fetch all comments of an issue, following pages until one comes back short."""
        all_comments = []
        page = 1

        while True:
            comments = self.get(
                f"repos/{owner}/{repo}/issues/{number}/comments",
                {"per_page": 100, "page": page},
            )
            all_comments.extend(comments)
            if len(comments) < 100:
                break
            page += 1

        return all_comments

    def get_authenticated_user(self, token: str | None = None) -> dict[str, Any]:
        """Return the user a token belongs to."""
        return self.get("user", token=token)
