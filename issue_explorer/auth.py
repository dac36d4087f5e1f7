"""Authenticate issue-explorer with GitHub."""

import getpass
from pathlib import Path
from typing import Any, Callable

import requests

from issue_explorer.config import save_credentials
from issue_explorer.errors import AuthFailed, GitHubError
from issue_explorer.github import GitHubClient

TOKEN_URL = "https://github.com/settings/tokens"


def prompt_credentials(
    ask: Callable[[str], str] = input, ask_secret: Callable[[str], str] = getpass.getpass
) -> dict[str, str]:
    """Ask for a GitHub username and personal access token until both are given."""
    username = ""
    while not username:
        username = ask("❓ Github username: ").strip()
        if not username:
            print("❌ invalid username")

    token = ""
    while not token:
        token = ask_secret("❓ Personal access token: ").strip()
        if not token:
            print("❌ invalid token")

    return {"username": username, "token": token}


def authorize(username: str, token: str, client: GitHubClient, config: dict[str, Any]) -> Path:
    """
    Verify a token against GitHub and store it.

    Args:
        username: GitHub login the token should belong to
        token: Personal access token
        client: Client to verify the token with
        config: Configuration naming the credentials file

    Returns:
        Path of the written credentials file

    Raises:
        AuthFailed: If GitHub rejects the token or it belongs to someone else.
            Nothing is written in that case.
    """
    try:
        user = client.get_authenticated_user(token=token)
    except GitHubError as e:
        raise AuthFailed(f"GitHub rejected the token: {e.message}") from e
    except requests.RequestException as e:
        raise AuthFailed(f"could not reach GitHub: {e}") from e

    login = user.get("login", "")
    if login.lower() != username.lower():
        raise AuthFailed(f"token belongs to {login!r}, not {username!r}")

    path = save_credentials(login, token, config)
    client.token = token
    return path
