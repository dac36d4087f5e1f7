"""Browse command implementation."""

import curses
import os
from importlib.metadata import PackageNotFoundError, version

from issue_explorer.browse.screen import Screen
from issue_explorer.browse.session import Session, SessionOptions
from issue_explorer.cache import IssueCache
from issue_explorer.config import get_github_config
from issue_explorer.github import GitHubClient


def get_title() -> str:
    try:
        return f"issue explorer {version('issue-explorer')}"
    except PackageNotFoundError:
        return "issue explorer"


def browse_repository(shorthand: str, state: str, config: dict) -> None:
    """Browse repository issues interactively."""
    # Escape is a cancel key; do not wait a full second for escape sequences
    os.environ.setdefault("ESCDELAY", "25")

    cache = IssueCache(
        GitHubClient.from_config(config), per_page=get_github_config(config)["per_page"]
    )
    options = SessionOptions(shorthand=shorthand, state=state)

    def run(stdscr):
        screen = Screen(stdscr, get_title())
        screen.setup()
        session = Session(options, cache, screen)
        try:
            session.run()
        finally:
            session.close()

    curses.wrapper(run)
