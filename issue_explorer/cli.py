#!/usr/bin/env python3
"""Main CLI entry point for issue-explorer."""

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

from issue_explorer.auth import TOKEN_URL, authorize, prompt_credentials
from issue_explorer.browse.command import browse_repository
from issue_explorer.config import get_config
from issue_explorer.errors import AuthFailed, MalformedShorthand, ShorthandUnavailable
from issue_explorer.github import GitHubClient
from issue_explorer.log import append_error_log, setup_logging
from issue_explorer.shorthand import SHORTHAND_FORMATS, get_shorthand_from_git, parse_shorthand

HOMEPAGE = "https://github.com/GochoMugo/issue-explorer"


def get_version() -> str:
    try:
        return version("issue-explorer")
    except PackageNotFoundError:
        return "unknown"


def print_shorthand_help() -> None:
    print("❌ valid formats include:")
    for fmt in SHORTHAND_FORMATS:
        print(f"   {fmt}")


def ensure_shorthand(shorthand: str | None) -> str:
    """Return the given shorthand, or the one implied by the current directory."""
    if shorthand:
        return shorthand

    try:
        return get_shorthand_from_git(Path.cwd())
    except ShorthandUnavailable as e:
        print(f"❌ no shorthand given/implied: {e}")
        print_shorthand_help()
        print("❌ the current working directory must be a git checkout for implied shorthands")
        sys.exit(1)


def cmd_browse(shorthand: str | None, state: str, config: dict) -> None:
    """Browse issues of a repository in the given state."""
    shorthand = ensure_shorthand(shorthand)
    try:
        parse_shorthand(shorthand)
    except MalformedShorthand as e:
        print(f"❌ {e}")
        print_shorthand_help()
        sys.exit(1)

    browse_repository(shorthand, state, config)


def cmd_auth(config: dict) -> None:
    """Prompt for credentials, verify and store them."""
    credentials = prompt_credentials()
    print("🔑 authorizing...")
    try:
        path = authorize(
            credentials["username"],
            credentials["token"],
            GitHubClient.from_config(config),
            config,
        )
    except AuthFailed as e:
        print(f"❌ authorization did not complete successfully: {e}")
        sys.exit(1)

    print(f"✅ issue-explorer authorized, credentials saved to {path}")
    print(f"💡 you can always update/revoke access tokens at {TOKEN_URL}")
    print("💡 go out and explore more!")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issue-explorer",
        description="issue-explorer - browse Github issues from your terminal",
        epilog=f"see {HOMEPAGE} for feature-requests and issues",
    )

    actions = parser.add_mutually_exclusive_group()
    actions.add_argument(
        "-a", "--all", nargs="?", const="", metavar="SHORTHAND", help="open+closed issues"
    )
    actions.add_argument(
        "-o", "--open", nargs="?", const="", metavar="SHORTHAND", help="open issues"
    )
    actions.add_argument(
        "-c", "--closed", nargs="?", const="", metavar="SHORTHAND", help="closed issues"
    )
    actions.add_argument(
        "-t", "--auth", action="store_true", help="authenticate with Github"
    )

    parser.add_argument(
        "--config",
        help="Path to config.toml file (default: ./config.toml, if present)",
    )
    parser.add_argument("--version", action="version", version=get_version())
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = get_config(args.config)
        setup_logging(config)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ {e}")
        sys.exit(1)

    try:
        if args.auth:
            cmd_auth(config)
        elif args.all is not None:
            cmd_browse(args.all, "all", config)
        elif args.open is not None:
            cmd_browse(args.open, "open", config)
        elif args.closed is not None:
            cmd_browse(args.closed, "closed", config)
        else:
            parser.print_help()
    except KeyboardInterrupt:
        print("\n🛑 Interrupted")
        sys.exit(130)
    except Exception as e:
        print("❌ an error occurred")
        print(f"    {e}")
        append_error_log(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
