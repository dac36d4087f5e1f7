"""Parse GitHub shorthands such as ``GochoMugo/issue-explorer#1``."""

import re
import subprocess
from dataclasses import dataclass
from pathlib import Path

from issue_explorer.errors import MalformedShorthand, ShorthandUnavailable

SHORTHAND_FORMATS = [
    "Username/Reponame e.g. GochoMugo/issue-explorer",
    "Username/Reponame#Num e.g. GochoMugo/issue-explorer#1",
]

_ISSUE_NUMBER = re.compile(r"\d+", re.ASCII)
_ISSUE_STRING = re.compile(r"^\s*(\d+)", re.ASCII)
_GITHUB_REMOTE = re.compile(
    r"github\.com[:/]+(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?)(?:\.git)?/?$"
)


@dataclass(frozen=True)
class ShorthandDescriptor:
    """Structured form of a shorthand.

    Attributes:
        owner: User or organisation owning the repository
        repo_name: Name of the repository
        issue_number: Targeted issue, None when the whole repository is targeted
    """

    owner: str
    repo_name: str
    issue_number: int | None = None

    @property
    def key(self) -> str:
        """Repository identity, used to partition caches."""
        return f"{self.owner}/{self.repo_name}"

    def issue_key(self, number: int) -> str:
        return f"{self.key}#{number}"


def parse_shorthand(shorthand: str) -> ShorthandDescriptor:
    """
    Parse a shorthand into a descriptor.

    Args:
        shorthand: ``Username/Reponame`` or ``Username/Reponame#Num``

    Returns:
        The parsed descriptor

    Raises:
        MalformedShorthand: If the slash is missing, the hash comes before
            the slash, the user or repo name is empty, or the issue
            number is not a positive integer
    """
    slash_index = shorthand.find("/")
    if slash_index == -1:
        raise MalformedShorthand(
            f"invalid shorthand: slash missing from shorthand: {shorthand}"
        )

    hash_index = shorthand.find("#")
    if hash_index != -1 and hash_index <= slash_index:
        raise MalformedShorthand(f"invalid shorthand: hash before slash: {shorthand}")

    end_index = len(shorthand) if hash_index == -1 else hash_index
    owner = shorthand[:slash_index]
    repo_name = shorthand[slash_index + 1 : end_index]
    if not owner or not repo_name:
        raise MalformedShorthand(
            f"invalid shorthand: missing user or repo name: {shorthand}"
        )

    number = None
    if hash_index != -1:
        raw_number = shorthand[hash_index + 1 :]
        if not _ISSUE_NUMBER.fullmatch(raw_number):
            raise MalformedShorthand(
                f"invalid shorthand: issue number is not a number: {shorthand}"
            )
        number = int(raw_number)
        if number == 0:
            raise MalformedShorthand(
                f"invalid shorthand: issue number can not be Zero: {shorthand}"
            )

    return ShorthandDescriptor(owner=owner, repo_name=repo_name, issue_number=number)


def targets_one_issue(shorthand: str) -> bool:
    """Return True if the shorthand names a single issue."""
    return "#" in shorthand


def parse_issue_string(issue_string: str) -> int:
    """Return the issue number leading a row of the issues table."""
    match = _ISSUE_STRING.match(issue_string)
    if not match:
        raise ValueError(f"no issue number in: {issue_string!r}")
    return int(match.group(1))


def shorthand_from_remote_url(url: str) -> str | None:
    """Return ``owner/repo`` for a GitHub remote URL, None for other hosts."""
    match = _GITHUB_REMOTE.search(url.strip())
    if not match:
        return None
    return f"{match.group('owner')}/{match.group('repo')}"


def get_shorthand_from_git(path: str | Path) -> str:
    """
    Imply the repository shorthand from the origin remote of a git checkout.

    Args:
        path: Directory inside the checkout

    Returns:
        Shorthand of the form ``Username/Reponame``

    Raises:
        ShorthandUnavailable: If there is no GitHub origin remote to read
    """
    try:
        result = subprocess.run(
            ["git", "config", "--get", "remote.origin.url"],
            cwd=str(path),
            capture_output=True,
            text=True,
        )
    except (FileNotFoundError, NotADirectoryError) as e:
        raise ShorthandUnavailable(f"could not run git in {path}: {e}") from e

    if result.returncode != 0 or not result.stdout.strip():
        raise ShorthandUnavailable(f"no origin remote found in {path}")

    shorthand = shorthand_from_remote_url(result.stdout)
    if shorthand is None:
        raise ShorthandUnavailable(
            f"origin remote is not a GitHub repository: {result.stdout.strip()}"
        )
    return shorthand
