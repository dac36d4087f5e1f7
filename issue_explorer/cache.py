"""In-memory caches in front of the GitHub client.

Entries live for one browsing session. Lists grow page by page on request;
single issues are fetched once and never invalidated.
"""

import logging
from dataclasses import dataclass, field

import requests

from issue_explorer.errors import FetchFailed, GitHubError
from issue_explorer.github import GitHubClient
from issue_explorer.models import IssueDetail, IssueSummary
from issue_explorer.shorthand import ShorthandDescriptor

logger = logging.getLogger(__name__)

ISSUE_STATES = ("open", "closed", "all")


@dataclass
class IssueList:
    """Issues fetched so far for one repository."""

    state: str
    issues: list[IssueSummary] = field(default_factory=list)
    next_page: int = 1


class IssueCache:
    def __init__(self, client: GitHubClient, per_page: int = 30):
        self.client = client
        self.per_page = per_page
        self.lists: dict[str, IssueList] = {}
        self.details: dict[str, IssueDetail] = {}

    def fetch_list(
        self, descriptor: ShorthandDescriptor, state: str = "open", load_more: bool = False
    ) -> list[IssueSummary]:
        """
        Return the issues of a repository, fetching the next page when needed.

        Args:
            descriptor: Repository to list
            state: open / closed / all
            load_more: Fetch one more page even if issues are already cached

        Returns:
            Every issue fetched so far, in the order GitHub returned them

        Raises:
            FetchFailed: If GitHub could not be reached or refused the request
        """
        if state not in ISSUE_STATES:
            raise ValueError(f"state must be one of {', '.join(ISSUE_STATES)}, got: {state}")

        collection = self.lists.get(descriptor.key)
        if collection is not None and collection.state != state:
            # Pages of another state filter do not line up with this one
            collection = None

        if collection is not None and not load_more:
            logger.debug("cache hit: %s (%s)", descriptor.key, state)
            return collection.issues

        page = collection.next_page if collection is not None else 1
        try:
            raw_issues = self.client.list_issues(
                descriptor.owner,
                descriptor.repo_name,
                state=state,
                page=page,
                per_page=self.per_page,
            )
        except (GitHubError, requests.RequestException) as e:
            raise FetchFailed(e) from e

        if collection is None:
            collection = IssueList(state=state)
            self.lists[descriptor.key] = collection
        collection.issues.extend(IssueSummary.from_api(issue) for issue in raw_issues)
        collection.next_page = page + 1

        logger.debug(
            "fetched page %d of %s (%s): %d issues",
            page,
            descriptor.key,
            state,
            len(raw_issues),
        )
        return collection.issues

    def fetch_detail(
        self, descriptor: ShorthandDescriptor, number: int | None = None
    ) -> IssueDetail:
        """
        Return an issue with its comments.

        Args:
            descriptor: Repository of the issue
            number: Issue number, defaults to the one named by the descriptor

        Raises:
            FetchFailed: If either the issue or its comments could not be fetched
        """
        number = number or descriptor.issue_number
        if not number:
            raise ValueError(f"no issue number given for {descriptor.key}")

        cache_key = descriptor.issue_key(number)
        if cache_key in self.details:
            logger.debug("cache hit: %s", cache_key)
            return self.details[cache_key]

        try:
            issue = self.client.get_issue(descriptor.owner, descriptor.repo_name, number)
            comments = self.client.get_comments(
                descriptor.owner, descriptor.repo_name, number
            )
        except (GitHubError, requests.RequestException) as e:
            raise FetchFailed(e) from e

        detail = IssueDetail.from_api(issue, comments)
        self.details[cache_key] = detail
        return detail

    def clear(self) -> None:
        self.lists.clear()
        self.details.clear()
