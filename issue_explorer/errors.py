"""Exceptions raised by issue-explorer."""


class IssueExplorerError(Exception):
    """Base exception for issue-explorer."""

    pass


class MalformedShorthand(IssueExplorerError, ValueError):
    """Exception for shorthands that are not Username/Reponame[#Num]."""

    pass


class ShorthandUnavailable(IssueExplorerError):
    """Exception for when no shorthand was given and none could be implied."""

    pass


class ConfigError(IssueExplorerError, ValueError):
    """Exception for an unreadable configuration file."""

    pass


class GitHubError(IssueExplorerError):
    """Exception for non-successful GitHub API responses."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code} - {message}")
        self.status_code = status_code
        self.message = message


class FetchFailed(IssueExplorerError):
    """Exception for issues or comments that could not be fetched."""

    def __init__(self, cause: Exception):
        reason = cause.message if isinstance(cause, GitHubError) else str(cause)
        super().__init__(f"could not fetch: {reason}")
        self.cause = cause


class AuthFailed(IssueExplorerError):
    """Exception for an authorization flow that did not complete."""

    pass
