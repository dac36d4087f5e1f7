"""Shape issues into rows for the terminal tables."""

import textwrap
from datetime import datetime, timezone

from issue_explorer.models import IssueDetail, IssueSummary

UNASSIGNED = "~unassigned~"
BODY_WIDTH = 100
CONTINUER = " " * 16 + "---"
SEPARATOR = "-" * BODY_WIDTH


def _round(value: float) -> int:
    return int(value + 0.5)


def relative_time(timestamp: str, now: datetime | None = None) -> str:
    """Describe an ISO 8601 timestamp relative to now, e.g. "4 years ago"."""
    then = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    if then.tzinfo is None:
        then = then.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = max(0.0, (now - then).total_seconds())
    minutes = _round(seconds / 60)
    hours = _round(seconds / 3600)
    days = _round(seconds / 86400)

    if seconds < 45:
        text = "a few seconds"
    elif seconds < 90:
        text = "a minute"
    elif minutes < 45:
        text = f"{minutes} minutes"
    elif minutes < 90:
        text = "an hour"
    elif hours < 22:
        text = f"{hours} hours"
    elif hours < 36:
        text = "a day"
    elif days < 26:
        text = f"{days} days"
    elif days < 45:
        text = "a month"
    elif days < 320:
        text = f"{_round(days / 30.4375)} months"
    elif days < 548:
        text = "a year"
    else:
        text = f"{_round(days / 365.25)} years"
    return f"{text} ago"


def format_summaries(
    issues: list[IssueSummary], now: datetime | None = None
) -> list[tuple]:
    """
    Format issues for the issues table.

    Returns:
        One (number, title, reporter, assignee, updated) row per issue
    """
    return [
        (
            issue.number,
            issue.title,
            issue.author_login,
            issue.assignee_login or UNASSIGNED,
            relative_time(issue.updated_at, now),
        )
        for issue in issues
    ]


def wrap_body(body: str, width: int = BODY_WIDTH) -> list[str]:
    """Word-wrap text, keeping its line breaks. Never returns an empty list."""
    lines = []
    for paragraph in body.splitlines():
        wrapped = textwrap.wrap(paragraph, width=width, break_on_hyphens=True)
        lines.extend(wrapped or [""])
    return lines or [""]


def format_detail(issue: IssueDetail) -> list[tuple[str, str]]:
    """
    Format an issue and its comments for the issue table.

    Returns:
        (githubber, body line) rows. The author sits next to the first line
        of each entry; entries are closed off by a separator.
    """
    rows = []
    for comment in issue.transcript:
        for i, line in enumerate(wrap_body(comment.body)):
            rows.append((comment.author_login if i == 0 else CONTINUER, line))
        rows.extend([("", ""), (CONTINUER, SEPARATOR), ("", "")])
    return rows
