"""Interactive browsing session.

The session moves between two views. The issues list is the home view and
always sits at the bottom of the view stack; a single issue is pushed on top
of it and popped off again on cancel. Fetches run synchronously inside key
handlers while the loading box is up, so no input is read during a fetch.
"""

import curses
from dataclasses import dataclass
from typing import Any, Callable

from issue_explorer.browse.screen import Screen
from issue_explorer.browse.table import NavigableTable, create_table
from issue_explorer.cache import IssueCache
from issue_explorer.errors import FetchFailed
from issue_explorer.formatting import format_detail, format_summaries
from issue_explorer.shorthand import parse_issue_string, parse_shorthand, targets_one_issue

LIST_VIEW = "issues"
DETAIL_VIEW = "issue"
CTRL_C = 3

HELP_TEXT = {
    LIST_VIEW: "↑↓: Navigate | Enter: Open issue | Space: Load more | Ctrl-C: Quit",
    DETAIL_VIEW: "↑↓: Scroll | Esc/q: Back to issues | Ctrl-C: Quit",
}


@dataclass(frozen=True)
class SessionOptions:
    shorthand: str
    state: str = "open"


class ViewStack:
    """The issues view at the bottom, at most one issue view above it."""

    def __init__(self, base: str = LIST_VIEW):
        self._views = [base]

    @property
    def top(self) -> str:
        return self._views[-1]

    @property
    def base(self) -> str:
        return self._views[0]

    def push(self, view: str) -> None:
        if view != self.top:
            self._views.append(view)

    def pop(self) -> str | None:
        """Leave the top view. The home view is never left; None is returned."""
        if len(self._views) == 1:
            return None
        return self._views.pop()

    def __len__(self) -> int:
        return len(self._views)


class Session:
    def __init__(self, options: SessionOptions, cache: IssueCache, screen: Screen):
        self.options = options
        self.descriptor = parse_shorthand(options.shorthand)
        self.cache = cache
        self.screen = screen
        self.views = ViewStack()
        self.status_message = ""
        self.running = False
        self._tables: dict[str, NavigableTable] = {}

    def get_table(self, name: str) -> NavigableTable:
        """Return the issues or issue table, creating and wiring it on first use."""
        if name not in self._tables:
            table = create_table(name)
            if name == LIST_VIEW:
                table.on("select", self.on_select).on("more", self.on_more)
            table.on("cancel", self.on_cancel)
            self._tables[name] = table
        return self._tables[name]

    def handle_error(self, err: Exception) -> None:
        """Show the error, then give up: fetch errors end the session."""
        self.screen.show_error(str(err))
        raise err

    def _fetch(self, message: str, fetch: Callable, *args, **kwargs) -> Any:
        self.screen.show_loading(message)
        try:
            return fetch(*args, **kwargs)
        except FetchFailed as e:
            self.handle_error(e)
        finally:
            self.screen.hide_loading()

    def show_issues(self, load_more: bool = False) -> None:
        """List mode: fetch the issues (or one more page of them) and show them."""
        issues = self._fetch(
            "fetching issues...",
            self.cache.fetch_list,
            self.descriptor,
            self.options.state,
            load_more=load_more,
        )
        if DETAIL_VIEW in self._tables:
            self.get_table(DETAIL_VIEW).hide()
        self.get_table(LIST_VIEW).show(
            format_summaries(issues),
            label=f"{self.descriptor.key} ({self.options.state})",
        )
        self.status_message = f"{len(issues)} issues" if issues else "No issues found"
        self.render()

    def show_issue(self, number: int) -> None:
        """Detail mode: fetch one issue with its comments and show it."""
        issue = self._fetch(
            "fetching issue...", self.cache.fetch_detail, self.descriptor, number
        )
        if LIST_VIEW in self._tables:
            self.get_table(LIST_VIEW).hide()
        self.get_table(DETAIL_VIEW).show(
            format_detail(issue),
            label=f"{self.descriptor.issue_key(number)}: {issue.title}",
            reset_selection=True,
        )
        self.views.push(DETAIL_VIEW)
        self.status_message = ""
        self.render()

    def on_select(self, issue_string: str) -> None:
        self.show_issue(parse_issue_string(issue_string))

    def on_more(self) -> None:
        self.show_issues(load_more=True)

    def on_cancel(self) -> None:
        if self.views.pop() is None:
            return
        self.show_issues()

    def render(self) -> None:
        view = self.views.top
        help_text = HELP_TEXT[view]
        if self.status_message:
            help_text = f"{self.status_message} | {help_text}"
        self.screen.render(self.get_table(view), help_text)

    def start(self) -> None:
        if targets_one_issue(self.options.shorthand):
            self.show_issue(self.descriptor.issue_number)
        else:
            self.show_issues()

    def handle_key(self, key: int) -> None:
        if key == CTRL_C:
            self.running = False
            return
        if key == curses.KEY_RESIZE:
            self.render()
            return
        if self.get_table(self.views.top).handle_key(key):
            self.render()

    def run(self) -> None:
        """Show the first view, then dispatch key presses until the user quits."""
        self.running = True
        self.start()
        try:
            while self.running:
                self.handle_key(self.screen.read_key())
        except KeyboardInterrupt:
            self.running = False

    def close(self) -> None:
        self.running = False
        self.cache.clear()
