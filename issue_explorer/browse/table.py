"""Navigable tables for the terminal UI.

A NavigableTable holds what the user sees and where the cursor is, and turns
key presses into ``select``, ``more`` and ``cancel`` events. Drawing is left
to a GridWidget so the state can be driven without a terminal.
"""

import curses
from collections import defaultdict
from typing import Any, Callable

EVENTS = ("select", "more", "cancel")
ENTER_KEYS = (curses.KEY_ENTER, 10, 13)
CANCEL_KEYS = (27, ord("q"))
MORE_KEY = ord(" ")

SELECTED_PAIR = 1
BORDER_PAIR = 2

TABLE_LAYOUTS: dict[str, dict[str, Any]] = {
    "issues": {
        "headers": ["#", "title", "reporter", "assignee", "updated at"],
        "column_widths": [5, 80, 15, 15, 15],
        "column_spacing": 1,
        "paginated": True,
    },
    "issue": {
        "headers": ["githubber", "body"],
        "column_widths": [20, 110],
        "column_spacing": 3,
        "paginated": False,
    },
}


def init_colors() -> None:
    """White on blue for the selected row, cyan borders."""
    if not curses.has_colors():
        return
    curses.start_color()
    curses.use_default_colors()
    curses.init_pair(SELECTED_PAIR, curses.COLOR_WHITE, curses.COLOR_BLUE)
    curses.init_pair(BORDER_PAIR, curses.COLOR_CYAN, -1)


def _attr(pair: int, fallback: int) -> int:
    if curses.has_colors():
        return curses.color_pair(pair)
    return fallback


class GridWidget:
    """Draws rows as fixed-width columns inside a labelled box."""

    def __init__(
        self, headers: list[str], column_widths: list[int], column_spacing: int = 1
    ):
        self.headers = headers
        self.column_widths = column_widths
        self.column_spacing = column_spacing
        # Rows that fit in the box, known after the first draw
        self.page_size = 10

    def format_row(self, row: tuple | list) -> str:
        cells = [
            str(value)[:width].ljust(width)
            for value, width in zip(row, self.column_widths)
        ]
        return (" " * self.column_spacing).join(cells).rstrip()

    def geometry(self, height: int, width: int) -> tuple[int, int, int, int]:
        """Return (top, left, height, width) of a box covering 80% of the screen."""
        box_height = max(5, min(height - 1, height * 8 // 10))
        box_width = max(20, min(width, width * 8 // 10))
        top = max(1, (height - box_height) // 2)
        left = max(0, (width - box_width) // 2)
        return top, left, box_height, box_width

    def draw(self, stdscr, rows: list[tuple], selected_index: int, label: str = "") -> None:
        height, width = stdscr.getmaxyx()
        top, left, box_height, box_width = self.geometry(height, width)
        if top + box_height > height or left + box_width > width:
            stdscr.addstr(0, 0, "terminal too small"[: width - 1])
            return

        win = stdscr.derwin(box_height, box_width, top, left)
        win.erase()
        win.attron(_attr(BORDER_PAIR, 0))
        win.box()
        win.attroff(_attr(BORDER_PAIR, 0))

        inner_width = box_width - 2
        if label:
            win.addnstr(0, 2, f" {label} ", max(0, box_width - 4))

        win.addnstr(
            1, 1, self.format_row(self.headers), inner_width, curses.A_BOLD | curses.A_UNDERLINE
        )

        visible_lines = box_height - 3
        self.page_size = max(1, visible_lines)

        # Keep the selected row inside the window
        if selected_index >= visible_lines:
            start_index = selected_index - visible_lines + 1
        else:
            start_index = 0

        for i in range(visible_lines):
            row_index = start_index + i
            if row_index >= len(rows):
                break
            text = self.format_row(rows[row_index])
            if row_index == selected_index:
                attr = _attr(SELECTED_PAIR, curses.A_REVERSE) | curses.A_BOLD
                win.addnstr(2 + i, 1, text.ljust(inner_width), inner_width, attr)
            else:
                win.addnstr(2 + i, 1, text, inner_width)


class NavigableTable:
    """A table the user can move through, reporting intents as events.

    Listeners are registered with ``on``:

    - ``select(row_text)``: Enter was pressed on a row
    - ``more()``: Space was pressed on a paginated table
    - ``cancel()``: Escape or ``q`` was pressed
    """

    def __init__(self, widget: GridWidget, paginated: bool = False):
        self.widget = widget
        self.paginated = paginated
        self.rows: list[tuple] = []
        self.selected_row_index = 0
        self.is_visible = False
        self.label = ""
        self._listeners: dict[str, list[Callable]] = defaultdict(list)

    def on(self, event: str, callback: Callable) -> "NavigableTable":
        if event not in EVENTS:
            raise ValueError(f"unknown table event: {event}")
        self._listeners[event].append(callback)
        return self

    def emit(self, event: str, *args) -> None:
        for callback in list(self._listeners[event]):
            callback(*args)

    def show(
        self, rows: list[tuple], label: str | None = None, reset_selection: bool = False
    ) -> "NavigableTable":
        self.rows = list(rows)
        if reset_selection:
            self.selected_row_index = 0
        self.select(self.selected_row_index)
        if label is not None:
            self.label = label
        self.is_visible = True
        return self

    def hide(self) -> "NavigableTable":
        self.is_visible = False
        return self

    def select(self, index: int) -> None:
        self.selected_row_index = max(0, min(index, len(self.rows) - 1))

    def move(self, delta: int) -> None:
        self.select(self.selected_row_index + delta)

    def selected_text(self) -> str | None:
        """Display text of the selected row."""
        if not self.rows:
            return None
        return " ".join(str(value) for value in self.rows[self.selected_row_index])

    def handle_key(self, key: int) -> bool:
        """Apply a key press. Returns False for keys the table does not use."""
        if key in (curses.KEY_UP, ord("k")):
            self.move(-1)
        elif key in (curses.KEY_DOWN, ord("j")):
            self.move(1)
        elif key == curses.KEY_PPAGE:
            self.move(-self.widget.page_size)
        elif key == curses.KEY_NPAGE:
            self.move(self.widget.page_size)
        elif key in (curses.KEY_HOME, ord("g")):
            self.select(0)
        elif key in (curses.KEY_END, ord("G")):
            self.select(len(self.rows) - 1)
        elif key in ENTER_KEYS:
            if self.rows:
                self.emit("select", self.selected_text())
        elif key == MORE_KEY:
            if not self.paginated:
                return False
            self.emit("more")
        elif key in CANCEL_KEYS:
            self.emit("cancel")
        else:
            return False
        return True

    def draw(self, stdscr) -> None:
        if self.is_visible:
            self.widget.draw(stdscr, self.rows, self.selected_row_index, self.label)


def create_table(name: str) -> NavigableTable:
    """Build the issues or issue table from its layout."""
    layout = TABLE_LAYOUTS[name]
    widget = GridWidget(layout["headers"], layout["column_widths"], layout["column_spacing"])
    return NavigableTable(widget, paginated=layout["paginated"])
