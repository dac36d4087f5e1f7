"""Curses screen: title bar, tables, loading box, messages and status line."""

import curses
import textwrap

from issue_explorer.browse.table import NavigableTable, init_colors


class Screen:
    def __init__(self, stdscr, title: str = "issue explorer"):
        self.stdscr = stdscr
        self.title = title
        self.loading_message: str | None = None

    def setup(self) -> None:
        curses.curs_set(0)  # Hide cursor
        self.stdscr.keypad(True)
        self.stdscr.nodelay(False)  # Block while waiting for keys
        self.stdscr.timeout(-1)
        init_colors()

    def read_key(self) -> int:
        return self.stdscr.getch()

    def _draw_title(self) -> None:
        _, width = self.stdscr.getmaxyx()
        title = f"< {self.title} >"[: width - 1]
        self.stdscr.addstr(0, max(0, (width - len(title)) // 2), title, curses.A_BOLD)

    def _draw_status(self, text: str) -> None:
        height, width = self.stdscr.getmaxyx()
        self.stdscr.addnstr(height - 1, 0, text, width - 1, curses.A_BOLD)

    def _draw_box(self, lines: list[str], box_width: int, attr: int = 0) -> None:
        height, width = self.stdscr.getmaxyx()
        box_width = min(box_width, width)
        box_height = min(len(lines) + 2, height)
        top = max(0, (height - box_height) // 2)
        left = max(0, (width - box_width) // 2)

        win = self.stdscr.derwin(box_height, box_width, top, left)
        win.erase()
        win.box()
        for i, line in enumerate(lines[: box_height - 2]):
            win.addnstr(1 + i, 1, line.center(box_width - 2), box_width - 2, attr)

    def render(self, table: NavigableTable | None, help_text: str = "") -> None:
        """Redraw the whole screen with the given table in front."""
        self.stdscr.erase()
        self._draw_title()
        if self.loading_message is not None:
            self._draw_box([self.loading_message], 40)
        elif table is not None:
            table.draw(self.stdscr)
        if help_text:
            self._draw_status(help_text)
        self.stdscr.refresh()

    def show_loading(self, message: str) -> None:
        """Replace the active table with a loading box until hide_loading."""
        self.loading_message = message
        self.render(None)

    def hide_loading(self) -> None:
        self.loading_message = None

    def show_message(self, message: str, attr: int = 0) -> int:
        """Show a message box and wait for a key press, which is returned."""
        self.loading_message = None
        self.stdscr.erase()
        self._draw_title()
        _, width = self.stdscr.getmaxyx()
        box_width = min(80, width)
        lines = textwrap.wrap(message, width=max(10, box_width - 4)) or [""]
        lines += ["", "press any key"]
        self._draw_box(lines, box_width, attr)
        self.stdscr.refresh()
        return self.read_key()

    def show_error(self, message: str) -> int:
        return self.show_message(f"Error: {message}", curses.A_BOLD)
