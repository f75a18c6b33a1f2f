"""Thread-safe wrapper around a curses window, and screen setup."""

from __future__ import annotations

import curses
import locale
import threading

_lock = threading.Lock()

_COLOR_PAIRS = (
    (1, curses.COLOR_WHITE),
    (2, curses.COLOR_RED),
    (3, curses.COLOR_GREEN),
    (4, curses.COLOR_YELLOW),
    (5, curses.COLOR_BLUE),
    (6, curses.COLOR_MAGENTA),
    (7, curses.COLOR_CYAN),
)


class Window:
    """A curses window whose drawing calls are serialised by one shared lock."""

    def __init__(self, win) -> None:
        self.win = win
        self.rows, self.cols = win.getmaxyx()
        self._current_row = 0

    @property
    def current_row(self) -> int:
        """Number of lines written by ``printw`` since the last wrap."""
        return self._current_row

    def add_str(self, y: int, x: int, text: str) -> None:
        with _lock:
            self.win.addstr(y, x, text)

    def add_cstr(self, y: int, x: int, text: str, color: int) -> None:
        """Write ``text`` at (y, x) in colour pair ``color``."""
        attr = curses.color_pair(color)
        with _lock:
            self.win.attron(attr)
            self.win.addstr(y, x, text)
            self.win.attroff(attr)

    def printw(self, text: str) -> None:
        """Append text, clearing the window once it has filled up."""
        with _lock:
            if self._current_row >= self.rows:
                self._current_row = 0
                self.win.clear()
            self._current_row += text.count("\n")
            self.win.addstr(text)
            self.win.refresh()

    def clear(self) -> None:
        with _lock:
            self.win.clear()

    def refresh(self) -> None:
        with _lock:
            self.win.refresh()


def init_screen():
    """Start curses with colour pairs 1 to 7 on black; return the main screen."""
    locale.setlocale(locale.LC_ALL, "")
    stdscr = curses.initscr()
    curses.start_color()
    for index, foreground in _COLOR_PAIRS:
        curses.init_pair(index, foreground, curses.COLOR_BLACK)
    return stdscr


def close_screen() -> None:
    curses.endwin()