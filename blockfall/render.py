"""Drawing game screens as text or into a curses window."""

from __future__ import annotations

from blockfall.matrix import Matrix

COLOR_NORMAL = "\033[0m"
COLOR_BLACK = "\033[0;1;30m"
COLOR_RED = "\033[0;1;31m"
COLOR_GREEN = "\033[0;1;32m"
COLOR_YELLOW = "\033[0;1;33m"
COLOR_BLUE = "\033[0;1;34m"
COLOR_MAGENTA = "\033[0;1;35m"
COLOR_CYAN = "\033[0;1;36m"
COLOR_WHITE = "\033[0;1;37m"
B_COLOR_BLACK = "\033[0;1;40m"

_GLYPHS = {
    0: "□",
    1: "■",
    10: "◈",
    20: "★",
    30: "●",
    40: "◆",
    50: "▲",
    60: "♣",
    70: "♥",
}


def glyph(value: int) -> str:
    """The symbol drawn for a cell value; unknown values are drawn as XX."""
    return _GLYPHS.get(value, "XX")


def render_numbered(screen: Matrix, wall_depth: int) -> str:
    """The play area without walls, with column numbers on top and row numbers on the right."""
    cells = screen.to_lists()
    dw = wall_depth
    width = screen.cols - 2 * dw
    lines = ["".join(f"0{x} " for x in range(width))]
    for y, row in enumerate(cells[dw:screen.rows - dw]):
        body = "".join(f"{glyph(v)} " for v in row[dw:screen.cols - dw])
        lines.append(f"{body}0{y} ")
    return "\n".join(lines) + "\n"


def render_text(screen: Matrix, wall_depth: int) -> str:
    """The screen from the top down to the first floor row, with one wall column on each side."""
    dw = wall_depth
    lines = [
        "".join(f"{glyph(v)} " for v in row[dw - 1:screen.cols - dw + 1])
        for row in screen.to_lists()[:screen.rows - dw + 1]
    ]
    return "".join(line + "\n" for line in lines)


def draw_window(screen: Matrix, wall_depth: int, window) -> None:
    """Draw the screen into a window, colouring cells by value // 10."""
    dw = wall_depth
    window.clear()
    for y, row in enumerate(screen.to_lists()[:screen.rows - dw + 1]):
        for x in range(dw - 1, screen.cols - dw + 1):
            value = row[x]
            col = x - dw + 1
            if value == 0:
                window.add_str(y, col, "□")
            elif value == 1:
                window.add_str(y, col, "■")
            elif value >= 10:
                window.add_cstr(y, col, "■", value // 10)
            else:
                window.add_str(y, col, "◈")
    window.refresh()