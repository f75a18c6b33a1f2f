"""Two coloured boards side by side, played with separate halves of the keyboard."""

from __future__ import annotations

import curses
import sys
import time
from collections.abc import Callable

from blockfall.blocks import TetrisState, color_blocks
from blockfall.ctetris import ColorTetris
from blockfall.keys import QUIT_KEY, KeySource, parse_mode
from blockfall.render import draw_window
from blockfall.window import Window, close_screen, init_screen

LEFT_KEYS = frozenset("awds ")
RIGHT_KEYS = frozenset("jilk\r")

_PROG = "blockfall-duel"
_USAGE = f"usage: {_PROG} [normal/record/replay]"


class Duel:
    """A left board played with a/w/d/s/space and a right one with j/i/l/k/return."""

    def __init__(self, left: ColorTetris | None = None, right: ColorTetris | None = None) -> None:
        self.left = left if left is not None else ColorTetris(10, 10, color_blocks())
        self.right = right if right is not None else ColorTetris(10, 10, color_blocks())
        self.left_state = self.left.state
        self.right_state = self.right.state

    def start(self, key: str) -> tuple[TetrisState, TetrisState]:
        """Bring the same first block into both boards."""
        self.left_state = self.left.accept(key)
        self.right_state = self.right.accept(key)
        return self.left_state, self.right_state

    def board_for(self, key: str) -> ColorTetris | None:
        """The board that ``key`` moves, or None."""
        if key in LEFT_KEYS:
            return self.left
        if key in RIGHT_KEYS:
            return self.right
        return None

    def _play(
        self,
        board: ColorTetris,
        state: TetrisState,
        key: str,
        next_key: Callable[[TetrisState], str],
    ) -> tuple[TetrisState, bool]:
        if state is TetrisState.FINISHED:
            return state, True
        state = board.accept(key)
        if state is TetrisState.NEW_BLOCK:
            block_key = next_key(state)
            if block_key == QUIT_KEY:
                return state, False
            state = board.accept(block_key)
            if state is TetrisState.FINISHED:
                return state, False
        return state, True

    def step(self, key: str, next_key: Callable[[TetrisState], str]) -> bool:
        """Apply ``key`` to its board; return False once the game should end.

        When a block lands, ``next_key`` is asked for the next block's key.
        """
        if key == QUIT_KEY:
            return False
        if key in LEFT_KEYS:
            self.left_state, go_on = self._play(self.left, self.left_state, key, next_key)
        elif key in RIGHT_KEYS:
            self.right_state, go_on = self._play(self.right, self.right_state, key, next_key)
        else:
            go_on = True
        return go_on


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 1:
        print(_USAGE)
        return 1
    try:
        mode = parse_mode(args[0])
    except ValueError:
        print(_USAGE)
        return 1
    print(f"{mode.value} mode on!")

    duel = Duel()
    init_screen()
    try:
        with KeySource(mode) as keys:
            bottom = Window(curses.newwin(3, 60, 12, 0))
            left_win = Window(curses.newwin(12, 30, 0, 0))
            right_win = Window(curses.newwin(12, 30, 0, 30))
            bottom.printw("1234567890" * 6)
            bottom.printw("Program started!\n")

            def draw() -> None:
                draw_window(duel.left.color_screen, duel.left.wall_depth, left_win)
                draw_window(duel.right.color_screen, duel.right.wall_depth, right_win)

            try:
                duel.start(keys.next_key(TetrisState.NEW_BLOCK))
                draw()
                while True:
                    key = keys.next_key(duel.left_state)
                    if key == QUIT_KEY:
                        break
                    go_on = duel.step(key, keys.next_key)
                    draw()
                    if not go_on:
                        break
            except EOFError:
                pass
            bottom.printw("Program terminated!\n")
            time.sleep(5)
    finally:
        close_screen()
    print("Program terminated!")
    return 0