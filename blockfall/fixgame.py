"""A variant where blocks float freely and are fixed in place with space.

Blocks move in all four directions (a, d, s, e) and rotate with w; they may
hover over settled blocks but not leave the play area.  Space fixes a block
where it stands, provided it overlaps nothing.  Full rows and full columns
under a fixed block are cleared without shifting the rest of the screen.
"""

from __future__ import annotations

import argparse
import random

from blockfall.blocks import TetrisState, mono_blocks
from blockfall.matrix import Matrix
from blockfall.pluggable import (
    ActionHandler,
    OnClockWise,
    OnDown,
    OnFinished,
    OnLeft,
    OnRight,
    OnUp,
    OperationTable,
    PluggableTetris,
    any_conflict,
)
from blockfall.render import render_numbered
from blockfall.terminal import KeyReader

QUIT_KEY = "q"
TICK_KEY = "s"


def delete_full_rows_and_columns(
    screen: Matrix, block: Matrix, top: int, left: int, wall_depth: int
) -> int:
    """Clear every full row and full column of the play area that the block covers.

    Cleared lines become empty; nothing is shifted.  Only lines inside the
    play area are examined, so walls are never touched.  ``screen`` is
    changed in place and the number of cleared lines is returned.
    """
    dw = wall_depth
    ws_dy = screen.rows - 2 * dw
    ws_dx = screen.cols - 2 * dw
    cleared = 0

    for cy in reversed(range(max(top, dw), min(top + block.rows, dw + ws_dy))):
        if screen.clip(cy, dw, cy + 1, dw + ws_dx).to_binary().sum() == ws_dx:
            screen.paste(Matrix(1, ws_dx), cy, dw)
            cleared += 1

    for cx in reversed(range(max(left, dw), min(left + block.cols, dw + ws_dx))):
        if screen.clip(dw, cx, dw + ws_dy, cx + 1).to_binary().sum() == ws_dy:
            screen.paste(Matrix(ws_dy, 1), dw, cx)
            cleared += 1

    return cleared


def out_of_screen(game: PluggableTetris) -> bool:
    """True when the current block covers a cell of the wall next to the play area."""
    if game.current_block is None:
        return False
    screen = game.input_screen.copy()
    screen.paste(game.overlap_current_block(), game.top, game.left)
    dw, rows, cols = game.wall_depth, game.rows, game.cols
    edges = (
        screen.clip(dw - 1, dw, dw, cols - dw),
        screen.clip(rows - dw, dw, rows - dw + 1, cols - dw),
        screen.clip(dw, dw - 1, rows - dw, dw),
        screen.clip(dw, cols - dw, rows - dw, cols - dw + 1),
    )
    return any(any_conflict(edge) for edge in edges)


class OnFix(ActionHandler):
    """Undo a move that took the block out of the play area; space does nothing."""

    def run(self, game: PluggableTetris, key: str) -> None:
        if key == " " or not out_of_screen(game):
            return
        if key == "a":
            game.left += 1
        elif key == "d":
            game.left -= 1
        elif key == "s":
            game.top -= 1
        elif key == "e":
            game.top += 1
        elif key == "w":
            game.degree = (game.degree + 3) % game.num_degrees
            game.current_block = game.blocks.shape(game.block_type, game.degree)


class OnCounterFix(ActionHandler):
    """A block that overlaps others cannot be fixed; it stays in play."""

    def run(self, game: PluggableTetris, key: str) -> None:
        return None


class FixNewBlock(ActionHandler):
    """Settle the fixed block, clear full rows and columns, bring in block ``key``."""

    def run(self, game: PluggableTetris, key: str) -> None:
        if game.current_block is not None:
            delete_full_rows_and_columns(
                game.output_screen, game.current_block, game.top, game.left, game.wall_depth
            )
        game.input_screen.paste(game.output_screen, 0, 0)
        game.block_type = ord(key) - ord("0")
        game.degree = 0
        game.top = game.wall_depth
        game.left = game.cols // 2 - game.wall_depth // 2
        game.current_block = game.blocks.shape(game.block_type, game.degree)


def build_operations() -> OperationTable:
    """The key bindings of the free-placement game."""
    run, new, fin = TetrisState.RUNNING, TetrisState.NEW_BLOCK, TetrisState.FINISHED
    table = OperationTable.with_defaults()
    moves = (
        ("a", OnLeft()),
        ("d", OnRight()),
        ("s", OnDown()),
        ("e", OnUp()),
        ("w", OnClockWise()),
    )
    for key, action in moves:
        table.set(key, run, action, run, OnFix(), run)
    table.set(" ", run, OnFix(), new, OnCounterFix(), run)
    for digit in "0123456":
        table.set(digit, new, FixNewBlock(), run, OnFinished(), fin)
    return table


def _random_block_key(rng: random.Random, num_types: int) -> str:
    return chr(ord("0") + rng.randrange(num_types))


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="blockfall-fix",
        description="Move blocks freely and fix them in place with space; q quits.",
    )
    parser.parse_args(argv)

    rng = random.Random()
    board = PluggableTetris(10, 10, mono_blocks(), build_operations())
    reader = KeyReader(0, TICK_KEY)
    reader.start_timer(1.0)

    def show() -> None:
        print(render_numbered(board.output_screen, board.wall_depth))

    board.accept(_random_block_key(rng, board.num_types))
    show()
    while True:
        try:
            key = reader.read()
        except EOFError:
            break
        if key == QUIT_KEY:
            break
        state = board.accept(key)
        show()
        if state is TetrisState.NEW_BLOCK:
            state = board.accept(_random_block_key(rng, board.num_types))
            show()
            if state is TetrisState.FINISHED:
                break

    print("Program terminated!")
    return 0