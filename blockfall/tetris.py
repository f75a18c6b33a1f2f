"""A single board with a fixed key map and a floor but no ceiling."""

from __future__ import annotations

import contextlib
import logging

from blockfall.blocks import BlockSet, TetrisState, mono_blocks
from blockfall.matrix import Matrix, MatrixRangeError

log = logging.getLogger(__name__)

_LEFT_KEYS = frozenset("aj")
_RIGHT_KEYS = frozenset("dl")
_ROTATE_KEYS = frozenset("wi")
_DOWN_KEYS = frozenset("sk")
_DROP_KEYS = frozenset(" \r")
INCOMING_KEY = "N"


def build_screen(rows: int, cols: int, wall_depth: int) -> Matrix:
    """An empty play area of rows x cols with side walls and a floor ``wall_depth`` thick.

    There is no wall above the play area.
    """
    cells = []
    for y in range(rows + wall_depth):
        middle = [0 if y < rows else 1] * cols
        cells.append([1] * wall_depth + middle + [1] * wall_depth)
    return Matrix.from_rows(cells)


def delete_full_lines(screen: Matrix, block: Matrix, top: int, wall_depth: int) -> int:
    """Remove full rows among those the block covers, shifting the rows above down.

    ``screen`` is changed in place; the number of removed rows is returned.
    """
    dw = wall_depth
    ws_dy = screen.rows - dw
    ws_dx = screen.cols - 2 * dw
    scanned = ws_dy - top if top + block.rows > ws_dy else block.rows
    zero = Matrix(1, ws_dx)
    deleted = 0
    for y in reversed(range(scanned)):
        cy = top + y + deleted
        line = screen.clip(cy, dw, cy + 1, dw + ws_dx).to_binary()
        if line.sum() == ws_dx:
            above = screen.clip(0, dw, cy, dw + ws_dx)
            screen.paste(above, 1, dw)
            screen.paste(zero, 0, dw)
            deleted += 1
    return deleted


class Tetris:
    """One board: blocks enter at the top, move with a/d/s/w (or j/l/k/i) and drop with space or CR."""

    def __init__(self, rows: int, cols: int, blocks: BlockSet | None = None) -> None:
        self.blocks = blocks if blocks is not None else mono_blocks()
        dw = self.blocks.wall_depth
        self._wall_depth = dw
        self.rows = rows + dw
        self.cols = cols + 2 * dw
        self.block_type = -1
        self.degree = 0
        self.top = 0
        self.left = dw + self.cols // 2 - dw // 2
        self.input_screen = build_screen(rows, cols, dw)
        self._output = self.input_screen.copy()
        self.current_block: Matrix | None = None
        self.state = TetrisState.NEW_BLOCK

    @property
    def wall_depth(self) -> int:
        return self._wall_depth

    @property
    def output_screen(self) -> Matrix:
        """The settled screen with the current block drawn on it."""
        return self._output

    @property
    def num_types(self) -> int:
        return self.blocks.num_types

    @property
    def num_degrees(self) -> int:
        return self.blocks.num_degrees

    def _overlap(self) -> Matrix:
        block = self.current_block
        region = self.input_screen.clip(
            self.top, self.left, self.top + block.rows, self.left + block.cols
        )
        return region + block

    def _set_degree(self, degree: int) -> None:
        self.degree = degree % self.num_degrees
        self.current_block = self.blocks.shape(self.block_type, self.degree)

    def _redraw(self, overlap: Matrix) -> None:
        self._output.paste(self.input_screen, 0, 0)
        self._output.paste(overlap, self.top, self.left)

    def _new_block(self, key: str) -> TetrisState:
        index = ord(key) - ord("0")
        if not 0 <= index < self.num_types:
            log.warning("wrong block index %r", key)
            return self.state
        self.state = TetrisState.RUNNING
        self.block_type = index
        self.degree = 0
        self.top = 0
        self.left = self.cols // 2 - self.wall_depth // 2
        self.current_block = self.blocks.shape(self.block_type, self.degree)
        overlap = self._overlap()
        self._redraw(overlap)
        if overlap.any_greater_than(1):
            self.state = TetrisState.FINISHED
        return self.state

    def _take_incoming(self, incoming: Matrix) -> None:
        """Push the output screen up and put ``incoming`` rows at its bottom."""
        length = incoming.rows
        ws_dy = self._output.rows - self.wall_depth
        ws_dx = self._output.cols - 2 * self.wall_depth
        existing = self._output.clip(self.top, 0, ws_dy, ws_dx)
        # Rows pushed above the screen are dropped.
        with contextlib.suppress(MatrixRangeError):
            self._output.paste(existing, self.top - length, 0)
        self._output.paste(incoming, ws_dy - length, 0)

    def accept(self, key: str, incoming: Matrix | None = None) -> TetrisState:
        """Handle one key press and return the resulting state.

        In the new-block state ``key`` is a block index digit.  The key ``N``
        with ``incoming`` rows pushes those rows in from the bottom.
        """
        if self.state is TetrisState.FINISHED:
            return self.state
        if self.state is TetrisState.NEW_BLOCK:
            return self._new_block(key)

        touched_down = False
        if key in _LEFT_KEYS:
            self.left -= 1
        elif key in _RIGHT_KEYS:
            self.left += 1
        elif key in _ROTATE_KEYS:
            self._set_degree(self.degree + 1)
        elif key in _DOWN_KEYS:
            self.top += 1
        elif key in _DROP_KEYS:
            while True:
                self.top += 1
                if self._overlap().any_greater_than(1):
                    break
        elif key == INCOMING_KEY:
            if incoming is not None:
                self._take_incoming(incoming)
                return self.state
        else:
            log.warning("wrong key input %r", key)

        overlap = self._overlap()
        if overlap.any_greater_than(1):
            if key in _LEFT_KEYS:
                self.left += 1
            elif key in _RIGHT_KEYS:
                self.left -= 1
            elif key in _ROTATE_KEYS:
                self._set_degree(self.degree + 3)
            elif key in _DOWN_KEYS or key in _DROP_KEYS:
                self.top -= 1
                touched_down = True
            overlap = self._overlap()

        self._redraw(overlap)

        if touched_down:
            delete_full_lines(self._output, self.current_block, self.top, self.wall_depth)
            self.input_screen.paste(self._output, 0, 0)
            self.state = TetrisState.NEW_BLOCK
        return self.state