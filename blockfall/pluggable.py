"""A board whose keys are bound to pluggable action handlers.

Each key maps to an operation: the state the board must be in, an action,
and a counter action that runs when the action leaves the block in a
collision.  The resulting state depends on which of the two ran last.
"""

from __future__ import annotations

import abc
import logging
from collections.abc import Iterator
from dataclasses import dataclass

from blockfall.blocks import BlockSet, TetrisState, mono_blocks
from blockfall.matrix import Matrix

log = logging.getLogger(__name__)

MAX_OPERATIONS = 100


class OperationTableFull(Exception):
    """Raised when a new key is bound in a table that has no room left."""


class ActionHandler(abc.ABC):
    """Something a key press does to a board."""

    @abc.abstractmethod
    def run(self, game: PluggableTetris, key: str) -> None:
        """Apply the action to ``game`` for the pressed ``key``."""


class OnLeft(ActionHandler):
    def run(self, game: PluggableTetris, key: str) -> None:
        game.left -= 1


class OnRight(ActionHandler):
    def run(self, game: PluggableTetris, key: str) -> None:
        game.left += 1


class OnDown(ActionHandler):
    def run(self, game: PluggableTetris, key: str) -> None:
        game.top += 1


class OnUp(ActionHandler):
    def run(self, game: PluggableTetris, key: str) -> None:
        game.top -= 1


class OnDrop(ActionHandler):
    """Move the block down until it first collides."""

    def run(self, game: PluggableTetris, key: str) -> None:
        while True:
            game.top += 1
            if any_conflict(game.overlap_current_block()):
                break


class OnClockWise(ActionHandler):
    def run(self, game: PluggableTetris, key: str) -> None:
        game.degree = (game.degree + 1) % game.num_degrees
        game.current_block = game.blocks.shape(game.block_type, game.degree)


class OnCounterClockWise(ActionHandler):
    def run(self, game: PluggableTetris, key: str) -> None:
        game.degree = (game.degree + 3) % game.num_degrees
        game.current_block = game.blocks.shape(game.block_type, game.degree)


class OnNewBlock(ActionHandler):
    """Settle the previous block, clear full lines and bring in block ``key``."""

    def run(self, game: PluggableTetris, key: str) -> None:
        if game.current_block is not None:
            delete_full_lines(game.output_screen, game.current_block, game.top, game.wall_depth)
        game.input_screen.paste(game.output_screen, 0, 0)
        game.block_type = ord(key) - ord("0")
        game.degree = 0
        game.top = game.wall_depth
        game.left = game.cols // 2 - game.wall_depth // 2
        game.current_block = game.blocks.shape(game.block_type, game.degree)


class OnFinished(ActionHandler):
    """Counter action for a block that cannot enter: the board stays as it is."""

    def run(self, game: PluggableTetris, key: str) -> None:
        return None


@dataclass(frozen=True)
class Operation:
    """What a key does and which states it leads to."""

    key: str
    pre_state: TetrisState
    action: ActionHandler
    post_action_state: TetrisState
    counter_action: ActionHandler
    post_counter_state: TetrisState


class OperationTable:
    """Key bindings, at most ``capacity`` of them."""

    def __init__(self, capacity: int = MAX_OPERATIONS) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._ops: dict[str, Operation] = {}

    def set(
        self,
        key: str,
        pre_state: TetrisState,
        action: ActionHandler,
        post_action_state: TetrisState,
        counter_action: ActionHandler,
        post_counter_state: TetrisState,
    ) -> None:
        """Bind ``key``, replacing any earlier binding of the same key."""
        if key not in self._ops and len(self._ops) >= self.capacity:
            raise OperationTableFull(f"operation table is full ({self.capacity} keys)")
        self._ops[key] = Operation(
            key, pre_state, action, post_action_state, counter_action, post_counter_state
        )

    def find(self, key: str) -> Operation | None:
        return self._ops.get(key)

    @classmethod
    def with_defaults(cls) -> OperationTable:
        """A table with the standard moves, rotation, drop and block keys 0 to 6."""
        run, new, fin = TetrisState.RUNNING, TetrisState.NEW_BLOCK, TetrisState.FINISHED
        table = cls()
        table.set("a", run, OnLeft(), run, OnRight(), run)
        table.set("d", run, OnRight(), run, OnLeft(), run)
        table.set("s", run, OnDown(), run, OnUp(), new)
        table.set("w", run, OnClockWise(), run, OnCounterClockWise(), run)
        table.set(" ", run, OnDrop(), run, OnUp(), new)
        for digit in "0123456":
            table.set(digit, new, OnNewBlock(), run, OnFinished(), fin)
        return table

    def __len__(self) -> int:
        return len(self._ops)

    def __contains__(self, key: object) -> bool:
        return key in self._ops

    def __iter__(self) -> Iterator[Operation]:
        return iter(self._ops.values())


def build_screen(rows: int, cols: int, wall_depth: int) -> Matrix:
    """An empty play area of rows x cols inside a wall ``wall_depth`` thick on every side."""
    height = rows + 2 * wall_depth
    width = cols + 2 * wall_depth
    cells = []
    for y in range(height):
        inside = wall_depth <= y < rows + wall_depth
        middle = [0 if inside else 1] * cols
        cells.append([1] * wall_depth + middle + [1] * wall_depth)
    return Matrix.from_rows(cells)


def delete_full_lines(screen: Matrix, block: Matrix, top: int, wall_depth: int) -> int:
    """Remove full rows among those the block covers, shifting rows above down.

    ``screen`` is changed in place; the number of removed rows is returned.
    """
    dw = wall_depth
    ws_dy = screen.rows - 2 * dw
    ws_dx = screen.cols - 2 * dw
    if top + block.rows > ws_dy + dw:
        scanned = ws_dy + dw - top
    else:
        scanned = block.rows
    zero = Matrix(1, ws_dx)
    deleted = 0
    for y in reversed(range(scanned)):
        cy = top + y + deleted
        line = screen.clip(cy, dw, cy + 1, dw + ws_dx).to_binary()
        if line.sum() == ws_dx:
            above = screen.clip(dw, dw, cy, dw + ws_dx)
            screen.paste(above, dw + 1, dw)
            screen.paste(zero, dw, dw)
            deleted += 1
    return deleted


def any_conflict(block: Matrix) -> bool:
    """True when a cell is covered twice."""
    return block.any_greater_than(1)


class PluggableTetris:
    """A board driven by an operation table."""

    def __init__(
        self,
        rows: int,
        cols: int,
        blocks: BlockSet | None = None,
        operations: OperationTable | None = None,
    ) -> None:
        self.blocks = blocks if blocks is not None else mono_blocks()
        self.operations = operations if operations is not None else OperationTable.with_defaults()
        self.wall_depth = self.blocks.wall_depth
        dw = self.wall_depth
        self.rows = rows + 2 * dw
        self.cols = cols + 2 * dw
        self.block_type = -1
        self.degree = 0
        self.top = dw
        self.left = dw + self.cols // 2 - dw // 2
        self.input_screen = build_screen(rows, cols, dw)
        self.output_screen = self.input_screen.copy()
        self.current_block: Matrix | None = None
        self.state = TetrisState.NEW_BLOCK

    @property
    def num_degrees(self) -> int:
        return self.blocks.num_degrees

    @property
    def num_types(self) -> int:
        return self.blocks.num_types

    def overlap_current_block(self) -> Matrix:
        """The screen region under the current block with the block added to it."""
        if self.current_block is None:
            raise RuntimeError("no block in play")
        block = self.current_block
        region = self.input_screen.clip(
            self.top, self.left, self.top + block.rows, self.left + block.cols
        )
        return region + block

    def update_output(self, block: Matrix, top: int, left: int) -> None:
        """Redraw the output screen as the input screen with ``block`` at (top, left)."""
        self.output_screen.paste(self.input_screen, 0, 0)
        self.output_screen.paste(block, top, left)

    def accept(self, key: str) -> TetrisState:
        """Handle one key press and return the resulting state."""
        op = self.operations.find(key)
        if op is None:
            log.warning("unknown key %r", key)
            return self.state
        if self.state is not op.pre_state:
            log.warning("key %r is not valid in state %s", key, self.state.name)
            return self.state
        op.action.run(self, key)
        overlap = self.overlap_current_block()
        if not any_conflict(overlap):
            self.state = op.post_action_state
        else:
            op.counter_action.run(self, key)
            overlap = self.overlap_current_block()
            self.state = op.post_counter_state
        self.update_output(overlap, self.top, self.left)
        return self.state