"""A board that keeps a coloured copy of its screen alongside the 0/1 one."""

from __future__ import annotations

from blockfall.blocks import BlockSet, TetrisState, color_blocks
from blockfall.matrix import Matrix
from blockfall.tetris import Tetris, delete_full_lines


class ColorTetris(Tetris):
    """A board whose settled blocks keep their colour values."""

    def __init__(self, rows: int, cols: int, blocks: BlockSet | None = None) -> None:
        super().__init__(rows, cols, blocks if blocks is not None else color_blocks())
        self.input_color_screen = self.input_screen.copy()
        self._output_color = self.output_screen.copy()
        self.current_color_block: Matrix | None = None

    @property
    def color_screen(self) -> Matrix:
        """The settled colour screen with the current block drawn on it."""
        return self._output_color

    def accept(self, key: str, incoming: Matrix | None = None) -> TetrisState:
        """Handle one key press on the board and bring the colour screen up to date."""
        state = super().accept(key, incoming)
        if self.current_block is None:
            return state
        block = self.blocks.color(self.block_type, self.degree)
        self.current_color_block = block
        region = self.input_color_screen.clip(
            self.top, self.left, self.top + block.rows, self.left + block.cols
        )
        overlap = region + block
        self._output_color.paste(self.input_color_screen, 0, 0)
        self._output_color.paste(overlap, self.top, self.left)
        if state is TetrisState.NEW_BLOCK:
            delete_full_lines(self._output_color, block, self.top, self.wall_depth)
            self.input_color_screen.paste(self._output_color, 0, 0)
        return state