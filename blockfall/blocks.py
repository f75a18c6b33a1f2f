"""Block shapes, their colours and the game states."""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from blockfall.matrix import Matrix


class TetrisState(enum.Enum):
    """State of a game board."""

    NEW_BLOCK = "new_block"
    RUNNING = "running"
    FINISHED = "finished"


MONO_BLOCK_ARRAYS: tuple[tuple[int, ...], ...] = (
    (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 1, 1),
    (0, 1, 0, 1, 1, 1, 0, 0, 0), (0, 1, 0, 0, 1, 1, 0, 1, 0),
    (0, 0, 0, 1, 1, 1, 0, 1, 0), (0, 1, 0, 1, 1, 0, 0, 1, 0),
    (1, 0, 0, 1, 1, 1, 0, 0, 0), (0, 1, 1, 0, 1, 0, 0, 1, 0),
    (0, 0, 0, 1, 1, 1, 0, 0, 1), (0, 1, 0, 0, 1, 0, 1, 1, 0),
    (0, 0, 1, 1, 1, 1, 0, 0, 0), (0, 1, 0, 0, 1, 0, 0, 1, 1),
    (0, 0, 0, 1, 1, 1, 1, 0, 0), (1, 1, 0, 0, 1, 0, 0, 1, 0),
    (0, 1, 0, 1, 1, 0, 1, 0, 0), (1, 1, 0, 0, 1, 1, 0, 0, 0),
    (0, 1, 0, 1, 1, 0, 1, 0, 0), (1, 1, 0, 0, 1, 1, 0, 0, 0),
    (0, 1, 0, 0, 1, 1, 0, 0, 1), (0, 0, 0, 0, 1, 1, 1, 1, 0),
    (0, 1, 0, 0, 1, 1, 0, 0, 1), (0, 0, 0, 0, 1, 1, 1, 1, 0),
    (0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0),
    (0, 0, 0, 0, 1, 1, 1, 1, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0, 0, 1, 0, 0),
)

COLOR_BLOCK_ARRAYS: tuple[tuple[int, ...], ...] = (
    (10, 10, 10, 10), (10, 10, 10, 10), (10, 10, 10, 10), (10, 10, 10, 10),
    (0, 20, 0, 20, 20, 20, 0, 0, 0), (0, 20, 0, 0, 20, 20, 0, 20, 0),
    (0, 0, 0, 20, 20, 20, 0, 20, 0), (0, 20, 0, 20, 20, 0, 0, 20, 0),
    (30, 0, 0, 30, 30, 30, 0, 0, 0), (0, 30, 30, 0, 30, 0, 0, 30, 0),
    (0, 0, 0, 30, 30, 30, 0, 0, 30), (0, 30, 0, 0, 30, 0, 30, 30, 0),
    (0, 0, 40, 40, 40, 40, 0, 0, 0), (0, 40, 0, 0, 40, 0, 0, 40, 40),
    (0, 0, 0, 40, 40, 40, 40, 0, 0), (40, 40, 0, 0, 40, 0, 0, 40, 0),
    (0, 50, 0, 50, 50, 0, 50, 0, 0), (50, 50, 0, 0, 50, 50, 0, 0, 0),
    (0, 50, 0, 50, 50, 0, 50, 0, 0), (50, 50, 0, 0, 50, 50, 0, 0, 0),
    (0, 60, 0, 0, 60, 60, 0, 0, 60), (0, 0, 0, 0, 60, 60, 60, 60, 0),
    (0, 60, 0, 0, 60, 60, 0, 0, 60), (0, 0, 0, 0, 60, 60, 60, 60, 0),
    (0, 0, 0, 0, 70, 70, 70, 70, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 70, 0, 0, 0, 70, 0, 0, 0, 70, 0, 0, 0, 70, 0, 0),
    (0, 0, 0, 0, 70, 70, 70, 70, 0, 0, 0, 0, 0, 0, 0, 0),
    (0, 70, 0, 0, 0, 70, 0, 0, 0, 70, 0, 0, 0, 70, 0, 0),
)

NUM_TYPES = 7
NUM_DEGREES = 4


def _trim(values: Iterable[int]) -> list[int]:
    """Cut a value list at its -1 terminator, if it has one."""
    result = []
    for value in values:
        if value == -1:
            break
        result.append(value)
    return result


def _side(count: int) -> int:
    """Smallest side whose square holds ``count`` cells."""
    return math.isqrt(count - 1) + 1 if count > 0 else 0


@dataclass(frozen=True)
class BlockSet:
    """Every block type in every rotation, as 0/1 shapes and as colour values."""

    num_types: int
    num_degrees: int
    shapes: tuple[tuple[Matrix, ...], ...]
    colors: tuple[tuple[Matrix, ...], ...]

    @classmethod
    def from_arrays(
        cls, arrays: Sequence[Iterable[int]], num_types: int, num_degrees: int
    ) -> BlockSet:
        """Build a block set from flat square arrays, ``num_degrees`` per type.

        The side of each type is taken from its first rotation; non-zero
        values are block cells and keep their value as colour.
        """
        if num_types <= 0 or num_degrees <= 0:
            raise ValueError("number of types and degrees must be positive")
        trimmed = [_trim(values) for values in arrays]
        if len(trimmed) < num_types * num_degrees:
            raise ValueError(
                f"need {num_types * num_degrees} block arrays, got {len(trimmed)}"
            )
        shapes = []
        colors = []
        for t in range(num_types):
            group = trimmed[t * num_degrees:(t + 1) * num_degrees]
            side = _side(len(group[0]))
            color_row = tuple(Matrix(side, side, values) for values in group)
            colors.append(color_row)
            shapes.append(tuple(m.to_binary() for m in color_row))
        return cls(num_types, num_degrees, tuple(shapes), tuple(colors))

    def _check(self, block_type: int, degree: int) -> None:
        if not 0 <= block_type < self.num_types:
            raise IndexError(f"block type {block_type} out of range")
        if not 0 <= degree < self.num_degrees:
            raise IndexError(f"degree {degree} out of range")

    def shape(self, block_type: int, degree: int) -> Matrix:
        """The 0/1 shape of a block in a given rotation."""
        self._check(block_type, degree)
        return self.shapes[block_type][degree]

    def color(self, block_type: int, degree: int) -> Matrix:
        """The colour values of a block in a given rotation."""
        self._check(block_type, degree)
        return self.colors[block_type][degree]

    @property
    def wall_depth(self) -> int:
        """Side of the largest block; the wall around a screen is this thick."""
        return max((row[0].rows for row in self.shapes), default=0)


def mono_blocks() -> BlockSet:
    """The seven standard blocks with plain 0/1 cells."""
    return BlockSet.from_arrays(MONO_BLOCK_ARRAYS, NUM_TYPES, NUM_DEGREES)


def color_blocks() -> BlockSet:
    """The seven standard blocks, each with its own colour value."""
    return BlockSet.from_arrays(COLOR_BLOCK_ARRAYS, NUM_TYPES, NUM_DEGREES)