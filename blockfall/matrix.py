"""Integer grid used for game screens and block shapes."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class MatrixRangeError(IndexError):
    """Raised when a region reaches outside the bounds of a matrix."""


class Matrix:
    """A rectangular grid of integers.

    A matrix asked for with a non-positive dimension is empty (0 x 0).
    """

    __slots__ = ("_rows", "_cols", "_cells")
    __hash__ = None  # mutable

    def __init__(self, rows: int, cols: int, values: Iterable[int] | None = None) -> None:
        if rows <= 0 or cols <= 0:
            rows = cols = 0
        self._rows = rows
        self._cols = cols
        if values is None:
            self._cells = [[0] * cols for _ in range(rows)]
            return
        flat = list(values)
        if len(flat) < rows * cols:
            raise ValueError(
                f"need {rows * cols} values for a {rows}x{cols} matrix, got {len(flat)}"
            )
        self._cells = [flat[y * cols:(y + 1) * cols] for y in range(rows)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Matrix:
        """Build a matrix from a sequence of equally long rows."""
        rows = [list(row) for row in rows]
        if not rows:
            return cls(0, 0)
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("rows must all have the same length")
        return cls(len(rows), width, (value for row in rows for value in row))

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    def copy(self) -> Matrix:
        return Matrix(self._rows, self._cols, (v for row in self._cells for v in row))

    def clip(self, top: int, left: int, bottom: int, right: int) -> Matrix:
        """Return a copy of the region [top, bottom) x [left, right)."""
        result = Matrix(bottom - top, right - left)
        if result._rows == 0:
            return result
        if top < 0 or left < 0 or bottom > self._rows or right > self._cols:
            raise MatrixRangeError(
                f"region ({top},{left})-({bottom},{right}) lies outside "
                f"a {self._rows}x{self._cols} matrix"
            )
        result._cells = [row[left:right] for row in self._cells[top:bottom]]
        return result

    def paste(self, other: Matrix, top: int, left: int) -> None:
        """Copy ``other`` into this matrix with its corner at (top, left).

        Cells that fall inside are written; if any fall outside,
        MatrixRangeError is raised after the rest have been written.
        """
        outside = False
        source = [list(row) for row in other._cells]
        for y, row in enumerate(source, start=top):
            for x, value in enumerate(row, start=left):
                if 0 <= y < self._rows and 0 <= x < self._cols:
                    self._cells[y][x] = value
                else:
                    outside = True
        if outside:
            raise MatrixRangeError(
                f"{other._rows}x{other._cols} matrix pasted at ({top},{left}) "
                f"overflows a {self._rows}x{self._cols} matrix"
            )

    def __add__(self, other: Matrix) -> Matrix:
        if not isinstance(other, Matrix):
            return NotImplemented
        if (self._rows, self._cols) != (other._rows, other._cols):
            raise ValueError(
                f"cannot add {self._rows}x{self._cols} and {other._rows}x{other._cols} matrices"
            )
        return Matrix.from_rows(
            [[a + b for a, b in zip(r1, r2)] for r1, r2 in zip(self._cells, other._cells)]
        ) if self._rows else Matrix(0, 0)

    def sum(self) -> int:
        return sum(sum(row) for row in self._cells)

    def scale(self, coef: int) -> None:
        """Multiply every cell by ``coef`` in place."""
        self._cells = [[coef * v for v in row] for row in self._cells]

    def to_binary(self) -> Matrix:
        """Return a matrix with 1 where this one is non-zero and 0 elsewhere."""
        result = Matrix(self._rows, self._cols)
        result._cells = [[1 if v != 0 else 0 for v in row] for row in self._cells]
        return result

    def any_greater_than(self, value: int) -> bool:
        return any(v > value for row in self._cells for v in row)

    def to_lists(self) -> list[list[int]]:
        return [list(row) for row in self._cells]

    def _check(self, pos: tuple[int, int]) -> tuple[int, int]:
        y, x = pos
        if not (0 <= y < self._rows and 0 <= x < self._cols):
            raise IndexError(f"position {pos} outside a {self._rows}x{self._cols} matrix")
        return y, x

    def __getitem__(self, pos: tuple[int, int]) -> int:
        y, x = self._check(pos)
        return self._cells[y][x]

    def __setitem__(self, pos: tuple[int, int], value: int) -> None:
        y, x = self._check(pos)
        self._cells[y][x] = value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self._cells == other._cells and self._rows == other._rows

    def __str__(self) -> str:
        lines = [f"Matrix({self._rows},{self._cols})\n"]
        lines.extend("".join(f"{v} " for v in row) + "\n" for row in self._cells)
        lines.append("\n")
        return "".join(lines)

    def __repr__(self) -> str:
        return f"Matrix.from_rows({self._cells!r})"