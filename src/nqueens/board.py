"""Classes and functions for representing the chess board."""

from collections.abc import Sequence
from numbers import Integral

import numpy as np
from bitarray import bitarray
from bitarray.util import zeros

Cell = tuple[int, int]
"""A (row, col) position on the board."""


class InvalidSize(ValueError):
    """Raised when a board dimension is not a supported positive integer."""


class InvalidBoard(ValueError):
    """Raised when a grid is not square or holds values other than empty/occupied."""


class Board:
    """Store an N x N grid of occupancy flags as a 1D bit array.

    Contains support for both 1D (row-major order) and 2D indexing.  A set bit is a queen.
    """

    def __init__(self, size: int) -> None:
        if isinstance(size, bool) or not isinstance(size, Integral):
            raise InvalidSize(f"Board size must be an integer, got {size!r}.")
        if size < 1:
            raise InvalidSize(f"Board size must be at least 1, got {size}.")

        self.size: int = int(size)
        """Number of rows (and columns) of the board."""

        self.cells: bitarray = zeros(self.size * self.size)
        """Occupancy flags in row-major order."""

    @classmethod
    def create(cls, size: int) -> "Board":
        """Create an empty board of the given size."""
        return cls(size)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int | bool]]) -> "Board":
        """Create a board from a nested sequence of 0/1 (or bool) values.

        Args:
            rows: One sequence per row; every row must be as long as there are rows.

        Raises:
            InvalidSize: If there are no rows at all (`[]`).
            InvalidBoard: If the grid is not square or contains values other than 0/1.  This
                includes rows with no columns (`[[]]`), which is a 1 x 0 grid rather than an
                empty one.
        """
        try:
            grid = np.asarray(rows)
        except ValueError:
            # Ragged rows
            raise InvalidBoard("Board rows have differing lengths.") from None

        if grid.ndim == 1 and grid.shape[0] == 0:
            raise InvalidSize("Board size must be at least 1, got 0.")
        if grid.ndim != 2 or grid.shape[0] != grid.shape[1]:
            raise InvalidBoard(f"Board must be a square grid, got shape {grid.shape}.")
        if grid.dtype.kind not in "biuf" or not np.isin(grid, (0, 1)).all():
            raise InvalidBoard("Board cells must be empty (0) or occupied (1).")

        board = cls(grid.shape[0])
        board.cells = bitarray(grid.astype(bool).ravel().tolist())
        return board

    def copy(self) -> "Board":
        """Generate a copy of the board."""
        board = Board(self.size)
        board.cells = self.cells.copy()
        return board

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.size == other.size and self.cells == other.cells

    def __repr__(self) -> str:
        return f"Board(size={self.size}, queens={self.queens()})"

    def _index(self, row: int, col: int) -> int:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} board.")
        return row * self.size + col

    def __getitem__(self, idx: int | Cell) -> bool:
        """Get cell occupancy by 1D (row-major order) or 2D index."""
        if isinstance(idx, tuple) and len(idx) == 2:
            return bool(self.cells[self._index(*idx)])
        if isinstance(idx, int):
            return bool(self.cells[idx])
        raise IndexError("Invalid index type for Board.")

    def get_2d_idx(self, one_d_idx: int) -> Cell:
        """Convert a 1D index to a (row, col) tuple."""
        return divmod(one_d_idx, self.size)

    def get_1d_idx(self, row: int, col: int) -> int:
        """Convert a (row, col) tuple to a 1D index."""
        return self._index(row, col)

    def place(self, row: int, col: int) -> None:
        """Mark a cell as occupied.  Performs no validity check; see `is_placeable`."""
        self.cells[self._index(row, col)] = 1

    def remove(self, row: int, col: int) -> None:
        """Clear a cell.  Used to undo a placement while backtracking."""
        self.cells[self._index(row, col)] = 0

    def row_has_queen(self, row: int) -> bool:
        """Whether any cell in the given row is occupied."""
        start = self._index(row, 0)
        return self.cells[start : start + self.size].any()

    def is_placeable(self, row: int, col: int) -> bool:
        """Check whether a queen can be placed at (row, col) without being attacked.

        Scans the whole row, the whole column, and both full diagonals through the cell (the
        four rays from the cell to the board edges).  Returns False at the first conflict
        found.  No side effects.

        Args:
            row: Row of the cell to check.
            col: Column of the cell to check.
        """
        n = self.size
        self._index(row, col)

        # Horizontal and vertical
        if self.row_has_queen(row):
            return False
        if self.cells[col::n].any():
            return False

        # Both full diagonals through the cell, i.e. all four rays out to the board edges
        if n == 1:
            return True
        offset = col - row
        top = offset if offset >= 0 else -offset * n
        length = n - abs(offset)
        if self.cells[top : top + (n + 1) * (length - 1) + 1 : n + 1].any():
            return False

        total = row + col
        top = total if total < n else (total - n + 1) * n + n - 1
        length = total + 1 if total < n else 2 * n - 1 - total
        if self.cells[top : top + (n - 1) * (length - 1) + 1 : n - 1].any():
            return False

        return True

    def count_queens(self) -> int:
        """Count the occupied cells on the board."""
        return self.cells.count(1)

    def queens(self) -> list[Cell]:
        """List the occupied cells in row-major order."""
        return [self.get_2d_idx(i) for i, bit in enumerate(self.cells) if bit]

    def conflicts(self) -> list[tuple[Cell, Cell]]:
        """List every pair of queens that attack each other (same row, column or diagonal)."""
        queens = self.queens()
        pairs: list[tuple[Cell, Cell]] = []
        for i, (r1, c1) in enumerate(queens):
            for r2, c2 in queens[i + 1 :]:
                if r1 == r2 or c1 == c2 or abs(r1 - r2) == abs(c1 - c2):
                    pairs.append(((r1, c1), (r2, c2)))
        return pairs

    def is_solution(self) -> bool:
        """Whether the board holds exactly N mutually non-attacking queens."""
        return self.count_queens() == self.size and not self.conflicts()

    def to_array(self) -> np.ndarray:
        """Return the board as an N x N boolean NumPy array."""
        return np.array(self.cells.tolist(), dtype=bool).reshape(self.size, self.size)
