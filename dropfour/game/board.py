"""
board.py - Board representation for the dropfour engine

The Board only stores occupancy and the cosmetic winning flags; it knows
nothing about turns. Pieces obey gravity: callers find the landing row with
lowest_empty_row() and then place() there.
"""

from typing import List, Tuple, Optional, Sequence

import numpy as np

from dropfour.debug import debug
from dropfour.utils import ROWS, COLS, CONNECT_N, Owner, owner_from_symbol, render_board_ascii

Coord = Tuple[int, int]


class CellOccupiedError(AssertionError):
    """Raised when the engine tries to place a piece on a taken cell."""


class Board:
    """
    A rows x cols Connect Four grid, row 0 at the top.

    Owners are kept in an int8 numpy array of Owner values, winning
    highlights in a parallel boolean array.
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS):
        debug.trace(f"Initializing new {rows}x{cols} Board", "board")
        self.reset(rows, cols)

    def reset(self, rows: Optional[int] = None, cols: Optional[int] = None):
        """Reset every cell to empty, optionally with new dimensions."""
        rows = self.rows if rows is None else rows
        cols = self.cols if cols is None else cols
        if rows < CONNECT_N or cols < CONNECT_N:
            raise ValueError(
                f"Board must be at least {CONNECT_N}x{CONNECT_N}, got {rows}x{cols}")

        debug.debug(f"Resetting board to {rows}x{cols}", "board")
        self.rows = rows
        self.cols = cols
        self.grid = np.full((rows, cols), Owner.EMPTY.value, dtype=np.int8)
        self.winning = np.zeros((rows, cols), dtype=bool)

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> 'Board':
        """
        Build a board from strings, top row first.

        Each character is one cell: '.' for empty, 'A'/'X' for player A and
        'B'/'O' for player B. Spaces are ignored. Gravity is not enforced so
        arbitrary test positions can be described.
        """
        cleaned = [row.replace(" ", "") for row in rows]
        if not cleaned or len({len(row) for row in cleaned}) != 1:
            raise ValueError("All board rows must have the same length")

        board = cls(len(cleaned), len(cleaned[0]))
        for r, line in enumerate(cleaned):
            for c, symbol in enumerate(line):
                owner = owner_from_symbol(symbol)
                if owner != Owner.EMPTY:
                    board.place(r, c, owner)
        return board

    def copy(self) -> 'Board':
        """Create an independent copy of the board."""
        new_board = Board(self.rows, self.cols)
        new_board.grid = self.grid.copy()
        new_board.winning = self.winning.copy()
        return new_board

    # Queries

    def is_valid_column(self, col: int) -> bool:
        """Check that col is on the board and has room for another piece."""
        return 0 <= col < self.cols and self.grid[0, col] == Owner.EMPTY.value

    def valid_columns(self) -> List[int]:
        return [col for col in range(self.cols) if self.grid[0, col] == Owner.EMPTY.value]

    def lowest_empty_row(self, col: int) -> Optional[int]:
        """
        Get the landing row for a piece dropped into col.

        Args:
            col: Column index in [0, cols)

        Returns:
            The row index of the lowest empty cell, or None if the column is full
        """
        if not 0 <= col < self.cols:
            raise IndexError(f"Column {col} out of range")

        for row in range(self.rows - 1, -1, -1):
            if self.grid[row, col] == Owner.EMPTY.value:
                return row
        return None

    def owner_at(self, row: int, col: int) -> Owner:
        return Owner(int(self.grid[row, col]))

    def is_winning(self, row: int, col: int) -> bool:
        return bool(self.winning[row, col])

    def winning_cells(self) -> List[Coord]:
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.winning))]

    def is_full(self) -> bool:
        return not np.any(self.grid == Owner.EMPTY.value)

    def is_empty(self) -> bool:
        return not np.any(self.grid != Owner.EMPTY.value)

    # Mutation

    def place(self, row: int, col: int, owner: Owner):
        """
        Put owner's piece on an empty cell.

        Raises:
            CellOccupiedError: if the cell is taken or owner is EMPTY; this
                is an engine bug, never a player mistake
        """
        if owner == Owner.EMPTY:
            raise CellOccupiedError(f"Cannot place an empty piece at ({row}, {col})")
        current = self.grid[row, col]
        if current != Owner.EMPTY.value:
            raise CellOccupiedError(
                f"Cell ({row}, {col}) already owned by {Owner(int(current)).name}")

        debug.trace(f"Placing {owner.name} at ({row}, {col})", "board")
        self.grid[row, col] = owner.value

    def clear(self, row: int, col: int):
        """Return a cell to empty and drop its winning flag."""
        self.grid[row, col] = Owner.EMPTY.value
        self.winning[row, col] = False

    def mark_winning(self, cells: Sequence[Coord]):
        for row, col in cells:
            self.winning[row, col] = True

    def clear_winning(self):
        self.winning[:, :] = False

    # Snapshots

    def get_state(self) -> np.ndarray:
        """Get a copy of the owner grid as a numpy array."""
        return self.grid.copy()

    def occupancy(self) -> Tuple[Tuple[Owner, ...], ...]:
        """Hashable per-cell owner snapshot, handy for comparing boards."""
        return tuple(
            tuple(Owner(int(value)) for value in row) for row in self.grid)

    def render(self) -> str:
        return render_board_ascii(self.grid, self.winning)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Board(rows={self.rows}, cols={self.cols})"
