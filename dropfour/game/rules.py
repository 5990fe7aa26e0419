"""
rules.py - Win detection for the dropfour engine

A new piece can only complete a line that passes through it, so detection
looks at the four full lines through the last placed cell instead of
scanning the whole board.
"""

from typing import List, Tuple

from dropfour.debug import debug
from dropfour.utils import CONNECT_N, Owner
from dropfour.game.board import Board

Coord = Tuple[int, int]


def lines_through(rows: int, cols: int, row: int, col: int) -> List[List[Coord]]:
    """
    Get the four full lines passing through (row, col).

    Lines come in checking order: left diagonal (row - col constant), right
    diagonal (row + col constant), horizontal, vertical. Cells in each line
    are ordered by increasing row, then column.
    """
    diagonal_left: List[Coord] = []
    diagonal_right: List[Coord] = []
    horizontal: List[Coord] = []
    vertical: List[Coord] = []

    for r in range(rows):
        for c in range(cols):
            if r == row:
                horizontal.append((r, c))
            if c == col:
                vertical.append((r, c))
            if r - c == row - col:
                diagonal_left.append((r, c))
            if r + c == row + col:
                diagonal_right.append((r, c))

    return [diagonal_left, diagonal_right, horizontal, vertical]


def find_run(board: Board, line: List[Coord]) -> List[Coord]:
    """
    Scan one line for CONNECT_N same-owner pieces in a row.

    Returns:
        The cells of the first run reaching CONNECT_N, or an empty list
    """
    run: List[Coord] = []
    last_owner = Owner.EMPTY

    for row, col in line:
        owner = board.owner_at(row, col)
        if owner == Owner.EMPTY:
            run = []
        elif owner == last_owner:
            run.append((row, col))
        else:
            run = [(row, col)]
        last_owner = owner

        if len(run) == CONNECT_N:
            return run

    return []


def find_winning_run(board: Board, row: int, col: int) -> List[Coord]:
    """Get the first winning run through (row, col) without marking it."""
    for line in lines_through(board.rows, board.cols, row, col):
        run = find_run(board, line)
        if run:
            return run
    return []


def check_win(board: Board, row: int, col: int) -> bool:
    """
    Check whether there is four in a row through (row, col).

    Cells of the winning run get their winning flag set on the board; the
    flag is only used for rendering.

    Args:
        board: The board to inspect
        row: Row of the piece just placed
        col: Column of the piece just placed

    Returns:
        True if a winning run was found
    """
    run = find_winning_run(board, row, col)
    if not run:
        return False

    debug.trace(f"Winning run through ({row}, {col}): {run}", "rules")
    board.mark_winning(run)
    return True
