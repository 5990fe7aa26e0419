"""
utils.py - Constants, enumerations and helpers shared by the dropfour engine

Board dimensions and the computer's think delay live here as module level
defaults; every class that uses them also accepts an override.
"""

from enum import Enum
from typing import List, Optional

import numpy as np

# Game constants
ROWS = 6
COLS = 7
CONNECT_N = 4  # Number of pieces in a row to win

# Seconds the computer waits before committing its chosen column
AI_DELAY = 0.5

# Frame length used by the terminal driver loop
FRAME_SECONDS = 1 / 30


class Owner(Enum):
    """Occupancy of a cell, and the identity of a side."""
    EMPTY = 0
    PLAYER_A = 1  # Human
    PLAYER_B = 2  # Computer

    def other(self) -> 'Owner':
        """Get the opposing side (EMPTY has no opponent)."""
        if self == Owner.PLAYER_A:
            return Owner.PLAYER_B
        elif self == Owner.PLAYER_B:
            return Owner.PLAYER_A
        return Owner.EMPTY

    def __str__(self):
        if self == Owner.EMPTY:
            return "."
        elif self == Owner.PLAYER_A:
            return "X"
        else:
            return "O"


HUMAN = Owner.PLAYER_A
COMPUTER = Owner.PLAYER_B

# Characters accepted when building a board by hand
SYMBOLS = {
    ".": Owner.EMPTY,
    "-": Owner.EMPTY,
    "A": Owner.PLAYER_A,
    "X": Owner.PLAYER_A,
    "B": Owner.PLAYER_B,
    "O": Owner.PLAYER_B,
}


def owner_from_symbol(symbol: str) -> Owner:
    """
    Translate a single board character into an Owner.

    Raises:
        ValueError: if the character is not a known symbol
    """
    try:
        return SYMBOLS[symbol.upper()]
    except KeyError:
        raise ValueError(f"Unknown board symbol: {symbol!r}") from None


def render_board_ascii(grid: np.ndarray, winning: Optional[np.ndarray] = None) -> str:
    """
    Render an owner grid as ASCII art.

    Args:
        grid: 2D array of Owner values
        winning: Optional boolean mask; winning pieces are drawn in lowercase

    Returns:
        ASCII representation of the board with column numbers underneath
    """
    rows, cols = grid.shape
    border = "|" + "-" * (cols * 2 - 1) + "|"
    lines: List[str] = [border]

    for row in range(rows):
        cells = []
        for col in range(cols):
            symbol = str(Owner(int(grid[row, col])))
            if winning is not None and winning[row, col]:
                symbol = symbol.lower()
            cells.append(symbol)
        lines.append("|" + " ".join(cells) + "|")

    lines.append(border)
    # Column numbers wrap after 9 so wide boards stay aligned
    lines.append("|" + " ".join(str(col % 10) for col in range(cols)) + "|")

    return "\n".join(lines)
