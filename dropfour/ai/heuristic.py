"""
heuristic.py - Four-tier greedy move selection for the computer player

Each playable column is sorted into one of four tiers by trying pieces on
the board and asking the win detector what happens:

0. the computer wins by playing there
1. the opponent would win there next, so playing there blocks it
2. nothing special happens
3. playing there lets the opponent win in the cell just above

The computer picks at random among the columns of the best non-empty tier.
Only the computer's move and the opponent's immediate reply are considered;
there is no deeper search.
"""

from typing import List, Optional

import numpy as np

from dropfour.debug import debug
from dropfour.utils import Owner
from dropfour.game.board import Board
from dropfour.game.rules import check_win

TIER_WIN = 0
TIER_BLOCK = 1
TIER_NEUTRAL = 2
TIER_CONCEDE = 3

TIER_NAMES = {
    TIER_WIN: "win",
    TIER_BLOCK: "block",
    TIER_NEUTRAL: "neutral",
    TIER_CONCEDE: "concede",
}


def _wins_with(board: Board, row: int, col: int, owner: Owner) -> bool:
    """Try owner's piece at an empty cell and take it back again."""
    saved_winning = board.winning.copy()
    board.place(row, col, owner)
    try:
        return check_win(board, row, col)
    finally:
        board.clear(row, col)
        board.winning[:, :] = saved_winning


def _classify(board: Board, col: int, ai_owner: Owner, opponent_owner: Owner) -> Optional[int]:
    row = board.lowest_empty_row(col)
    if row is None:
        return None

    if _wins_with(board, row, col, ai_owner):
        return TIER_WIN

    if _wins_with(board, row, col, opponent_owner):
        return TIER_BLOCK

    if row == 0:
        return TIER_NEUTRAL

    # With our piece in the landing cell, the cell above becomes the
    # opponent's landing cell on their next turn
    saved_winning = board.winning.copy()
    board.place(row, col, ai_owner)
    try:
        concedes = _wins_with(board, row - 1, col, opponent_owner)
    finally:
        board.clear(row, col)
        board.winning[:, :] = saved_winning

    return TIER_CONCEDE if concedes else TIER_NEUTRAL


def classify_columns(board: Board, ai_owner: Owner, opponent_owner: Owner) -> List[List[int]]:
    """
    Sort every playable column into the four priority tiers.

    The board is borrowed for scratch placements and handed back with the
    same owners and winning flags it had on entry.

    Args:
        board: The current board
        ai_owner: The side choosing a move
        opponent_owner: The side that replies

    Returns:
        Four lists of column indices, indexed by tier
    """
    tiers: List[List[int]] = [[], [], [], []]
    for col in range(board.cols):
        tier = _classify(board, col, ai_owner, opponent_owner)
        if tier is not None:
            tiers[tier].append(col)

    debug.trace(
        "Tiers: " + ", ".join(f"{TIER_NAMES[i]}={cols}" for i, cols in enumerate(tiers)),
        "ai")
    return tiers


def choose_column(board: Board, ai_owner: Owner, opponent_owner: Owner,
                  rng: Optional[np.random.Generator] = None) -> Optional[int]:
    """
    Choose the column for ai_owner to play.

    Args:
        board: The current board (left unchanged)
        ai_owner: The side choosing a move
        opponent_owner: The side that replies
        rng: Random generator used to break ties within a tier

    Returns:
        The chosen column, or None if every column is full
    """
    if rng is None:
        rng = np.random.default_rng()

    debug.start_timer("choose_column")
    tiers = classify_columns(board, ai_owner, opponent_owner)
    debug.end_timer("choose_column", "ai")

    for tier, columns in enumerate(tiers):
        if columns:
            col = int(rng.choice(columns))
            debug.debug(f"{ai_owner.name} picks column {col} ({TIER_NAMES[tier]})", "ai")
            return col

    debug.debug("No playable column left", "ai")
    return None
