"""
dropfour.game - Core game mechanics

This package contains the board representation, win detection, the
turn-based controller and the Gymnasium environment. Import the controller
and environment from their modules; they depend on dropfour.ai, which in
turn depends on the board.
"""

from dropfour.game.board import Board, CellOccupiedError
from dropfour.game.rules import check_win

__all__ = ['Board', 'CellOccupiedError', 'check_win']
