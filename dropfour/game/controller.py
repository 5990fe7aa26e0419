"""
controller.py - Turn-based state machine for a human vs computer game

The controller owns the Board and the GameState. A driver loop (terminal,
canvas, Gymnasium environment) feeds it move requests and elapsed time, and
reads the board and state back to draw them. Moves that arrive at the wrong
moment are dropped silently.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Dict, Optional, Tuple

import numpy as np

from dropfour.debug import debug
from dropfour.utils import ROWS, COLS, AI_DELAY, Owner, HUMAN, COMPUTER
from dropfour.game.board import Board
from dropfour.game.rules import check_win
from dropfour.ai.heuristic import choose_column


class Phase(Enum):
    """Which state of the game machine we are in."""
    AWAITING_MOVE = auto()
    AI_THINKING = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Everything about the current game except the board itself."""
    current_turn: Owner
    phase: Phase = Phase.AWAITING_MOVE
    is_over: bool = False
    is_tied: bool = False
    winner: Optional[Owner] = None
    pending_ai_delay: float = 0.0
    ai_column: Optional[int] = None
    moves_made: int = 0


class GameController:
    """
    Runs a game of the human (player A) against the heuristic (player B).

    Args:
        rows: Board height
        cols: Board width
        ai_delay: Seconds the computer waits before dropping its piece
        seed: Seed for a fresh random generator (ignored if rng is given)
        rng: Random generator for the coin flip and the computer's tie breaks
    """

    def __init__(self, rows: int = ROWS, cols: int = COLS, ai_delay: float = AI_DELAY,
                 seed: Optional[int] = None, rng: Optional[np.random.Generator] = None):
        if ai_delay < 0:
            raise ValueError(f"ai_delay must not be negative, got {ai_delay}")

        debug.debug("Initializing GameController", "game")
        self.board = Board(rows, cols)
        self.ai_delay = ai_delay
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.human = HUMAN
        self.computer = COMPUTER
        self.highlight: Optional[Tuple[int, int, Owner]] = None
        self.state = GameState(current_turn=self.human)
        self.start_new_game()

    # Inputs

    def start_new_game(self, first: Optional[Owner] = None) -> None:
        """
        Throw away the current game and start another one.

        Args:
            first: Side that moves first; a coin flip decides when None
        """
        if first is None:
            first = self.human if self.rng.random() < 0.5 else self.computer

        self.board.reset()
        self.highlight = None
        self.state = GameState(current_turn=first)
        debug.info(f"New game, {first.name} moves first", "game")

        if first == self.computer:
            self._begin_ai_turn()

    def request_move(self, column: int) -> bool:
        """
        Drop the human's piece into column.

        Returns:
            True if the piece was placed; False if the request was ignored
            (not the human's turn, game over, column full or off the board)
        """
        if self.state.phase != Phase.AWAITING_MOVE or self.state.current_turn != self.human:
            debug.debug(f"Ignoring move in column {column}: not the human's turn", "game")
            return False

        if not self.board.is_valid_column(column):
            debug.debug(f"Ignoring move in column {column}: column unavailable", "game")
            return False

        self._play(column)
        return True

    def hover(self, column: Optional[int]) -> None:
        """Highlight where the human's piece would land in column."""
        if self.state.phase != Phase.AWAITING_MOVE or self.state.current_turn != self.human:
            return

        if column is None or not self.board.is_valid_column(column):
            self.highlight = None
            return

        self.highlight = (self.board.lowest_empty_row(column), column, self.human)

    def advance_time(self, delta_seconds: float) -> bool:
        """
        Let delta_seconds pass; called once per frame by the driver.

        Returns:
            True if the computer dropped its piece during this call
        """
        if self.state.phase != Phase.AI_THINKING:
            return False

        self.state.pending_ai_delay -= max(delta_seconds, 0.0)
        if self.state.pending_ai_delay > 0:
            return False

        self.state.pending_ai_delay = 0.0
        self._play(self.state.ai_column)
        return True

    def skip_delay(self) -> bool:
        """Commit the computer's pending move right away."""
        if self.state.phase != Phase.AI_THINKING:
            return False
        return self.advance_time(self.state.pending_ai_delay)

    # Transitions

    def _begin_ai_turn(self) -> None:
        column = choose_column(self.board, self.computer, self.human, self.rng)
        if column is None:
            # Unreachable while full boards end the game as a tie
            raise RuntimeError("Computer has no playable column")

        self.state.phase = Phase.AI_THINKING
        self.state.ai_column = column
        self.state.pending_ai_delay = self.ai_delay
        self.highlight = (self.board.lowest_empty_row(column), column, self.computer)
        debug.debug(f"Computer will play column {column} in {self.ai_delay}s", "game")

    def _play(self, column: int) -> None:
        player = self.state.current_turn
        row = self.board.lowest_empty_row(column)
        self.highlight = None
        self.board.place(row, column, player)
        self.state.moves_made += 1
        self.state.ai_column = None
        debug.debug(f"{player.name} plays column {column} (row {row})", "game")

        if check_win(self.board, row, column):
            self._finish(winner=player)
        elif self.board.is_full():
            self._finish(winner=None)
        else:
            self.state.current_turn = player.other()
            self.state.phase = Phase.AWAITING_MOVE
            if self.state.current_turn == self.computer:
                self._begin_ai_turn()

    def _finish(self, winner: Optional[Owner]) -> None:
        self.state.phase = Phase.GAME_OVER
        self.state.is_over = True
        self.state.is_tied = winner is None
        self.state.winner = winner
        self.state.pending_ai_delay = 0.0
        if winner is None:
            debug.info("Game ends in a draw", "game")
        else:
            debug.info(f"{winner.name} wins after {self.state.moves_made} moves", "game")

    # Outputs read by the renderer

    @property
    def rows(self) -> int:
        return self.board.rows

    @property
    def cols(self) -> int:
        return self.board.cols

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def current_turn(self) -> Owner:
        return self.state.current_turn

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def is_tied(self) -> bool:
        return self.state.is_tied

    @property
    def winner(self) -> Optional[Owner]:
        return self.state.winner

    def owner_at(self, row: int, col: int) -> Owner:
        return self.board.owner_at(row, col)

    def is_winning(self, row: int, col: int) -> bool:
        return self.board.is_winning(row, col)

    def highlight_at(self, row: int, col: int) -> Optional[Owner]:
        """Owner the cell is highlighted for, or None."""
        if self.highlight is None:
            return None
        h_row, h_col, owner = self.highlight
        return owner if (h_row, h_col) == (row, col) else None

    def get_info(self) -> Dict[str, Any]:
        """Summary of the game for drivers and logs."""
        return {
            'phase': self.state.phase.name,
            'current_player': self.state.current_turn.value,
            'is_over': self.state.is_over,
            'is_tied': self.state.is_tied,
            'winner': self.state.winner.value if self.state.winner else None,
            'valid_moves': self.board.valid_columns(),
            'moves_made': self.state.moves_made,
            'winning_line': self.board.winning_cells(),
            'pending_ai_delay': self.state.pending_ai_delay,
            'ai_column': self.state.ai_column,
        }

    def render(self) -> str:
        return self.board.render()
