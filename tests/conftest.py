import pytest

from dropfour.utils import Owner, HUMAN
from dropfour.game.board import Board
from dropfour.game.controller import GameController


def tie_owner(row: int, col: int) -> Owner:
    """Owner pattern that fills any board without four in a row."""
    return Owner.PLAYER_A if ((col // 2) % 2) ^ (row % 2) == 0 else Owner.PLAYER_B


@pytest.fixture
def empty_board():
    return Board(6, 7)


@pytest.fixture
def tie_board():
    board = Board(6, 7)
    for row in range(board.rows):
        for col in range(board.cols):
            board.place(row, col, tie_owner(row, col))
    return board


@pytest.fixture
def controller():
    """Controller with a fixed seed where the human is about to move."""
    game = GameController(6, 7, ai_delay=0.5, seed=1234)
    game.start_new_game(first=HUMAN)
    return game
