import numpy as np
import pytest

from dropfour.utils import Owner
from dropfour.game.board import Board, CellOccupiedError


def drop(board, col, owner):
    row = board.lowest_empty_row(col)
    board.place(row, col, owner)
    return row


def test_new_board_is_empty(empty_board):
    assert empty_board.rows == 6
    assert empty_board.cols == 7
    assert empty_board.is_empty()
    assert not empty_board.is_full()
    assert empty_board.valid_columns() == list(range(7))
    assert empty_board.winning_cells() == []


def test_lowest_empty_row_follows_gravity(empty_board):
    assert empty_board.lowest_empty_row(3) == 5
    drop(empty_board, 3, Owner.PLAYER_A)
    assert empty_board.lowest_empty_row(3) == 4
    assert empty_board.lowest_empty_row(2) == 5


def test_full_column_has_no_landing_row(empty_board):
    for i in range(6):
        drop(empty_board, 0, Owner.PLAYER_A if i % 2 else Owner.PLAYER_B)
    assert empty_board.lowest_empty_row(0) is None
    assert not empty_board.is_valid_column(0)
    assert 0 not in empty_board.valid_columns()


def test_lowest_empty_row_rejects_bad_column(empty_board):
    with pytest.raises(IndexError):
        empty_board.lowest_empty_row(7)
    with pytest.raises(IndexError):
        empty_board.lowest_empty_row(-1)


def test_is_valid_column_bounds(empty_board):
    assert empty_board.is_valid_column(0)
    assert not empty_board.is_valid_column(-1)
    assert not empty_board.is_valid_column(7)


def test_drops_stack_without_gaps(empty_board):
    sequence = [3, 3, 2, 3, 6, 2, 3, 0, 3]
    for i, col in enumerate(sequence):
        drop(empty_board, col, Owner.PLAYER_A if i % 2 == 0 else Owner.PLAYER_B)

    for col in range(empty_board.cols):
        occupied = [empty_board.owner_at(r, col) != Owner.EMPTY for r in range(empty_board.rows)]
        height = sum(occupied)
        # Occupied cells form a block touching the bottom row
        assert occupied == [False] * (6 - height) + [True] * height
        assert height == sequence.count(col)


def test_place_on_occupied_cell_is_fatal(empty_board):
    empty_board.place(5, 0, Owner.PLAYER_A)
    with pytest.raises(CellOccupiedError):
        empty_board.place(5, 0, Owner.PLAYER_B)
    assert empty_board.owner_at(5, 0) == Owner.PLAYER_A


def test_place_empty_is_fatal(empty_board):
    with pytest.raises(CellOccupiedError):
        empty_board.place(5, 0, Owner.EMPTY)


def test_clear_drops_owner_and_winning_flag(empty_board):
    empty_board.place(5, 0, Owner.PLAYER_A)
    empty_board.mark_winning([(5, 0)])
    empty_board.clear(5, 0)
    assert empty_board.owner_at(5, 0) == Owner.EMPTY
    assert not empty_board.is_winning(5, 0)


def test_full_board(tie_board):
    assert tie_board.is_full()
    assert tie_board.valid_columns() == []


def test_reset_clears_everything(tie_board):
    tie_board.mark_winning([(0, 0), (1, 1)])
    tie_board.reset()
    assert tie_board.is_empty()
    assert tie_board.winning_cells() == []
    assert (tie_board.rows, tie_board.cols) == (6, 7)


def test_reset_with_new_dimensions(empty_board):
    empty_board.reset(8, 9)
    assert empty_board.grid.shape == (8, 9)
    assert empty_board.lowest_empty_row(8) == 7


def test_board_must_fit_four_in_a_row():
    with pytest.raises(ValueError):
        Board(3, 7)
    with pytest.raises(ValueError):
        Board(6, 3)


def test_from_rows_builds_position():
    board = Board.from_rows([
        "....",
        "....",
        ".B..",
        "AAB.",
    ])
    assert (board.rows, board.cols) == (4, 4)
    assert board.owner_at(3, 0) == Owner.PLAYER_A
    assert board.owner_at(2, 1) == Owner.PLAYER_B
    assert board.lowest_empty_row(1) == 1


def test_from_rows_rejects_ragged_rows():
    with pytest.raises(ValueError):
        Board.from_rows(["....", "..."])
    with pytest.raises(ValueError):
        Board.from_rows(["..Z.", "....", "....", "...."])


def test_copy_is_independent(empty_board):
    empty_board.place(5, 2, Owner.PLAYER_B)
    copy = empty_board.copy()
    copy.place(4, 2, Owner.PLAYER_A)
    assert empty_board.owner_at(4, 2) == Owner.EMPTY
    assert copy.owner_at(5, 2) == Owner.PLAYER_B


def test_get_state_returns_copy(empty_board):
    state = empty_board.get_state()
    state[5, 0] = Owner.PLAYER_A.value
    assert empty_board.owner_at(5, 0) == Owner.EMPTY
    assert state.dtype == np.int8


def test_render_shows_pieces(empty_board):
    empty_board.place(5, 0, Owner.PLAYER_A)
    empty_board.place(5, 1, Owner.PLAYER_B)
    text = empty_board.render()
    lines = text.splitlines()
    assert lines[6] == "|X O . . . . .|"
    assert lines[-1] == "|0 1 2 3 4 5 6|"
    assert str(empty_board) == text
