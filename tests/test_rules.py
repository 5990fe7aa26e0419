from dropfour.utils import Owner
from dropfour.game.board import Board
from dropfour.game.rules import check_win, find_winning_run, lines_through


def test_horizontal_four_wins_and_marks_cells(empty_board):
    for col in range(4):
        empty_board.place(3, col, Owner.PLAYER_A)

    assert check_win(empty_board, 3, 3)
    assert sorted(empty_board.winning_cells()) == [(3, 0), (3, 1), (3, 2), (3, 3)]
    for col in range(4):
        assert empty_board.is_winning(3, col)


def test_three_in_a_row_is_not_a_win(empty_board):
    for col in range(3):
        empty_board.place(3, col, Owner.PLAYER_A)

    assert not check_win(empty_board, 3, 2)
    assert empty_board.winning_cells() == []


def test_vertical_win():
    board = Board.from_rows([
        ".......",
        ".......",
        "....B..",
        "....B..",
        "....B..",
        "A.A.B..",
    ])
    assert check_win(board, 2, 4)
    assert sorted(board.winning_cells()) == [(2, 4), (3, 4), (4, 4), (5, 4)]


def test_diagonal_down_right_win():
    board = Board.from_rows([
        ".......",
        ".......",
        "A......",
        "BA.....",
        "BBA....",
        "BBBA...",
    ])
    assert check_win(board, 5, 3)
    assert sorted(board.winning_cells()) == [(2, 0), (3, 1), (4, 2), (5, 3)]


def test_diagonal_up_right_win():
    board = Board.from_rows([
        ".......",
        ".......",
        "......B",
        ".....BA",
        "....BAA",
        "...BAAA",
    ])
    assert check_win(board, 2, 6)
    assert sorted(board.winning_cells()) == [(2, 6), (3, 5), (4, 4), (5, 3)]


def test_other_owner_breaks_run():
    board = Board.from_rows([
        ".......",
        ".......",
        ".......",
        ".......",
        ".......",
        "AABAAA.",
    ])
    assert not check_win(board, 5, 5)


def test_empty_cell_breaks_run():
    board = Board.from_rows([
        ".......",
        ".......",
        ".......",
        ".......",
        ".......",
        "AA.AA..",
    ])
    assert not check_win(board, 5, 4)


def test_five_in_a_row_marks_first_four():
    board = Board.from_rows([
        ".......",
        ".......",
        ".......",
        ".......",
        ".......",
        "BBBBB..",
    ])
    assert check_win(board, 5, 4)
    assert sorted(board.winning_cells()) == [(5, 0), (5, 1), (5, 2), (5, 3)]


def test_check_through_empty_line_is_false(empty_board):
    assert not check_win(empty_board, 0, 0)


def test_find_winning_run_does_not_mark(empty_board):
    for row in range(2, 6):
        empty_board.place(row, 6, Owner.PLAYER_B)

    run = find_winning_run(empty_board, 2, 6)
    assert sorted(run) == [(2, 6), (3, 6), (4, 6), (5, 6)]
    assert empty_board.winning_cells() == []


def test_lines_through_order_and_contents():
    diagonal_left, diagonal_right, horizontal, vertical = lines_through(6, 7, 2, 3)

    assert diagonal_left == [(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 6)]
    assert diagonal_right == [(0, 5), (1, 4), (2, 3), (3, 2), (4, 1), (5, 0)]
    assert horizontal == [(2, c) for c in range(7)]
    assert vertical == [(r, 3) for r in range(6)]


def test_works_on_larger_boards():
    board = Board(8, 10)
    for i in range(4):
        board.place(7 - i, 6 + i, Owner.PLAYER_A)
    assert check_win(board, 4, 9)
