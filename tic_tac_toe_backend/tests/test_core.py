"""Tests for the board rules."""

import random

import pytest

from tictactoe import core
from tictactoe.models import MoveRecord


def _board(text):
    return [None if c == '.' else c for c in text.replace(" ", "")]


@pytest.mark.parametrize("line", core.LINES)
def test_winner_detects_every_line(line):
    for mark in ('X', 'O'):
        board = core.empty_board()
        for index in line:
            board[index] = mark
        assert core.winner(board) == mark
        assert core.winning_line(board) == line


def test_winner_on_full_board_without_line_is_draw():
    board = _board("XOX XOO OXX")
    assert core.winner(board) == 'draw'
    assert core.winning_line(board) is None


def test_winner_on_open_board_is_none():
    assert core.winner(core.empty_board()) is None
    assert core.winner(_board("XO. .X. ..O")) is None


def test_diagonal_completed_by_third_x():
    board = core.replay([('X', 0), ('O', 1), ('X', 4), ('O', 2)])
    assert core.winner(board) is None
    board = core.make_move(board, 8, 'X')
    assert core.winner(board) == 'X'
    assert core.winning_line(board) == (0, 4, 8)


def test_make_move_returns_new_board():
    board = core.empty_board()
    new_board = core.make_move(board, 4, 'X')
    assert board[4] is None
    assert new_board[4] == 'X'


def test_is_valid_move():
    board = _board("X.. ... ...")
    assert core.is_valid_move(board, 1)
    assert not core.is_valid_move(board, 0)
    assert not core.is_valid_move(board, -1)
    assert not core.is_valid_move(board, 9)


def test_threats_finds_open_two_in_a_rows():
    board = _board("XX. ... .OO")
    assert core.threats(board, 'X') == {2}
    assert core.threats(board, 'O') == {6}


def test_threats_ignores_blocked_lines():
    board = _board("XXO ... ...")
    assert core.threats(board, 'X') == set()


def _random_boards(count, seed=3):
    rng = random.Random(seed)
    for _ in range(count):
        board = core.empty_board()
        mark = 'X'
        for _ in range(rng.randint(0, 8)):
            if core.winner(board) is not None:
                break
            board[rng.choice(core.empty_cells(board))] = mark
            mark = core.next_turn(mark)
        if core.winner(board) is None:
            yield board


def test_threat_cells_are_empty_and_complete_a_win():
    for board in _random_boards(300):
        for mark in ('X', 'O'):
            for index in core.threats(board, mark):
                assert board[index] is None
                assert core.winner(core.make_move(board, index, mark)) == mark


def test_side_to_move():
    assert core.side_to_move(core.empty_board()) == 'X'
    assert core.side_to_move(_board("X.. ... ...")) == 'O'
    assert core.side_to_move(_board("XO. ... ...")) == 'X'


def test_replay_accepts_move_records():
    moves = [MoveRecord(mark='X', index=4), MoveRecord(mark='O', index=0)]
    assert core.replay(moves) == _board("O.. .X. ...")


def test_cell_label():
    assert core.cell_label(0) == "A1"
    assert core.cell_label(5) == "B3"
    assert core.cell_label(8) == "C3"
