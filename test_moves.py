import pytest

from bmo.board import (
    apply_move,
    board_to_str,
    empty_cells,
    is_legal_move,
    is_terminal,
    new_board,
    outcome,
    parse_board,
    side_to_move,
    validate_board,
    winner,
)
from bmo.types import EMPTY, O, TIE, X


def test_new_board_is_empty():
    board = new_board()
    assert board == [EMPTY] * 9
    assert empty_cells(board) == list(range(9))
    assert side_to_move(board) == X


def test_parse_board_symbols():
    board = parse_board("XX. OO_ ---")
    assert board == [X, X, EMPTY, O, O, EMPTY, EMPTY, EMPTY, EMPTY]
    with pytest.raises(ValueError):
        parse_board("XXO")
    with pytest.raises(ValueError):
        parse_board("XX.OO...Z")


@pytest.mark.parametrize("text,expected", [
    ("XXXOO....", X),
    ("O..OX.OX.", O),
    ("X.O.XO..X", X),
    ("X.O.OXO.X", O),
    ("XO.X.O...", None),
])
def test_winner_lines(text, expected):
    assert winner(parse_board(text)) == expected


def test_outcome_tie_and_in_play():
    assert outcome(parse_board("XOXXOOOXX")) == TIE
    assert outcome(parse_board("XO.......")) is None
    assert is_terminal(parse_board("XOXXOOOXX"))
    assert not is_terminal(parse_board("XO......."))


def test_apply_move_returns_copy():
    board = new_board()
    nb = apply_move(board, 4, X)
    assert board == new_board()
    assert nb[4] == X
    assert side_to_move(nb) == O


def test_apply_move_rejects_illegal_cells():
    board = apply_move(new_board(), 0, X)
    with pytest.raises(ValueError):
        apply_move(board, 0, O)
    with pytest.raises(ValueError):
        apply_move(board, 9, O)
    with pytest.raises(ValueError):
        apply_move(board, 1, EMPTY)
    # No moves after a win
    won = parse_board("XXXOO....")
    assert not is_legal_move(won, 5)


@pytest.mark.parametrize("board", [
    [EMPTY] * 8,
    [EMPTY] * 8 + [2],
    parse_board("OO......."),
    parse_board("XXX......"),
])
def test_validate_board_rejects_malformed(board):
    with pytest.raises(ValueError):
        validate_board(board)


def test_board_to_str_indices():
    text = board_to_str(parse_board("X...O...."), show_indices=True)
    assert "X | 1 | 2" in text
    assert "3 | O | 5" in text
