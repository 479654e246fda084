"""
Tic-tac-toe board utilities: winner detection, move application and parsing.
Boards are plain lists of 9 marks (row-major); every helper here treats its
input as read-only and returns fresh lists.
"""
from __future__ import annotations

from typing import List, Optional, Tuple, Union

from bmo.types import (
    BOARD_CELLS,
    EMPTY,
    MARK_SYMBOLS,
    O,
    TIE,
    VALID_MARKS,
    X,
    Board,
    CellIndex,
    Mark,
)

WIN_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),             # diags
)

_SYMBOL_TO_MARK = {"X": X, "O": O, ".": EMPTY, "_": EMPTY, "-": EMPTY, " ": EMPTY}


def new_board() -> Board:
    """Empty 3x3 board."""
    return [EMPTY] * BOARD_CELLS


def opponent(mark: Mark) -> Mark:
    return -mark


def empty_cells(board: Board) -> List[CellIndex]:
    """Indices of empty cells in scan order."""
    return [i for i, v in enumerate(board) if v == EMPTY]


def winner(board: Board) -> Optional[Mark]:
    """Return the mark owning a complete line, or None."""
    for a, b, c in WIN_LINES:
        if board[a] != EMPTY and board[a] == board[b] == board[c]:
            return board[a]
    return None


def is_full(board: Board) -> bool:
    return all(v != EMPTY for v in board)


def is_terminal(board: Board) -> bool:
    return winner(board) is not None or is_full(board)


def outcome(board: Board) -> Optional[Union[Mark, str]]:
    """X or O for a win, TIE for a full board without a line, None while in play."""
    w = winner(board)
    if w is not None:
        return w
    if is_full(board):
        return TIE
    return None


def side_to_move(board: Board) -> Mark:
    """X opens, so X moves whenever both sides have placed the same number of marks."""
    return X if board.count(X) == board.count(O) else O


def validate_board(board: Board) -> None:
    """Raise ValueError unless `board` is a well-formed, reachable-count board."""
    if not isinstance(board, (list, tuple)) or len(board) != BOARD_CELLS:
        raise ValueError(f"Board must be a sequence of {BOARD_CELLS} marks")
    if any(v not in VALID_MARKS for v in board):
        raise ValueError(f"Board marks must be one of {VALID_MARKS}")
    diff = list(board).count(X) - list(board).count(O)
    if not 0 <= diff <= 1:
        raise ValueError("X opens and turns alternate: count(X) - count(O) must be 0 or 1")


def is_legal_move(board: Board, index: CellIndex) -> bool:
    return 0 <= index < BOARD_CELLS and board[index] == EMPTY and winner(board) is None


def apply_move(board: Board, index: CellIndex, mark: Mark) -> Board:
    """Return a copy of `board` with `mark` placed at `index`."""
    if mark not in (X, O):
        raise ValueError(f"Cannot place mark {mark!r}")
    if not is_legal_move(board, index):
        raise ValueError(f"Cell {index} is not playable")
    nb: Board = list(board)
    nb[index] = mark
    return nb


def board_to_str(board: Board, show_indices: bool = False) -> str:
    """Pretty 3-row rendering; empty cells show their index when requested."""
    cells = [
        str(i) if show_indices and v == EMPTY else MARK_SYMBOLS[v]
        for i, v in enumerate(board)
    ]
    rows = [" | ".join(cells[i:i + 3]) for i in range(0, BOARD_CELLS, 3)]
    return f"\n{rows[0]}\n---------\n{rows[1]}\n---------\n{rows[2]}\n"


def parse_board(text: str) -> Board:
    """Parse a 9-character string such as "XX.OO...." into a board."""
    s = "".join(text.split()).upper()
    if len(s) != BOARD_CELLS:
        raise ValueError(f"Expected {BOARD_CELLS} cells, got {len(s)}")
    try:
        return [_SYMBOL_TO_MARK[ch] for ch in s]
    except KeyError as e:
        raise ValueError(f"Unknown cell symbol {e.args[0]!r}") from None
